"""Domain layer: layer model, group tags, and pure scan rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

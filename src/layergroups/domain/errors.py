"""Domain exceptions."""

from __future__ import annotations


class InvalidAnchorError(ValueError):
    """Raised when an explicit anchor is not a layer of the target group."""

    def __init__(self, group_id: str, before_id: str) -> None:
        self.group_id = group_id
        self.before_id = before_id
        super().__init__(
            f"before_id {before_id!r} must be the id of a layer within group {group_id!r}"
        )

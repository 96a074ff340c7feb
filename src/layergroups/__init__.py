"""layergroups: virtual layer groups over an ordered layer stack."""

from __future__ import annotations

__version__ = "0.1.0"

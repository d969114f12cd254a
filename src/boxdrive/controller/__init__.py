"""Internal controller exports for boxdrive."""

from __future__ import annotations

from .box_controller import BoxController

__all__ = ["BoxController"]

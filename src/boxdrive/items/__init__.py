"""Public item exports for boxdrive."""

from __future__ import annotations

from .criteria import NOT_APPLICABLE, criterion_matches, item_matches
from .file import File
from .folder import Folder
from .item import Item

__all__ = [
    "Item",
    "Folder",
    "File",
    "NOT_APPLICABLE",
    "criterion_matches",
    "item_matches",
]

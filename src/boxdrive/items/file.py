"""File: leaf item."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from .item import Item

if TYPE_CHECKING:
    from .folder import Folder


class File(Item):
    """A file stored on Box. Its name is sent as `file_name`."""

    TYPE = "file"
    TYPES = "files"
    NAME_KEY = "file_name"

    def copy(self, destination: Folder) -> None:
        """Copy this file into destination (its file list is invalidated)."""
        self._controller.copy_item(self.TYPE, self._id, destination.id)
        destination.delete_info(self.TYPES)

    def _get_info(self) -> Mapping[str, Any]:
        return self._controller.get_file_info(self._id)

"""Item: cached wrapper around one remote Box object."""

from __future__ import annotations

import abc
import logging
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Optional

from boxdrive.errors import InvalidArgumentError, MalformedResponseError
from boxdrive.util.time import from_epoch

from .criteria import NOT_APPLICABLE

if TYPE_CHECKING:
    from boxdrive.controller import BoxController

    from .folder import Folder

logger = logging.getLogger(__name__)


class Item(abc.ABC):
    """
    Base class of Folder and File.

    An item owns a snapshot of its attributes and a `cached_info` flag:
        - built from a response fragment, the snapshot is complete and cached;
        - built from an id alone (placeholder), nothing is cached and the
          first read fetches from the API.

    The parent reference is for navigation only; the parent folder owns its
    children.
    """

    TYPE: ClassVar[str] = ""
    # Name of the collection holding this kind of item in a parent folder.
    TYPES: ClassVar[str] = ""
    # Snapshot key holding the item's name.
    NAME_KEY: ClassVar[str] = "name"

    # Computed names readable through read_attribute besides the snapshot
    # keys. Snapshot-backed properties (description, created, updated) are
    # read from the snapshot instead.
    PROPERTIES: ClassVar[frozenset[str]] = frozenset({"id", "type", "name", "path"})

    def __init__(
        self,
        controller: BoxController,
        parent: Optional[Folder] = None,
        info: Optional[Mapping[str, Any]] = None,
    ) -> None:
        info = dict(info or {})
        if info.get("id") is None:
            raise InvalidArgumentError(f"{type(self).__name__} requires an id")

        self._controller = controller
        self._parent = parent
        self._id = str(info["id"])
        self._data: dict[str, Any] = {"id": self._id}
        self._cached_info = False

        if set(info) - {"id"}:
            self.update_info(info)

    def __repr__(self) -> str:
        name = self._data.get(self.NAME_KEY, self._data.get("name"))
        return f"{type(self).__name__}(id={self._id!r}, name={name!r})"

    # ----------------------------
    # Identity / navigation
    # ----------------------------
    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self.TYPE

    @property
    def parent(self) -> Optional[Folder]:
        return self._parent

    @property
    def controller(self) -> BoxController:
        return self._controller

    @property
    def cached_info(self) -> bool:
        return self._cached_info

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Read-only view of the current snapshot (no fetch)."""
        return MappingProxyType(self._data)

    # ----------------------------
    # Attribute reads
    # ----------------------------
    def read_attribute(self, key: str) -> Any:
        """
        Return an attribute value, or NOT_APPLICABLE if this item has none.

        Readable names are PROPERTIES plus the snapshot keys. An uncached
        item is fetched before its snapshot is consulted.
        """
        if key in self.PROPERTIES:
            return getattr(self, key)
        return self._snapshot_value(key)

    def _snapshot_value(self, key: str) -> Any:
        if key not in self._data and not self._cached_info:
            self.info()
        return self._data.get(key, NOT_APPLICABLE)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.read_attribute(key)
        return default if value is NOT_APPLICABLE else value

    def __getitem__(self, key: str) -> Any:
        value = self.read_attribute(key)
        if value is NOT_APPLICABLE:
            raise KeyError(key)
        return value

    @property
    def name(self) -> Optional[str]:
        if self.NAME_KEY not in self._data and "name" not in self._data and not self._cached_info:
            self.info()
        value = self._data.get(self.NAME_KEY)
        return value if value is not None else self._data.get("name")

    @property
    def path(self) -> str:
        """Slash-separated path from the root folder ("/" for the root)."""
        if self._parent is None:
            return "/"
        return f"{self._parent.path.rstrip('/')}/{self.name or ''}"

    @property
    def description(self) -> Optional[str]:
        value = self._snapshot_value("description")
        return None if value is NOT_APPLICABLE else value

    @property
    def created(self) -> Optional[datetime]:
        return from_epoch(self._snapshot_value("created"))

    @property
    def updated(self) -> Optional[datetime]:
        return from_epoch(self._snapshot_value("updated"))

    # ----------------------------
    # Cache lifecycle
    # ----------------------------
    def info(self, refresh: bool = False) -> Item:
        """
        Fetch this item's attributes unless a cached copy exists.

        Args:
            refresh: Ignore the cached copy and fetch again.

        Returns:
            self

        Raises:
            BoxError: whatever the API call raises, unchanged.
        """
        if self._cached_info and not refresh:
            return self

        logger.debug("Fetching info for %s %s", self.TYPE, self._id)
        info = self._get_info()

        self.clear_info()
        self.update_info(info)
        return self

    def clear_info(self) -> None:
        """Drop the snapshot; the next read fetches again."""
        self._cached_info = False
        self._data = {"id": self._id}

    def force_mark_cached(self) -> None:
        """Consider the snapshot complete without an API call."""
        self._cached_info = True

    def update_info(self, info: Mapping[str, Any]) -> None:
        """Merge a freshly received snapshot and mark the item cached."""
        for key, value in info.items():
            key = str(key)
            if key == "id" and str(value) != self._id:
                raise MalformedResponseError(
                    "Snapshot id does not match item id",
                    details={"item_id": self._id, "snapshot_id": value},
                )
            self._data[key] = self._id if key == "id" else value
        self._cached_info = True

    def delete_info(self, category: str) -> None:
        """Invalidate one snapshot entry (e.g. a child collection)."""
        logger.debug("Invalidating %s of %s %s", category, self.TYPE, self._id)
        self._cached_info = False
        self._data.pop(category, None)

    @abc.abstractmethod
    def _get_info(self) -> Mapping[str, Any]:
        """Fetch this item's snapshot from the API."""

    # ----------------------------
    # Mutations
    # ----------------------------
    def rename(self, new_name: str) -> Item:
        if not new_name:
            raise InvalidArgumentError("new_name must be a non-empty string")

        self._controller.rename_item(self.TYPE, self._id, new_name)
        self._data[self.NAME_KEY] = new_name
        return self

    def move(self, destination: Folder) -> Item:
        """Move into destination; both parents' collections are invalidated."""
        self._controller.move_item(self.TYPE, self._id, destination.id)

        if self._parent is not None:
            self._parent.delete_info(self.TYPES)
        destination.delete_info(self.TYPES)
        self._parent = destination
        return self

    def delete(self) -> None:
        self._controller.delete_item(self.TYPE, self._id)

        if self._parent is not None:
            self._parent.delete_info(self.TYPES)

    def set_description(self, description: str) -> Item:
        self._controller.set_description(self.TYPE, self._id, description)
        self._data["description"] = description
        return self

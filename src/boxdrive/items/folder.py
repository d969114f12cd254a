"""Folder: item owning ordered collections of sub folders and files."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional, Sequence

from boxdrive.errors import (
    InvalidArgumentError,
    InvalidFolderError,
    MalformedResponseError,
)

from .criteria import item_matches
from .file import File
from .item import Item

if TYPE_CHECKING:
    from boxdrive.controller import BoxController

logger = logging.getLogger(__name__)

_FOLDERS = "folders"
_FILES = "files"


class Folder(Item):
    """
    A folder stored on Box.

    Children are kept per collection ("folders", "files"). A collection that
    is not loaded (fresh placeholder, child built from a one-level listing,
    or invalidated by delete_info) is fetched on first access.

    `cached_tree` means this folder and every descendant folder are loaded,
    so nothing below needs another API call.
    """

    TYPE = "folder"
    TYPES = "folders"

    def __init__(
        self,
        controller: BoxController,
        parent: Optional[Folder] = None,
        info: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._subitems: dict[str, list[Item]] = {}
        self._cached_tree = False
        super().__init__(controller, parent, info)

    @property
    def cached_tree(self) -> bool:
        return self._cached_tree

    @property
    def subfolders(self) -> list[Folder]:
        return list(self._collection(_FOLDERS))  # type: ignore[arg-type]

    @property
    def subfiles(self) -> list[File]:
        return list(self._collection(_FILES))  # type: ignore[arg-type]

    # ----------------------------
    # Fetching
    # ----------------------------
    def info(self, refresh: bool = False) -> Folder:
        """
        Fetch this folder and its direct children (one level deep).

        Use tree() to fetch deeper than that.
        """
        if self._cached_info and not refresh:
            return self

        super().info(refresh=True)
        self._subitems.setdefault(_FOLDERS, [])
        self._subitems.setdefault(_FILES, [])
        return self

    def tree(self, refresh: bool = False) -> Folder:
        """
        Fetch the whole subtree in a single call.

        Note:
            One tree() call can be slow for large folders; several info()
            calls may be cheaper when only part of the tree is needed.

        Args:
            refresh: Ignore the cached tree and fetch again.

        Returns:
            self
        """
        if self._cached_tree and not refresh:
            return self

        logger.debug("Fetching tree for folder %s", self._id)
        data = self._controller.fetch_whole_tree(self._id)

        self.clear_info()
        self.update_info(data)
        self.force_cached_tree()
        return self

    def force_cached_tree(self) -> None:
        """Mark this folder and every descendant as fully loaded."""
        seen: set[str] = set()
        stack: list[Folder] = [self]

        while stack:
            folder = stack.pop()
            if folder.id in seen:
                raise MalformedResponseError(
                    "Folder tree is cyclic",
                    details={"folder_id": folder.id},
                )
            seen.add(folder.id)

            folder._cached_info = True
            folder._cached_tree = True
            folder._subitems.setdefault(_FOLDERS, [])
            folder._subitems.setdefault(_FILES, [])

            for f in folder._subitems[_FILES]:
                f.force_mark_cached()
            stack.extend(folder._subitems[_FOLDERS])  # type: ignore[arg-type]

    def clear_info(self) -> None:
        self._invalidate_tree()
        self._subitems = {}
        super().clear_info()

    def update_info(self, info: Mapping[str, Any]) -> None:
        """Merge a snapshot; `folders`/`files` entries rebuild the children."""
        info = dict(info)
        folders = info.pop(_FOLDERS, None)
        files = info.pop(_FILES, None)

        if folders is not None:
            self._subitems[_FOLDERS] = self._build_children(folders, Folder)
        if files is not None:
            self._subitems[_FILES] = self._build_children(files, File)

        super().update_info(info)

    def delete_info(self, category: str) -> None:
        self._invalidate_tree()
        self._subitems.pop(category, None)
        super().delete_info(category)

    def _invalidate_tree(self) -> None:
        # an ancestor's tree is no longer fully loaded either
        folder: Optional[Folder] = self
        while folder is not None:
            folder._cached_tree = False
            folder = folder.parent

    def _get_info(self) -> Mapping[str, Any]:
        return self._controller.fetch_one_level(self._id)

    def _collection(self, category: str) -> list[Item]:
        if category not in self._subitems:
            self.info(refresh=True)
        return self._subitems[category]

    def _build_children(self, entries: Iterable[Any], item_class: type[Item]) -> list[Item]:
        ancestor_ids = self._ancestor_ids() if item_class is Folder else set()

        items: list[Item] = []
        for entry in entries:
            if not isinstance(entry, Mapping):
                raise MalformedResponseError(
                    f"{item_class.TYPE} entry must be a mapping",
                    details={"folder_id": self._id},
                )
            if entry.get("id") is None:
                raise MalformedResponseError(
                    f"{item_class.TYPE} entry has no id",
                    details={"folder_id": self._id},
                )
            if str(entry.get("id")) in ancestor_ids:
                raise MalformedResponseError(
                    "Folder tree is cyclic",
                    details={"folder_id": self._id, "child_id": entry.get("id")},
                )
            items.append(item_class(self._controller, self, entry))
        return items

    def _ancestor_ids(self) -> set[str]:
        ids: set[str] = set()
        current: Optional[Folder] = self
        while current is not None and current.id not in ids:
            ids.add(current.id)
            current = current.parent
        return ids

    # ----------------------------
    # Mutations
    # ----------------------------
    def create(self, name: str, shared: bool = False) -> Folder:
        """
        Create a sub folder.

        The cached folder list is invalidated rather than extended, so the
        next read fetches the listing again.
        """
        info = self._controller.create_folder(self._id, name, shared)
        self.delete_info(_FOLDERS)
        return Folder(self._controller, self, info)

    def upload(self, path: str) -> File:
        """Upload a local file into this folder."""
        info = self._controller.upload_file(path, self._id)
        self.delete_info(_FILES)
        return File(self._controller, self, info)

    # ----------------------------
    # Search
    # ----------------------------
    def find(self, criteria: Mapping[str, Any], recursive: bool = False) -> list[Item]:
        """
        Find sub items matching every criterion.

        Each key is read as an attribute of each sub item (see
        Item.read_attribute); an item lacking the attribute does not match.

        Note:
            recursive=True calls tree() first, which can be slow for large
            folders.

        Returns:
            Direct matches (files, then folders) followed by the matches of
            each sub folder, depth-first.

        Example:
            folder.find({"type": "file", "name": re.compile(r"\\.pdf$")}, recursive=True)
        """
        if not isinstance(criteria, Mapping):
            raise InvalidArgumentError("criteria must be a mapping")

        if recursive:
            self.tree()

        return self._find(criteria, recursive)

    def _find(self, criteria: Mapping[str, Any], recursive: bool) -> list[Item]:
        matches: list[Item] = [
            item
            for item in (*self.subfiles, *self.subfolders)
            if item_matches(item, criteria)
        ]

        if recursive:
            for folder in self.subfolders:
                matches.extend(folder._find(criteria, recursive))

        return matches

    def at(self, target_path: str) -> Optional[Item]:
        """
        Get the item at a unix-style path.

        "/" starts at the root folder and "." is the current position. Every
        ".." is the parent of this folder (the one at() is called on), not of
        the position reached so far. A trailing "/" requires the result to be
        a folder.

        Returns:
            The item, or None if nothing exists at that path.

        Example:
            folder.at("/box/is/awesome")
            folder.at("../other/file.pdf")
        """
        current: Optional[Item] = self

        if target_path.startswith("/"):
            while current.parent is not None:
                current = current.parent

        for target_name in target_path.split("/"):
            if target_name in ("", "."):
                continue
            if target_name == "..":
                current = self.parent
                continue

            if not isinstance(current, Folder):
                return None
            found = current.find({"name": target_name})
            current = found[0] if found else None

        if current is not None and target_path.endswith("/") and not isinstance(current, Folder):
            parent = current.parent
            if parent is None:
                return None
            found = parent.find({"type": Folder.TYPE, "name": current.name})
            current = found[0] if found else None

        return current

    def traverse(self, path_segments: Sequence[str], create: bool = False) -> Folder:
        """
        Walk sub folder names from this folder.

        Args:
            path_segments: Folder names, outermost first.
            create: Create missing folders instead of failing.

        Raises:
            InvalidFolderError: if a folder is missing and create is False.
        """
        folder = self
        for name in path_segments:
            found = folder.find({"type": Folder.TYPE, "name": name})
            next_folder = found[0] if found else None

            if next_folder is None and create:
                next_folder = folder.create(name)
            if next_folder is None:
                raise InvalidFolderError(
                    f"Folder not found: {name}",
                    details={"parent_id": folder.id, "name": name},
                )
            folder = next_folder  # type: ignore[assignment]
        return folder

    # ----------------------------
    # Collaborations
    # ----------------------------
    def get_collaborations(self) -> list[dict[str, Any]]:
        return self._controller.get_collaborations(self._id)

    def is_collaborator(self, user_id: str) -> bool:
        return str(user_id) in {str(c.get("user_id")) for c in self.get_collaborations()}

    def invite_collaborator(
        self,
        user_id: str,
        role: str,
        *,
        email: Optional[str] = None,
    ) -> dict[str, Any]:
        return self.invite_collaborators(
            [user_id],
            role,
            emails=[email] if email else (),
        )

    def invite_collaborators(
        self,
        user_ids: Sequence[str],
        role: str,
        *,
        emails: Sequence[str] = (),
        resend_invite: bool = False,
        no_email: bool = False,
    ) -> dict[str, Any]:
        return self._controller.invite_collaborators(
            self._id,
            role,
            user_ids=[str(u) for u in user_ids],
            emails=list(emails),
            resend_invite=resend_invite,
            no_email=no_email,
        )

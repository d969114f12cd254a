"""BoxAccount: entry point to an authorized Box account."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional

from boxdrive.auth import AuthInfo
from boxdrive.controller import BoxController
from boxdrive.controller.fields import DEFAULT_BASE_URL, DEFAULT_UPLOAD_URL
from boxdrive.errors import (
    InvalidArgumentError,
    InvalidInputError,
    InvalidStateError,
    NotAuthorizedError,
)
from boxdrive.items import File, Folder

logger = logging.getLogger(__name__)


class BoxAccount:
    """
    High-level access to one Box account.

    Account details are exposed as an explicit mapping (`get`, `keys`,
    `account["login"]`) built from the server snapshot.
    """

    ROOT_FOLDER_ID: str = "0"

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        base_url: str = DEFAULT_BASE_URL,
        upload_url: str = DEFAULT_UPLOAD_URL,
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self._controller = BoxController(
            auth_info,
            base_url=base_url,
            upload_url=upload_url,
            timeout=timeout,
            max_retries=max_retries,
        )
        self._info: Optional[dict[str, Any]] = None
        self._root: Optional[Folder] = None

    @classmethod
    def from_controller(cls, controller: BoxController) -> "BoxAccount":
        """Create account with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._info = None
        obj._root = None
        return obj

    @property
    def controller(self) -> BoxController:
        return self._controller

    @property
    def auth_token(self) -> Optional[str]:
        return self._controller.auth_info.auth_token

    @property
    def authorized(self) -> bool:
        return self._info is not None

    # ----------------------------
    # Authorization
    # ----------------------------
    def authorize(self, auth_token: str) -> bool:
        """
        Use an existing auth token and check it by fetching account info.

        Returns:
            Whether the token was accepted.
        """
        if not auth_token:
            raise InvalidArgumentError("auth_token must be a non-empty string")

        self._controller.set_auth_token(auth_token)
        self.info(refresh=True)
        return self.authorized

    def logout(self) -> bool:
        """Invalidate the auth token on the server and forget it locally."""
        try:
            self._controller.logout()
        except NotAuthorizedError:
            logger.info("Logout: account was not logged in")

        self._controller.set_auth_token(None)
        self._info = None
        return True

    # ----------------------------
    # Account details
    # ----------------------------
    def info(self, refresh: bool = False) -> Optional[Mapping[str, Any]]:
        """
        Return the account details, fetching them if needed.

        Returns:
            Read-only mapping of the account snapshot, or None if the account
            is not authorized.
        """
        if self._info is not None and not refresh:
            return MappingProxyType(self._info)

        self._info = None
        try:
            self._info = self._controller.get_account_info()
        except (NotAuthorizedError, InvalidInputError) as exc:
            logger.info("Account is not authorized: %s", exc)
            return None

        return MappingProxyType(self._info)

    def keys(self) -> tuple[str, ...]:
        info = self.info()
        return tuple(info.keys()) if info is not None else ()

    def get(self, key: str, default: Any = None) -> Any:
        info = self.info()
        if info is None:
            return default
        return info.get(key, default)

    def __getitem__(self, key: str) -> Any:
        info = self.info()
        if info is None:
            raise InvalidStateError("Account is not authorized")
        return info[key]

    def __contains__(self, key: object) -> bool:
        info = self.info()
        return info is not None and key in info

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # ----------------------------
    # Items
    # ----------------------------
    @property
    def root(self) -> Folder:
        """The root folder; lazily loaded on first read."""
        if self._root is None:
            self._root = self.folder(self.ROOT_FOLDER_ID)
        return self._root

    def folder(self, folder_id: str) -> Folder:
        """
        Folder placeholder for an id.

        Note:
            The folder does not know its parent. Use
            root.find({"type": "folder", "id": folder_id}, recursive=True)
            when the tree above it is needed.
        """
        return Folder(self._controller, None, {"id": folder_id})

    def file(self, file_id: str) -> File:
        """File placeholder for an id (see folder())."""
        return File(self._controller, None, {"id": file_id})

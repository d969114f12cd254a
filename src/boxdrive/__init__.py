"""boxdrive public API."""

from __future__ import annotations

from boxdrive.account import BoxAccount
from boxdrive.auth import AuthInfo
from boxdrive.controller import BoxController
from boxdrive.errors import (
    BoxError,
    BoxStatusError,
    ErrorKind,
    HttpStatusError,
    InvalidArgumentError,
    InvalidFolderError,
    InvalidStateError,
    MalformedResponseError,
    NetworkError,
    NotAuthorizedError,
    UnknownResponseError,
    classify,
    map_status_error,
)
from boxdrive.items import NOT_APPLICABLE, File, Folder, Item

__all__ = [
    # High-level
    "BoxAccount",
    "BoxController",
    # Auth
    "AuthInfo",
    # Items
    "Item",
    "Folder",
    "File",
    "NOT_APPLICABLE",
    # Errors
    "BoxError",
    "BoxStatusError",
    "ErrorKind",
    "classify",
    "map_status_error",
    "InvalidArgumentError",
    "InvalidStateError",
    "InvalidFolderError",
    "NotAuthorizedError",
    "NetworkError",
    "HttpStatusError",
    "UnknownResponseError",
    "MalformedResponseError",
]

"""Exception hierarchy and status-string mapping for boxdrive."""

from __future__ import annotations

import enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class BoxError(Exception):
    """
    Base exception for boxdrive.

    Attributes:
        details: Optional structured information (e.g., status, action).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidArgumentError(BoxError):
    """Raised when arguments passed by the caller are invalid."""


class InvalidStateError(BoxError):
    """Raised when the library is used in an invalid state (e.g., no auth token)."""


class NetworkError(BoxError):
    """Raised when network/timeout issues prevent the request."""


class HttpStatusError(BoxError):
    """Raised when the service answers with a non-2xx HTTP status."""


class UnknownResponseError(BoxError):
    """Raised when a response carries no status or cannot be parsed."""


class MalformedResponseError(BoxError):
    """Raised when response data is structurally invalid (e.g., a cyclic tree)."""


class ErrorKind(enum.Enum):
    """Closed set of failure categories reported by the Box API."""

    RESTRICTED = "Restricted"
    INVALID_INPUT = "InvalidInput"
    NOT_AUTHORIZED = "NotAuthorized"
    NO_ACCESS = "NoAccess"
    EMAIL_INVALID = "EmailInvalid"
    EMAIL_TAKEN = "EmailTaken"
    GENERIC = "Generic"
    INVALID_ITEM = "InvalidItem"
    INVALID_FOLDER = "InvalidFolder"
    NO_PARENT = "NoParent"
    INVALID_NAME = "InvalidName"
    NAME_TAKEN = "NameTaken"
    UPLOAD_FAILED = "UploadFailed"
    ACCOUNT_EXCEEDED = "AccountExceeded"
    SIZE_EXCEEDED = "SizeExceeded"
    NOT_SHARED = "NotShared"
    USER_NOT_FOUND = "UserNotFound"
    UNKNOWN = "Unknown"


class BoxStatusError(BoxError):
    """
    Raised when the API answers with a failing status string.

    Attributes:
        status: The raw status string returned by the service.
        kind: The ErrorKind the status maps to.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        status: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.status = status


# Common responses
class RestrictedError(BoxStatusError):
    """The application is restricted."""

    kind = ErrorKind.RESTRICTED


class InvalidInputError(BoxStatusError):
    """Request parameters were rejected."""

    kind = ErrorKind.INVALID_INPUT


class NotAuthorizedError(BoxStatusError):
    """The auth token is missing, invalid or logged out."""

    kind = ErrorKind.NOT_AUTHORIZED


class NoAccessError(BoxStatusError):
    """The account has no access to the item."""

    kind = ErrorKind.NO_ACCESS


class GenericError(BoxStatusError):
    """The operation failed without a more specific reason."""

    kind = ErrorKind.GENERIC


class UnknownError(BoxStatusError):
    """The status is not part of the known taxonomy."""

    kind = ErrorKind.UNKNOWN


# Registration specific responses
class EmailInvalidError(BoxStatusError):
    kind = ErrorKind.EMAIL_INVALID


class EmailTakenError(BoxStatusError):
    kind = ErrorKind.EMAIL_TAKEN


# Folder/File specific responses
class InvalidItemError(BoxStatusError):
    kind = ErrorKind.INVALID_ITEM


class InvalidFolderError(BoxStatusError):
    kind = ErrorKind.INVALID_FOLDER


class NoParentError(BoxStatusError):
    kind = ErrorKind.NO_PARENT


class InvalidNameError(BoxStatusError):
    kind = ErrorKind.INVALID_NAME


class NameTakenError(BoxStatusError):
    kind = ErrorKind.NAME_TAKEN


# Upload specific responses
class UploadFailedError(BoxStatusError):
    kind = ErrorKind.UPLOAD_FAILED


class AccountExceededError(BoxStatusError):
    kind = ErrorKind.ACCOUNT_EXCEEDED


class SizeExceededError(BoxStatusError):
    kind = ErrorKind.SIZE_EXCEEDED


# Sharing / user specific responses
class NotSharedError(BoxStatusError):
    kind = ErrorKind.NOT_SHARED


class UserNotFoundError(BoxStatusError):
    kind = ErrorKind.USER_NOT_FOUND


def _build_status_table() -> Mapping[str, ErrorKind]:
    groups: tuple[tuple[ErrorKind, tuple[str, ...]], ...] = (
        (ErrorKind.RESTRICTED, ("application_restricted",)),
        (
            ErrorKind.INVALID_INPUT,
            ("wrong_input", "Wrong input params", "wrong input params", "e_input_params"),
        ),
        (ErrorKind.NOT_AUTHORIZED, ("not_logged_in", "wrong auth token")),
        (ErrorKind.NO_ACCESS, ("e_no_access", "e_access_denied", "access_denied")),
        (ErrorKind.EMAIL_INVALID, ("email_invalid",)),
        (ErrorKind.EMAIL_TAKEN, ("email_already_registered",)),
        (
            ErrorKind.GENERIC,
            (
                "get_auth_token_error",
                "e_register",
                "e_move_node",
                "e_copy_node",
                "e_rename_node",
                "e_set_description",
                "get_comments_error",
                "add_comment_error",
                "delete_comment_error",
                "share_error",
                "unshare_error",
                "private_share_error",
            ),
        ),
        (ErrorKind.INVALID_ITEM, ("wrong_node",)),
        (ErrorKind.INVALID_FOLDER, ("e_folder_id",)),
        (ErrorKind.NO_PARENT, ("no_parent",)),
        (
            ErrorKind.INVALID_NAME,
            (
                "invalid_folder_name",
                "e_no_folder_name",
                "folder_name_too_big",
                "upload_invalid_file_name",
            ),
        ),
        (ErrorKind.NAME_TAKEN, ("e_filename_in_use", "s_folder_exists")),
        (ErrorKind.UPLOAD_FAILED, ("upload_some_files_failed",)),
        (ErrorKind.ACCOUNT_EXCEEDED, ("not_enough_free_space",)),
        (ErrorKind.SIZE_EXCEEDED, ("filesize_limit_exceeded",)),
        (ErrorKind.NOT_SHARED, ("file_not_shared",)),
        (ErrorKind.USER_NOT_FOUND, ("e_get_user_id",)),
    )
    table: dict[str, ErrorKind] = {}
    for kind, statuses in groups:
        for status in statuses:
            table[status] = kind
    return MappingProxyType(table)


STATUS_TO_KIND: Mapping[str, ErrorKind] = _build_status_table()

_KIND_TO_EXCEPTION: Mapping[ErrorKind, type[BoxStatusError]] = MappingProxyType(
    {
        cls.kind: cls
        for cls in (
            RestrictedError,
            InvalidInputError,
            NotAuthorizedError,
            NoAccessError,
            EmailInvalidError,
            EmailTakenError,
            GenericError,
            InvalidItemError,
            InvalidFolderError,
            NoParentError,
            InvalidNameError,
            NameTakenError,
            UploadFailedError,
            AccountExceededError,
            SizeExceededError,
            NotSharedError,
            UserNotFoundError,
            UnknownError,
        )
    }
)


def classify(status: Optional[str]) -> ErrorKind:
    """
    Map a raw status string to its ErrorKind.

    Exact, case-sensitive match; anything not in STATUS_TO_KIND is UNKNOWN.
    """
    if not isinstance(status, str):
        return ErrorKind.UNKNOWN
    return STATUS_TO_KIND.get(status, ErrorKind.UNKNOWN)


def exception_for(kind: ErrorKind) -> type[BoxStatusError]:
    return _KIND_TO_EXCEPTION[kind]


def map_status_error(
    status: Optional[str],
    *,
    message: Optional[str] = None,
    details: Optional[dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
) -> BoxStatusError:
    """Build the typed exception for a failing API status."""
    kind = classify(status)
    merged: dict[str, Any] = {"status": status, "kind": kind.value}
    if details:
        merged.update(details)

    exc_cls = exception_for(kind)
    return exc_cls(
        message or f"Box API status {status!r}",
        status=status,
        details=merged,
        cause=cause,
    )

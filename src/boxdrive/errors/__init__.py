"""Public error exports for boxdrive."""

from __future__ import annotations

from .exceptions import (
    STATUS_TO_KIND,
    AccountExceededError,
    BoxError,
    BoxStatusError,
    EmailInvalidError,
    EmailTakenError,
    ErrorKind,
    GenericError,
    HttpStatusError,
    InvalidArgumentError,
    InvalidFolderError,
    InvalidInputError,
    InvalidItemError,
    InvalidNameError,
    InvalidStateError,
    MalformedResponseError,
    NameTakenError,
    NetworkError,
    NoAccessError,
    NoParentError,
    NotAuthorizedError,
    NotSharedError,
    RestrictedError,
    SizeExceededError,
    UnknownError,
    UnknownResponseError,
    UploadFailedError,
    UserNotFoundError,
    classify,
    exception_for,
    map_status_error,
)

__all__ = [
    "BoxError",
    "InvalidArgumentError",
    "InvalidStateError",
    "NetworkError",
    "HttpStatusError",
    "UnknownResponseError",
    "MalformedResponseError",
    "ErrorKind",
    "BoxStatusError",
    "RestrictedError",
    "InvalidInputError",
    "NotAuthorizedError",
    "NoAccessError",
    "EmailInvalidError",
    "EmailTakenError",
    "GenericError",
    "InvalidItemError",
    "InvalidFolderError",
    "NoParentError",
    "InvalidNameError",
    "NameTakenError",
    "UploadFailedError",
    "AccountExceededError",
    "SizeExceededError",
    "NotSharedError",
    "UserNotFoundError",
    "UnknownError",
    "STATUS_TO_KIND",
    "classify",
    "exception_for",
    "map_status_error",
]

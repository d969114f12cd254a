"""Authentication information for boxdrive (api key + auth token)."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    The api key identifies the application; the auth token identifies an
    account that already granted the application access. Obtaining a token
    (the ticket exchange) happens outside this library.
    """

    api_key: str
    auth_token: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.api_key, str) or not self.api_key.strip():
            raise ValueError("AuthInfo.api_key must be a non-empty string")

        if self.auth_token is not None:
            if not isinstance(self.auth_token, str):
                raise TypeError("AuthInfo.auth_token must be a string or None")
            if not self.auth_token.strip():
                raise ValueError("AuthInfo.auth_token must not be blank")

    @property
    def has_token(self) -> bool:
        return self.auth_token is not None

    def with_token(self, auth_token: Optional[str]) -> AuthInfo:
        """Return a copy using the given auth token (None clears it)."""
        return dataclasses.replace(self, auth_token=auth_token)

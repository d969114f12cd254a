"""Public auth exports for boxdrive."""

from __future__ import annotations

from .auth_info import AuthInfo

__all__ = ["AuthInfo"]

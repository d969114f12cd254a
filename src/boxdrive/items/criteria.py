"""Criteria matching used by Folder.find."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .item import Item

logger = logging.getLogger(__name__)


class _NotApplicable:
    """Marker for an attribute that does not exist on an item."""

    _instance: "_NotApplicable | None" = None

    def __new__(cls) -> "_NotApplicable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_APPLICABLE"

    def __bool__(self) -> bool:
        return False


NOT_APPLICABLE = _NotApplicable()


def criterion_matches(expected: Any, actual: Any) -> bool:
    """
    Test one attribute value against one expected value.

    Expected may be:
        - a compiled regex: searched in string values
        - a type: isinstance check
        - an object with a `matches(value)` method
        - a callable predicate
        - anything else: equality
    An attribute that is NOT_APPLICABLE never matches, and neither does a
    value for which the matcher or predicate raises.
    """
    if actual is NOT_APPLICABLE:
        return False

    if isinstance(expected, re.Pattern):
        return isinstance(actual, str) and expected.search(actual) is not None
    if isinstance(expected, type):
        return isinstance(actual, expected)

    matcher = getattr(expected, "matches", None)
    if not callable(matcher):
        matcher = expected if callable(expected) else None
    if matcher is not None:
        try:
            return bool(matcher(actual))
        except Exception as exc:
            logger.debug("Criterion %r raised on %r: %s", expected, actual, exc)
            return False

    return expected == actual


def item_matches(item: Item, criteria: Mapping[str, Any]) -> bool:
    """True iff every criterion holds for the item."""
    return all(
        criterion_matches(expected, item.read_attribute(key))
        for key, expected in criteria.items()
    )

"""Shared model configuration and lenient field types.

Character documents are user-editable and often half-finished, so the
numeric and flag fields here never reject a value: anything that is not
a usable number becomes 0 (or None for optional cached values) and
anything that is not a recognisable flag becomes False (or None).
"""

from __future__ import annotations

import math
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


# =============================================================================
# Validators and Type Definitions
# =============================================================================

_TRUE_STRINGS = frozenset({"true", "yes", "1", "on"})
_FALSE_STRINGS = frozenset({"false", "no", "0", "off"})


def parse_number(value: Any) -> int | float | None:
    """Interpret a document value as a number.

    Args:
        value: Raw value from the document.

    Returns:
        The number (int when integral), or None when the value is absent,
        boolean, non-finite or not numeric.

    Example:
        >>> parse_number("12")
        12
        >>> parse_number("1/2") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def _number_or_zero(value: Any) -> int | float:
    number = parse_number(value)
    return 0 if number is None else number


def _int_or_zero(value: Any) -> int:
    number = parse_number(value)
    return 0 if number is None else int(number)


def _optional_int(value: Any) -> int | None:
    number = parse_number(value)
    return None if number is None else int(number)


def _optional_flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    return None


def _flag(value: Any) -> bool:
    return _optional_flag(value) is True


def as_list(value: Any) -> Any:
    """Treat a missing collection as empty."""
    return [] if value is None else value


def as_mapping(value: Any) -> Any:
    """Treat a missing section as empty."""
    return {} if value is None else value


def _as_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _as_optional_text(value: Any) -> Any:
    if value is None or value == "":
        return None
    return _as_text(value)


Number = Annotated[int | float, BeforeValidator(_number_or_zero)]
"""A number that defaults to 0 when missing or malformed."""

OptionalNumber = Annotated[int | float | None, BeforeValidator(parse_number)]
"""A number that stays None when missing or malformed."""

Count = Annotated[int, BeforeValidator(_int_or_zero)]
"""An integer that defaults to 0 when missing or malformed."""

OptionalCount = Annotated[int | None, BeforeValidator(_optional_int)]
"""An integer that stays None when missing or malformed."""

Flag = Annotated[bool, BeforeValidator(_flag)]
"""A flag that is False unless the document clearly says true."""

OptionalFlag = Annotated[bool | None, BeforeValidator(_optional_flag)]
"""A tri-state flag; None means the document did not say."""

Text = Annotated[str, BeforeValidator(_as_text)]
"""A string that defaults to empty when missing."""

OptionalText = Annotated[str | None, BeforeValidator(_as_optional_text)]
"""A string that is None when missing or empty."""


class DocumentModel(BaseModel):
    """Base for every model read from or written to a document.

    Fields are declared in snake_case and accepted in the document's
    camelCase form as well. Instances are immutable.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )


__all__ = [
    "parse_number",
    "Number",
    "OptionalNumber",
    "Count",
    "OptionalCount",
    "Flag",
    "OptionalFlag",
    "Text",
    "OptionalText",
    "DocumentModel",
    "as_list",
    "as_mapping",
]

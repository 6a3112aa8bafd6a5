"""
Argument guards used by every public client method.
"""

from typing import Any, Optional

from shared.errors import ArgumentNullError, ArgumentEmptyError


def argument_not_null(value: Any, name: str) -> None:
    """Raise ArgumentNullError when value is None."""
    if value is None:
        raise ArgumentNullError(name)


def argument_not_null_or_empty_string(value: Optional[str], name: str) -> None:
    """Raise when value is None, empty or only whitespace."""
    argument_not_null(value, name)
    if not value.strip():
        raise ArgumentEmptyError(name)

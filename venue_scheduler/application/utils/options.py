from __future__ import annotations

from enum import Enum
from typing import TypeVar

from venue_scheduler.application.exceptions import InvalidArgument

E = TypeVar("E", bound=Enum)


def coerce_option(option_type: type[E], value: E | str, name: str) -> E:
    """Turn a caller-supplied option into its enum member, raising `InvalidArgument` if unknown."""
    try:
        return option_type(value)
    except ValueError as e:
        allowed = ", ".join(str(member.value) for member in option_type)
        raise InvalidArgument(f"Unknown {name} {value!r}; expected one of: {allowed}") from e

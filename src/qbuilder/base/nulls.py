# src/qbuilder/base/nulls.py
"""
Nullable value wrappers for parameter records.

A wrapper pairs a value with a validity flag so a record can tell
"filter on this value" apart from "no value supplied", even for values
like "" or 0 that would otherwise be meaningful.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class NullValue(Generic[T]):
    """
    A value plus a validity flag. Only valid values become filters.

    A valid wrapper must carry a value of the subclass's type; invalid
    wrappers are not checked since their value is never bound.
    """

    value: Optional[T] = None
    valid: bool = False

    _value_types: ClassVar[Tuple[type, ...]] = ()

    def __post_init__(self):
        if not self.valid:
            return
        if self.value is None:
            raise ValueError(f"{type(self).__name__} marked valid but holds no value")
        if self._value_types and (
            isinstance(self.value, bool)
            or not isinstance(self.value, self._value_types)
        ):
            raise TypeError(
                f"{type(self).__name__} value must be "
                f"{' or '.join(t.__name__ for t in self._value_types)}, "
                f"got {type(self.value).__name__}"
            )

    @classmethod
    def from_optional(cls, value: Optional[T]) -> "NullValue[T]":
        """Builds a wrapper that is valid whenever value is not None."""
        return cls(value=value, valid=value is not None)


@dataclass(frozen=True)
class NullString(NullValue[str]):
    _value_types: ClassVar[Tuple[type, ...]] = (str,)


@dataclass(frozen=True)
class NullInt(NullValue[int]):
    _value_types: ClassVar[Tuple[type, ...]] = (int,)


@dataclass(frozen=True)
class NullFloat(NullValue[float]):
    _value_types: ClassVar[Tuple[type, ...]] = (int, float)


@dataclass(frozen=True)
class NullTime(NullValue[datetime]):
    _value_types: ClassVar[Tuple[type, ...]] = (datetime,)

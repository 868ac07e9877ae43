"""Predicates checking a single state value.

Validators are small immutable objects with one method, `is_valid`. They
never raise on a state of the wrong type: a length or pattern check applied
to a value it cannot measure simply reports the value as invalid.

Key types:
- Validator: Base class of all predicates
- RelatedValidator: Builds a predicate comparing against another field's state
- ValidatorTarget: Anything exposing a `state` attribute
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class ValidatorTarget(Protocol):
    """An object holding a state that dependent validators compare against."""

    @property
    def state(self) -> Any: ...


class Validator(ABC):
    """A pure boolean test of a state value."""

    __slots__ = ()

    @abstractmethod
    def is_valid(self, state: Any) -> bool:
        """Return True if `state` satisfies this validator."""


@dataclass(frozen=True, slots=True)
class CustomValidator(Validator):
    """Validator delegating to a caller-supplied callback."""

    callback: Callable[[Any], bool]

    def is_valid(self, state: Any) -> bool:
        return bool(self.callback(state))


@dataclass(frozen=True, slots=True)
class RequiredValidator(Validator):
    """Check that a value is present and not empty.

    - Strings and other collections must not be empty.
    - Booleans must be True, except when `nullable` is set: a nullable boolean
      field passes whatever its value.
    - Any other value must not be None.

    Attributes:
        nullable: Whether the field's type admits None.

    """

    nullable: bool = False

    def is_valid(self, state: Any) -> bool:
        match state:
            case str():
                return len(state) > 0
            case bool():
                return self.nullable or state
            case Collection():
                return len(state) > 0
            case _:
                return state is not None


@dataclass(frozen=True, slots=True)
class LengthValidator(Validator):
    """Base class for validators comparing the length of strings or collections."""

    value: int

    def is_valid(self, state: Any) -> bool:
        if not isinstance(state, (str, Collection)):
            return False
        return self._compare(len(state))

    @abstractmethod
    def _compare(self, length: int) -> bool: ...


@dataclass(frozen=True, slots=True)
class ExactLengthValidator(LengthValidator):
    def _compare(self, length: int) -> bool:
        return length == self.value


@dataclass(frozen=True, slots=True)
class MinLengthValidator(LengthValidator):
    def _compare(self, length: int) -> bool:
        return length >= self.value


@dataclass(frozen=True, slots=True)
class MaxLengthValidator(LengthValidator):
    def _compare(self, length: int) -> bool:
        return length <= self.value


@dataclass(frozen=True, slots=True)
class PatternValidator(Validator):
    """Base class for regular-expression validators on string states."""

    pattern: str | re.Pattern[str]

    def _has_match(self, state: str) -> bool:
        return re.search(self.pattern, state) is not None


@dataclass(frozen=True, slots=True)
class AllowPatternValidator(PatternValidator):
    """Valid when the pattern matches somewhere in the string."""

    def is_valid(self, state: Any) -> bool:
        return isinstance(state, str) and self._has_match(state)


@dataclass(frozen=True, slots=True)
class DenyPatternValidator(PatternValidator):
    """Valid when the pattern matches nowhere in the string."""

    def is_valid(self, state: Any) -> bool:
        return isinstance(state, str) and not self._has_match(state)


@dataclass(frozen=True, slots=True)
class DependentValidator(Validator):
    """Base class for validators comparing against a captured value.

    Attributes:
        value: The other field's state, captured when the validator was built.

    """

    value: Any


@dataclass(frozen=True, slots=True)
class IsSameAsValidator(DependentValidator):
    """Valid when the state equals the captured value (e.g. password confirmation)."""

    def is_valid(self, state: Any) -> bool:
        return state == self.value


@dataclass(frozen=True, slots=True)
class IsDifferentFromValidator(DependentValidator):
    """Valid when the state differs from the captured value (e.g. new vs. old password)."""

    def is_valid(self, state: Any) -> bool:
        return state != self.value


class RelatedValidator(ABC):
    """Factory of dependent validators bound to another field's state."""

    __slots__ = ()

    @abstractmethod
    def build(self, target: ValidatorTarget) -> DependentValidator:
        """Build a validator comparing against `target.state`."""


@dataclass(frozen=True, slots=True)
class IsSameAs(RelatedValidator):
    def build(self, target: ValidatorTarget) -> DependentValidator:
        return IsSameAsValidator(target.state)


@dataclass(frozen=True, slots=True)
class IsDifferentFrom(RelatedValidator):
    def build(self, target: ValidatorTarget) -> DependentValidator:
        return IsDifferentFromValidator(target.state)

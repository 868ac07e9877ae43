"""Strategies deciding when a validation queue stops early."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._payload import Severity

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._payload import Payload


class TerminationStrategy(ABC):
    """Decides whether a queue stops after one of its children.

    The strategy is attached to the child (its `after` attribute) and receives
    that child's own result, not the queue's accumulated payload.
    """

    __slots__ = ()

    @abstractmethod
    def should_stop(self, payload: Payload | None) -> bool:
        """Return True if the queue should stop after this payload."""


@dataclass(frozen=True, slots=True)
class NeverStop(TerminationStrategy):
    """Continue regardless of the result."""

    def should_stop(self, payload: Payload | None) -> bool:  # noqa: ARG002
        return False


@dataclass(frozen=True, slots=True)
class AlwaysStop(TerminationStrategy):
    """Stop after the first child, whatever it returned."""

    def should_stop(self, payload: Payload | None) -> bool:  # noqa: ARG002
        return True


@dataclass(frozen=True, slots=True)
class StopAfterFailure(TerminationStrategy):
    """Stop when the result itself is a failure.

    A group holding a failure does not count; use `StopIfContainsFailure`.
    """

    def should_stop(self, payload: Payload | None) -> bool:
        return payload is not None and payload.severity is Severity.FAILURE


@dataclass(frozen=True, slots=True)
class StopIfContainsFailure(TerminationStrategy):
    """Stop when the result is a failure or contains one at any depth."""

    def should_stop(self, payload: Payload | None) -> bool:
        return payload is not None and payload.contains_failure()


@dataclass(frozen=True, slots=True)
class StopAfterSeverity(TerminationStrategy):
    """Stop after the enabled severity levels.

    Example:
        >>> StopAfterSeverity(failure=True, warning=True).should_stop(WarningPayload("weak"))
        True

    """

    failure: bool = False
    warning: bool = False
    info: bool = False
    success: bool = False

    def should_stop(self, payload: Payload | None) -> bool:
        if payload is None:
            return False
        match payload.severity:
            case Severity.FAILURE:
                return self.failure
            case Severity.WARNING:
                return self.warning
            case Severity.INFO:
                return self.info
            case Severity.SUCCESS:
                return self.success
            case _:
                return False


@dataclass(frozen=True, slots=True)
class StopAfterCustom(TerminationStrategy):
    """Delegate the decision to a caller-supplied predicate."""

    predicate: Callable[[Payload | None], bool]

    def should_stop(self, payload: Payload | None) -> bool:
        return self.predicate(payload)

"""Severity-tagged validation payloads."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Generator


class Severity(StrEnum):
    """Severity tag carried by a payload."""

    SUCCESS = auto()
    INFO = auto()
    WARNING = auto()
    FAILURE = auto()

    @property
    def rank(self) -> int:
        """Ordering used when comparing severities (higher is more severe)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.SUCCESS: 0,
    Severity.INFO: 1,
    Severity.WARNING: 2,
    Severity.FAILURE: 3,
}


@dataclass(frozen=True, slots=True)
class Payload:
    """Base class for validation results.

    Concrete payloads are either a single severity-tagged message or a
    `PayloadGroup` bundling several payloads together.
    """

    severity: ClassVar[Severity | None] = None

    def contains_failure(self) -> bool:
        """Check if this payload is, or transitively contains, a failure."""
        return self.severity is Severity.FAILURE

    def iter_leaves(self) -> Generator[Payload]:
        """Iterate over all non-group payloads in this payload."""
        yield self


@dataclass(frozen=True, slots=True)
class SuccessPayload(Payload):
    severity: ClassVar[Severity | None] = Severity.SUCCESS

    message: str | None = None


@dataclass(frozen=True, slots=True)
class InfoPayload(Payload):
    severity: ClassVar[Severity | None] = Severity.INFO

    message: str | None = None


@dataclass(frozen=True, slots=True)
class WarningPayload(Payload):
    severity: ClassVar[Severity | None] = Severity.WARNING

    message: str | None = None


@dataclass(frozen=True, slots=True)
class FailurePayload(Payload):
    severity: ClassVar[Severity | None] = Severity.FAILURE

    message: str | None = None


_PAYLOAD_TYPES: dict[Severity, type[SuccessPayload | InfoPayload | WarningPayload | FailurePayload]] = {
    Severity.SUCCESS: SuccessPayload,
    Severity.INFO: InfoPayload,
    Severity.WARNING: WarningPayload,
    Severity.FAILURE: FailurePayload,
}


def make_payload(severity: Severity, message: str | None = None) -> Payload:
    """Create the payload class matching `severity`."""
    return _PAYLOAD_TYPES[severity](message)


@dataclass(frozen=True, slots=True)
class PayloadGroup(Payload):
    """An ordered bundle of payloads.

    A group has no severity tag of its own. Nested groups are kept as-is, so
    `contains_failure` has to search the whole structure.

    Attributes:
        payloads: The bundled payloads, in the order they were produced.

    """

    payloads: tuple[Payload, ...] = ()

    def contains_failure(self) -> bool:
        """Check if any payload in this group (at any depth) is a failure."""
        return any(payload.contains_failure() for payload in self.payloads)

    def iter_leaves(self) -> Generator[Payload]:
        """Iterate over all non-group payloads, depth first."""
        for payload in self.payloads:
            yield from payload.iter_leaves()

    @property
    def max_severity(self) -> Severity | None:
        """The most severe tag found among the leaves, or None for an empty group."""
        severities = [leaf.severity for leaf in self.iter_leaves() if leaf.severity is not None]
        if not severities:
            return None
        return max(severities, key=lambda severity: severity.rank)


def effective_severity(payload: Payload | None) -> Severity | None:
    """Return the tag of a single payload, or the most severe leaf tag of a group."""
    if payload is None:
        return None
    if isinstance(payload, PayloadGroup):
        return payload.max_severity
    return payload.severity

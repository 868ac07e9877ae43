"""Strategies merging the results of queued validations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ._payload import Payload, PayloadGroup, effective_severity


class CompositeStrategy(ABC):
    """Merges an accumulated payload with the next child's result.

    A queue calls `compose` once per evaluated child, in order, passing the
    previous return value as `accumulated`.
    """

    __slots__ = ()

    @abstractmethod
    def compose(self, accumulated: Payload | None, payload: Payload | None) -> Payload | None:
        """Return the payload resulting from merging `payload` into `accumulated`."""


@dataclass(frozen=True, slots=True)
class DefaultCompositeStrategy(CompositeStrategy):
    """Collect every non-empty result into a `PayloadGroup`.

    A single result is returned as-is. Once two results exist they are wrapped
    in a group, and later results are appended to that group. The incoming
    payload is never flattened: a nested queue's group stays nested.
    """

    def compose(self, accumulated: Payload | None, payload: Payload | None) -> Payload | None:
        if payload is None:
            return accumulated
        if accumulated is None:
            return payload
        if isinstance(accumulated, PayloadGroup):
            return PayloadGroup((*accumulated.payloads, payload))
        return PayloadGroup((accumulated, payload))


@dataclass(frozen=True, slots=True)
class HighestSeverityStrategy(CompositeStrategy):
    """Keep only the most severe result seen so far.

    Groups are ranked by their most severe leaf. On a tie the earlier result wins.
    """

    def compose(self, accumulated: Payload | None, payload: Payload | None) -> Payload | None:
        if payload is None:
            return accumulated
        if accumulated is None:
            return payload
        accumulated_severity = effective_severity(accumulated)
        payload_severity = effective_severity(payload)
        if payload_severity is None:
            return accumulated
        if accumulated_severity is None or payload_severity.rank > accumulated_severity.rank:
            return payload
        return accumulated

"""Validation trees and their recursive evaluation.

A validation tree is built from four immutable node types:

- ValidValidation: always passes, produces no payload
- MessageValidation: one validator with success/failure payloads
- QueueValidation: children evaluated in order, with early termination
- RelatedValidation: compares against states recorded earlier in the pass

Evaluation threads a `History` (a plain list of `ValidationState`) through
the whole tree. A node carrying a `key` appends its state to the history
after it has been evaluated, so it becomes visible to every node evaluated
later in the same pass and never to nodes evaluated before it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ._composite import CompositeStrategy, DefaultCompositeStrategy
from ._payload import FailurePayload, Payload
from ._termination import NeverStop, StopAfterFailure, StopIfContainsFailure, TerminationStrategy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ._validator import RelatedValidator, Validator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationState[S, K]:
    """A state recorded in the history under a key.

    Satisfies the `ValidatorTarget` protocol through its `state` attribute.
    """

    key: K
    state: S


type History = list[ValidationState[Any, Any]]


@dataclass(frozen=True, slots=True, kw_only=True)
class Validation[S, K]:
    """Base class of validation tree nodes.

    Attributes:
        key: If set, the validated state is recorded in the history under this key.
        after: Decides whether an enclosing queue stops after this node.

    """

    key: K | None = None
    after: TerminationStrategy = StopAfterFailure()

    def validate(self, state: S, history: History) -> Payload | None:
        """Validate `state` and record it in `history` if this node has a key.

        Args:
            state: The value being validated.
            history: States recorded so far in this pass. Appended to in place.

        Returns:
            The resulting payload, or None if there is nothing to report.

        """
        result = _evaluate(self, state, history)
        if self.key is not None:
            history.append(ValidationState(self.key, state))
            logger.debug("Recorded state for key %r (history size %d)", self.key, len(history))
        return result


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidValidation[S, K](Validation[S, K]):
    """A validation that always passes."""

    after: TerminationStrategy = NeverStop()


@dataclass(frozen=True, slots=True)
class MessageValidation[S, K](Validation[S, K]):
    """A single validator with the payloads to return on success and failure.

    Example:
        >>> email = MessageValidation(
        ...     RequiredValidator(),
        ...     failure=FailurePayload("Email required"),
        ... )
        >>> email.validate("", [])
        FailurePayload(message='Email required')

    """

    validator: Validator
    success: Payload | None = None
    failure: Payload = FailurePayload()


@dataclass(frozen=True, slots=True)
class QueueValidation[S, K](Validation[S, K]):
    """Children validated in sequence.

    Each child's own `after` strategy decides whether the queue continues
    after it. The queue's `after` only matters when it is itself nested in
    another queue.

    Attributes:
        validations: The children, evaluated in this order.
        composite: Merges the children's results into the queue's result.

    """

    validations: tuple[Validation[S, K], ...]
    composite: CompositeStrategy = DefaultCompositeStrategy()
    after: TerminationStrategy = field(default=StopIfContainsFailure(), kw_only=True)

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the node stays immutable
        object.__setattr__(self, "validations", tuple(self.validations))


@dataclass(frozen=True, slots=True)
class RelatedValidation[S, K](Validation[S, K]):
    """A validation against states recorded earlier under `key`.

    Every history entry with a matching key yields one check, built by
    `validator` from that entry. The checks run as an inline queue, each one
    carrying this node's `after` strategy. Without a matching entry the
    result is None. Like any keyed node, the validated state is then recorded
    under `key` as well.

    Example:
        >>> confirm = RelatedValidation(
        ...     "password",
        ...     IsSameAs(),
        ...     failure=FailurePayload("Passwords must match"),
        ... )

    """

    key: K
    validator: RelatedValidator
    success: Payload | None = None
    failure: Payload = FailurePayload()


def _run_queue(
    validations: Iterable[Validation[Any, Any]],
    composite: CompositeStrategy,
    state: Any,
    history: History,
) -> Payload | None:
    payload: Payload | None = None
    for validation in validations:
        result = validation.validate(state, history)
        payload = composite.compose(payload, result)
        if validation.after.should_stop(result):
            logger.debug("Queue stopped by %s after result %r", type(validation.after).__name__, result)
            break
    return payload


def _evaluate(node: Validation[Any, Any], state: Any, history: History) -> Payload | None:
    """Evaluate a node without recording its state."""
    match node:
        case ValidValidation():
            return None
        case MessageValidation(validator=validator, success=success, failure=failure):
            return success if validator.is_valid(state) else failure
        case QueueValidation(validations=validations, composite=composite):
            return _run_queue(validations, composite, state, history)
        case RelatedValidation(key=key, validator=validator, success=success, failure=failure, after=after):
            # Snapshot matches before running: the transient checks are unkeyed
            checks = [
                MessageValidation(validator.build(entry), success=success, failure=failure, after=after)
                for entry in history
                if entry.key == key
            ]
            logger.debug("Related validation on %r found %d recorded state(s)", key, len(checks))
            return _run_queue(checks, DefaultCompositeStrategy(), state, history)
        case _:
            msg = f"Unknown validation type: {type(node)}"
            raise TypeError(msg)

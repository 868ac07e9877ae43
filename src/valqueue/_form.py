"""Validating several fields in one pass with a shared history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ._payload import Payload
    from ._validation import History, Validation, ValidationState

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FormResult:
    """Result of validating a form.

    Attributes:
        payloads: Mapping from field name to that field's payload (None if nothing to report).
        history: The states recorded during the pass, in recording order.

    """

    payloads: dict[str, Payload | None] = field(default_factory=dict)
    history: tuple[ValidationState[Any, Any], ...] = ()

    @property
    def success(self) -> bool:
        """Check if no field produced a failure."""
        return not self.failed_fields()

    def failed_fields(self) -> list[str]:
        """Names of the fields whose payload contains a failure, in form order."""
        return [name for name, payload in self.payloads.items() if payload is not None and payload.contains_failure()]

    def payload_for(self, name: str) -> Payload | None:
        """Get the payload of a field.

        Raises:
            KeyError: If the form has no such field.

        """
        if name not in self.payloads:
            msg = f"No field named '{name}' in result"
            raise KeyError(msg)
        return self.payloads[name]


@dataclass(frozen=True, slots=True, init=False)
class Form:
    """An ordered set of named field validations.

    Fields are validated one after the other in declaration order, sharing one
    history, so a field can refer to the states of the fields declared before it.
    """

    fields: tuple[tuple[str, Validation[Any, Any]], ...]

    def __init__(self, fields: Mapping[str, Validation[Any, Any]] | Iterable[tuple[str, Validation[Any, Any]]]) -> None:
        items = fields.items() if hasattr(fields, "items") else fields
        object.__setattr__(self, "fields", tuple(items))

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def validate(self, values: Mapping[str, Any], history: History | None = None) -> FormResult:
        """Validate every field against its value.

        Args:
            values: Mapping from field name to value. Missing fields are validated as None.
            history: An ongoing history to extend. A fresh one is used if omitted.

        Returns:
            FormResult with one payload per field.

        """
        if history is None:
            history = []

        payloads: dict[str, Payload | None] = {}
        for name, validation in self.fields:
            value = values.get(name)
            logger.debug("Validating field '%s' = %r", name, value)
            payloads[name] = validation.validate(value, history)

        unknown = set(values) - set(payloads)
        if unknown:
            logger.debug("Ignoring values without a field: %s", sorted(unknown))

        return FormResult(payloads=payloads, history=tuple(history))

"""Declarative description of forms, loadable from plain data (TOML, JSON, dicts).

Example (TOML):

    [fields.password]
    rules = [
        { kind = "required", failure = { severity = "failure", message = "Password required" } },
        { kind = "min_length", value = 8, after = "never",
          failure = { severity = "warning", message = "Weak password" } },
    ]

    [fields.confirm]
    rules = [
        { kind = "same_as", key = "password",
          failure = { severity = "failure", message = "Passwords must match" } },
    ]

Each field becomes a `QueueValidation` keyed by the field name, so later
fields can refer to it with `same_as` / `different_from`.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import TYPE_CHECKING, Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ._composite import CompositeStrategy, DefaultCompositeStrategy, HighestSeverityStrategy
from ._form import Form
from ._payload import FailurePayload, Payload, Severity, make_payload
from ._termination import (
    AlwaysStop,
    NeverStop,
    StopAfterFailure,
    StopAfterSeverity,
    StopIfContainsFailure,
    TerminationStrategy,
)
from ._validation import (
    MessageValidation,
    QueueValidation,
    RelatedValidation,
    Validation,
    ValidValidation,
)
from ._validator import (
    AllowPatternValidator,
    DenyPatternValidator,
    ExactLengthValidator,
    IsDifferentFrom,
    IsSameAs,
    MaxLengthValidator,
    MinLengthValidator,
    RequiredValidator,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._validator import RelatedValidator, Validator


class SchemaError(ValueError):
    """Error in a declarative form description."""


class _SpecModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class PayloadSpec(_SpecModel):
    """A payload to return from a rule."""

    severity: Severity
    message: str | None = None

    def build(self) -> Payload:
        return make_payload(self.severity, self.message)


class SeveritiesSpec(_SpecModel):
    """Stop after any of the listed severities."""

    severities: list[Severity]

    def build(self) -> TerminationStrategy:
        return StopAfterSeverity(
            failure=Severity.FAILURE in self.severities,
            warning=Severity.WARNING in self.severities,
            info=Severity.INFO in self.severities,
            success=Severity.SUCCESS in self.severities,
        )


_NAMED_STRATEGIES: dict[str, TerminationStrategy] = {
    "never": NeverStop(),
    "always": AlwaysStop(),
    "failure": StopAfterFailure(),
    "contains_failure": StopIfContainsFailure(),
}

AfterSpec = Literal["never", "always", "failure", "contains_failure"] | SeveritiesSpec


def _build_after(after: AfterSpec | None) -> dict[str, TerminationStrategy]:
    """Keyword arguments for a node's `after`; empty to keep the node's default."""
    if after is None:
        return {}
    if isinstance(after, SeveritiesSpec):
        return {"after": after.build()}
    return {"after": _NAMED_STRATEGIES[after]}


class _RuleBase(_SpecModel):
    key: str | None = None
    after: AfterSpec | None = None


class _MessageRuleBase(_RuleBase):
    success: PayloadSpec | None = None
    failure: PayloadSpec | None = None

    @abstractmethod
    def _validator(self) -> Validator: ...

    def build(self) -> Validation[Any, Any]:
        return MessageValidation(
            self._validator(),
            success=self.success.build() if self.success is not None else None,
            failure=self.failure.build() if self.failure is not None else FailurePayload(),
            key=self.key,
            **_build_after(self.after),
        )


class ValidRule(_RuleBase):
    kind: Literal["valid"]

    def build(self) -> Validation[Any, Any]:
        return ValidValidation(key=self.key, **_build_after(self.after))


class RequiredRule(_MessageRuleBase):
    kind: Literal["required"]
    nullable: bool = False

    def _validator(self) -> Validator:
        return RequiredValidator(nullable=self.nullable)


_LENGTH_VALIDATORS = {
    "exact_length": ExactLengthValidator,
    "min_length": MinLengthValidator,
    "max_length": MaxLengthValidator,
}


class LengthRule(_MessageRuleBase):
    kind: Literal["exact_length", "min_length", "max_length"]
    value: int = Field(ge=0)

    def _validator(self) -> Validator:
        return _LENGTH_VALIDATORS[self.kind](self.value)


class PatternRule(_MessageRuleBase):
    kind: Literal["allow_pattern", "deny_pattern"]
    pattern: str

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            msg = f"Invalid regular expression {value!r}: {e}"
            raise ValueError(msg) from e
        return value

    def _validator(self) -> Validator:
        if self.kind == "allow_pattern":
            return AllowPatternValidator(self.pattern)
        return DenyPatternValidator(self.pattern)


class RelatedRule(_RuleBase):
    kind: Literal["same_as", "different_from"]
    key: str
    success: PayloadSpec | None = None
    failure: PayloadSpec | None = None

    def _related_validator(self) -> RelatedValidator:
        if self.kind == "same_as":
            return IsSameAs()
        return IsDifferentFrom()

    def build(self) -> Validation[Any, Any]:
        return RelatedValidation(
            self.key,
            self._related_validator(),
            success=self.success.build() if self.success is not None else None,
            failure=self.failure.build() if self.failure is not None else FailurePayload(),
            **_build_after(self.after),
        )


_COMPOSITES: dict[str, CompositeStrategy] = {
    "group": DefaultCompositeStrategy(),
    "highest": HighestSeverityStrategy(),
}


class QueueRule(_RuleBase):
    kind: Literal["queue"]
    rules: list[RuleSpec]
    composite: Literal["group", "highest"] = "group"

    def build(self) -> Validation[Any, Any]:
        return QueueValidation(
            [rule.build() for rule in self.rules],
            composite=_COMPOSITES[self.composite],
            key=self.key,
            **_build_after(self.after),
        )


RuleSpec = Annotated[
    ValidRule | RequiredRule | LengthRule | PatternRule | RelatedRule | QueueRule,
    Field(discriminator="kind"),
]

QueueRule.model_rebuild()


class FieldSpec(_SpecModel):
    """The rules of one form field, evaluated as a queue.

    Fields are never nested in a queue, so there is no field-level `after`:
    every field of a form is always validated.
    """

    rules: list[RuleSpec] = Field(default_factory=list)
    composite: Literal["group", "highest"] = "group"

    def build(self, name: str) -> Validation[Any, Any]:
        return QueueValidation(
            [rule.build() for rule in self.rules],
            composite=_COMPOSITES[self.composite],
            key=name,
        )


class FormSpec(_SpecModel):
    """A form: fields in declaration order."""

    fields: dict[str, FieldSpec]

    def build(self) -> Form:
        return Form({name: field_spec.build(name) for name, field_spec in self.fields.items()})


def build_form(data: Mapping[str, Any]) -> Form:
    """Validate a raw form description and build the corresponding `Form`.

    Args:
        data: Mapping with a `fields` table, e.g. parsed from TOML.

    Returns:
        The built Form.

    Raises:
        SchemaError: If the description is invalid.

    """
    try:
        spec = FormSpec.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid form description: {e}"
        raise SchemaError(msg) from e
    return spec.build()

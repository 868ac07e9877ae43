"""Composable validation queues with severity-tagged results."""

__all__ = [
    "AllowPatternValidator",
    "AlwaysStop",
    "CompositeStrategy",
    "CustomValidator",
    "DefaultCompositeStrategy",
    "DenyPatternValidator",
    "DependentValidator",
    "ExactLengthValidator",
    "FailurePayload",
    "FieldSpec",
    "Form",
    "FormResult",
    "FormSpec",
    "HighestSeverityStrategy",
    "History",
    "InfoPayload",
    "IsDifferentFrom",
    "IsDifferentFromValidator",
    "IsSameAs",
    "IsSameAsValidator",
    "LengthValidator",
    "MaxLengthValidator",
    "MessageValidation",
    "MinLengthValidator",
    "NeverStop",
    "PatternValidator",
    "Payload",
    "PayloadGroup",
    "PayloadSpec",
    "QueueValidation",
    "RelatedValidation",
    "RelatedValidator",
    "RequiredValidator",
    "RuleSpec",
    "SchemaError",
    "Severity",
    "StopAfterCustom",
    "StopAfterFailure",
    "StopAfterSeverity",
    "StopIfContainsFailure",
    "SuccessPayload",
    "TerminationStrategy",
    "ValidValidation",
    "Validation",
    "ValidationState",
    "Validator",
    "ValidatorTarget",
    "WarningPayload",
    "build_form",
    "export_result_to_toml",
    "load_form_from_toml",
    "load_values_from_toml",
    "make_payload",
    "result_to_dict",
]

from ._composite import CompositeStrategy, DefaultCompositeStrategy, HighestSeverityStrategy
from ._form import Form, FormResult
from ._io import export_result_to_toml, load_form_from_toml, load_values_from_toml, result_to_dict
from ._payload import (
    FailurePayload,
    InfoPayload,
    Payload,
    PayloadGroup,
    Severity,
    SuccessPayload,
    WarningPayload,
    make_payload,
)
from ._schema import FieldSpec, FormSpec, PayloadSpec, RuleSpec, SchemaError, build_form
from ._termination import (
    AlwaysStop,
    NeverStop,
    StopAfterCustom,
    StopAfterFailure,
    StopAfterSeverity,
    StopIfContainsFailure,
    TerminationStrategy,
)
from ._validation import (
    History,
    MessageValidation,
    QueueValidation,
    RelatedValidation,
    Validation,
    ValidationState,
    ValidValidation,
)
from ._validator import (
    AllowPatternValidator,
    CustomValidator,
    DenyPatternValidator,
    DependentValidator,
    ExactLengthValidator,
    IsDifferentFrom,
    IsDifferentFromValidator,
    IsSameAs,
    IsSameAsValidator,
    LengthValidator,
    MaxLengthValidator,
    MinLengthValidator,
    PatternValidator,
    RelatedValidator,
    RequiredValidator,
    Validator,
    ValidatorTarget,
)

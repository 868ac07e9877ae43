from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w

from ._payload import Payload, PayloadGroup
from ._schema import SchemaError, build_form

if TYPE_CHECKING:
    from ._form import Form, FormResult

logger = logging.getLogger(__name__)


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {path}: {e}"
            raise SchemaError(msg) from e


def load_form_from_toml(form_path: Path | str) -> Form:
    """Load a form description from a TOML file.

    Args:
        form_path: Path to a TOML file with a `[fields]` table.

    Returns:
        The built Form.

    Raises:
        SchemaError: If the file is not valid TOML or not a valid form description.

    """
    form_path = Path(form_path)
    form = build_form(_read_toml(form_path))
    logger.debug(f"Loaded form with {len(form.fields)} field(s) from {form_path}")
    return form


def load_values_from_toml(input_path: Path | str) -> dict[str, Any]:
    """Load field values from a TOML file.

    Values are read from the `[values]` table if present, otherwise the whole
    document is taken as the mapping of field names to values. A non-table
    `values` entry is an ordinary field named "values".
    """
    input_path = Path(input_path)
    contents = _read_toml(input_path)
    values = contents["values"] if isinstance(contents.get("values"), dict) else contents
    logger.debug(f"Loaded {len(values)} value(s) from {input_path}")
    return values


def _serialize_payload(payload: Payload) -> dict[str, Any]:
    """Convert a payload to TOML-compatible data (None entries are dropped)."""
    if isinstance(payload, PayloadGroup):
        data: dict[str, Any] = {"payloads": [_serialize_payload(p) for p in payload.payloads]}
        if payload.max_severity is not None:
            data["severity"] = payload.max_severity.value
        return data

    data = {}
    if payload.severity is not None:
        data["severity"] = payload.severity.value
    message = getattr(payload, "message", None)
    if message is not None:
        data["message"] = message
    return data


def result_to_dict(result: FormResult) -> dict[str, Any]:
    """Convert a form result to a nested dictionary suitable for TOML export.

    Fields without a payload are left out since TOML has no null value.
    """
    fields = {name: _serialize_payload(payload) for name, payload in result.payloads.items() if payload is not None}
    return {
        "success": result.success,
        "failed": result.failed_fields(),
        "fields": fields,
    }


def export_result_to_toml(result: FormResult, output_path: Path | str) -> None:
    """Write a form result to a TOML file."""
    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(result_to_dict(result), f)

    logger.debug(f"Exported results to {output_path}")

"""Helpers for reading and writing persisted action documents.

A persisted document is a JSON-compatible dict with a ``type`` tag plus
variant-specific fields. Optional sub-documents are omitted, never written
as null, so a missing key and an empty value stay distinguishable.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from flowtrigger.exceptions import MalformedDocumentError, TypeMismatchError
from flowtrigger.models.execution import ExecutionOptions, SlaOption

_INT_PATTERN = re.compile(r"-?\d+", re.ASCII)


def check_type(document: Mapping[str, Any], expected: str) -> None:
    """Fail unless the document's ``type`` tag equals *expected*.

    Raises:
        MalformedDocumentError: If the document is not a JSON object.
        TypeMismatchError: On any other tag, including a missing one.
    """
    if not isinstance(document, Mapping):
        raise MalformedDocumentError(
            f"Action document must be an object, got {type(document).__name__}"
        )
    actual = document.get("type")
    if actual != expected:
        raise TypeMismatchError(expected, actual)


def require_str(document: Mapping[str, Any], key: str) -> str:
    """Read a required string field."""
    if key not in document:
        raise MalformedDocumentError(f"Missing required field: {key}", field=key)
    value = document[key]
    if not isinstance(value, str):
        raise MalformedDocumentError(
            f"Field {key} must be a string, got {type(value).__name__}", field=key
        )
    return value


def require_int(document: Mapping[str, Any], key: str) -> int:
    """Read a required integer field persisted as its string encoding.

    Only the canonical decimal form is accepted: an optional minus sign and
    ASCII digits, with no whitespace or underscores. A plain JSON integer is
    accepted as well. Booleans and floats are rejected.
    """
    if key not in document:
        raise MalformedDocumentError(f"Missing required field: {key}", field=key)
    value = document[key]
    if isinstance(value, bool):
        raise MalformedDocumentError(f"Field {key} must be an integer, got bool", field=key)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INT_PATTERN.fullmatch(value):
        return int(value)
    raise MalformedDocumentError(
        f"Field {key} must be an integer string, got {value!r}", field=key
    )


def read_execution_options(document: Mapping[str, Any]) -> ExecutionOptions | None:
    """Parse ``executionOptions`` if present; None when the key is absent."""
    if "executionOptions" not in document:
        return None
    return ExecutionOptions.from_object(document["executionOptions"])


def read_sla_options(document: Mapping[str, Any]) -> list[SlaOption] | None:
    """Parse ``slaOptions`` in order if present; None when the key is absent."""
    if "slaOptions" not in document:
        return None
    raw = document["slaOptions"]
    if not isinstance(raw, list):
        raise MalformedDocumentError(
            f"slaOptions must be a list, got {type(raw).__name__}", field="slaOptions"
        )
    return [SlaOption.from_object(item) for item in raw]


def write_optional(
    document: dict[str, Any],
    execution_options: ExecutionOptions | None,
    sla_options: list[SlaOption] | None,
) -> None:
    """Add the optional sub-documents that are set."""
    if execution_options is not None:
        document["executionOptions"] = execution_options.to_object()
    if sla_options is not None:
        document["slaOptions"] = [sla.to_object() for sla in sla_options]

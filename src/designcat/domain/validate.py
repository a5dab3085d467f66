"""Itemised validation of candidate entry payloads.

Unlike the normalizer, validation repairs nothing; it explains what is wrong
so import previews can show every problem to the user.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from designcat.domain.model import Level, Status, ValidationResult

OPTIONAL_TEXT_FIELDS = ("notes", "description", "previewKind", "code")


def validate_entry(candidate: object) -> ValidationResult:
    if not isinstance(candidate, Mapping):
        return ValidationResult(issues=("Entry must be an object",))
    data = cast(Mapping[str, object], candidate)
    issues: list[str] = []

    if not _non_empty_text(data.get("id")):
        issues.append("Missing or invalid id")
    if not _non_empty_text(data.get("name")):
        issues.append("Missing or invalid name")

    levels = [level.value for level in Level]
    if data.get("level") not in levels:
        issues.append(f"level must be one of: {', '.join(levels)}")

    statuses = [status.value for status in Status]
    if data.get("status") not in statuses:
        issues.append(f"status must be one of: {', '.join(statuses)}")

    if not isinstance(data.get("version"), str):
        issues.append("version must be a string")

    if not isinstance(data.get("tags"), list):
        issues.append("tags must be an array")
    if not isinstance(data.get("dependencies"), list) and not isinstance(data.get("deps"), list):
        issues.append("dependencies must be an array")

    issues.extend(
        f"{field_name} must be a string"
        for field_name in OPTIONAL_TEXT_FIELDS
        if data.get(field_name) is not None and not isinstance(data.get(field_name), str)
    )

    if data.get("propsSpec") is not None and not isinstance(data.get("propsSpec"), list):
        issues.append("propsSpec must be an array")
    if data.get("demo") is not None and not isinstance(data.get("demo"), Mapping):
        issues.append("demo must be an object")

    return ValidationResult(issues=tuple(issues))


def _non_empty_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())

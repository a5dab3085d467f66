"""Validating import documents before anything is merged into the catalog."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from logging import getLogger
from typing import Final, cast

from designcat.common.serialization import safe_parse
from designcat.domain.document import IMPORT_KEYS, IMPORT_STRATEGIES, extract_entries
from designcat.domain.model import ImportResult
from designcat.domain.normalize import normalize_entry
from designcat.domain.validate import validate_entry

log = getLogger(__name__)

DEFAULT_ERROR_LIMIT: Final[int] = 5

_UNPARSEABLE = object()


@dataclass(frozen=True, slots=True)
class ImportPreview:
    can_import: bool
    total: int
    valid: int
    error_summary: str


def parse_import(text: object) -> ImportResult:
    """Parse and validate an import document. Never raises.

    ``text`` is JSON text, or an already decoded array or object such as the
    output of ``build_export``. ``is_valid`` is true when at least one
    candidate passed validation.
    """

    result = ImportResult()
    if isinstance(text, (list, Mapping)):
        document: object = text
    elif not isinstance(text, str) or not text.strip():
        result.errors.append("Invalid input: expected a non-empty document")
        return result
    else:
        document = safe_parse(text.strip(), _UNPARSEABLE)
    if document is _UNPARSEABLE:
        result.errors.append("Invalid JSON syntax")
        return result
    if document is None:
        result.errors.append("Empty JSON data after parsing")
        return result
    if not isinstance(document, (list, Mapping)):
        result.errors.append("Invalid document format: expected array or object")
        return result

    extraction = extract_entries(document, IMPORT_STRATEGIES)
    if extraction is None:
        result.errors.append(f"No entry array found. Expected one of: {', '.join(IMPORT_KEYS)}")
        return result
    if extraction.strategy.warning:
        result.warnings.append(extraction.strategy.warning)
    if not extraction.items:
        result.errors.append("No entries found in document")
        return result

    _collect(result, extraction.items)
    log.info(
        "Import parsed: total=%s valid=%s invalid=%s skipped=%s",
        result.summary.total,
        result.summary.valid,
        result.summary.invalid,
        result.summary.skipped,
    )
    return result


def _collect(result: ImportResult, candidates: list[object]) -> None:
    summary = result.summary
    summary.total = len(candidates)
    seen_ids: set[str] = set()

    for index, candidate in enumerate(candidates, start=1):
        if not isinstance(candidate, Mapping):
            result.errors.append(f"Entry {index}: Not an object")
            summary.invalid += 1
            continue

        validation = validate_entry(candidate)
        if not validation.is_valid:
            label = _label(cast(Mapping[str, object], candidate))
            result.errors.extend(f"Entry {index} ({label}): {issue}" for issue in validation.issues)
            summary.invalid += 1
            continue

        entry = normalize_entry(candidate, position=index - 1)
        if entry is None:
            result.errors.append(f"Entry {index}: Failed to normalize after validation")
            summary.invalid += 1
            continue
        if entry.id in seen_ids:
            result.warnings.append(f'Entry {index}: duplicate id "{entry.id}" skipped')
            summary.skipped += 1
            continue

        seen_ids.add(entry.id)
        result.entries.append(entry)
        summary.valid += 1

    if not result.entries:
        result.errors.append("No valid entries could be imported - all entries were malformed")
    elif summary.invalid or summary.skipped:
        result.warnings.append(
            f"{summary.invalid + summary.skipped} entries were skipped due to validation errors"
        )


def _label(candidate: Mapping[str, object]) -> str:
    for key in ("name", "id"):
        value = candidate.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return "unnamed"


def format_import_errors(result: ImportResult, *, limit: int = DEFAULT_ERROR_LIMIT) -> str:
    """Render errors (first ``limit`` only), warnings and a summary line."""

    lines: list[str] = []
    if result.errors:
        lines.append(f"Errors ({len(result.errors)}):")
        lines.extend(
            f"  {number}. {error}" for number, error in enumerate(result.errors[:limit], start=1)
        )
        if len(result.errors) > limit:
            lines.append(f"  ... and {len(result.errors) - limit} more errors")
        lines.append("")
    if result.warnings:
        lines.append(f"Warnings ({len(result.warnings)}):")
        lines.extend(
            f"  {number}. {warning}" for number, warning in enumerate(result.warnings, start=1)
        )
        lines.append("")
    lines.append(
        f"Summary: {result.summary.valid}/{result.summary.total} entries will be imported"
    )
    return "\n".join(lines)


def preview_import(text: object) -> ImportPreview:
    result = parse_import(text)
    if result.errors:
        error_summary = f"{len(result.errors)} validation errors found"
    elif result.warnings:
        error_summary = f"{len(result.warnings)} warnings"
    else:
        error_summary = "All entries valid"
    return ImportPreview(
        can_import=result.is_valid,
        total=result.summary.total,
        valid=result.summary.valid,
        error_summary=error_summary,
    )

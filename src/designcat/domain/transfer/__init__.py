"""Import and export of catalog documents."""

from __future__ import annotations

from .exporter import build_export, render_export
from .importer import ImportPreview, format_import_errors, parse_import, preview_import
from .schema import EXPORT_FORMAT_VERSION, ExportDocument, ExportMetadata

__all__ = [
    "EXPORT_FORMAT_VERSION",
    "ExportDocument",
    "ExportMetadata",
    "ImportPreview",
    "build_export",
    "format_import_errors",
    "parse_import",
    "preview_import",
    "render_export",
]

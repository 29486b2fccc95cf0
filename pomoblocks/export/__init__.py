"""Export package."""

from .formatter import (
    ExportTarget,
    EXPORT_TARGET_LABELS,
    CSV_FILENAME,
    CSV_MIME,
    MARKDOWN_FILENAME,
    MARKDOWN_MIME,
    format_duration,
    format_timestamp,
    encode_component,
    to_csv,
    to_markdown,
    write_csv,
    write_markdown,
    export_url,
)

__all__ = [
    "ExportTarget",
    "EXPORT_TARGET_LABELS",
    "CSV_FILENAME",
    "CSV_MIME",
    "MARKDOWN_FILENAME",
    "MARKDOWN_MIME",
    "format_duration",
    "format_timestamp",
    "encode_component",
    "to_csv",
    "to_markdown",
    "write_csv",
    "write_markdown",
    "export_url",
]

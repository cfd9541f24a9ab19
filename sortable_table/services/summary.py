from __future__ import annotations

from ..models.document_result import DocumentResult

"""SUMMARY line rendering for the command-line tool."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # avoid scientific notation for very small durations
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: DocumentResult) -> str:
    """Render the SUMMARY line for a processed document.

    Format:
    SUMMARY tables={n} indexed={n} rows={n} visible={n} elapsed_sec={s}

    >>> render_summary_line(DocumentResult())
    'SUMMARY tables=0 indexed=0 rows=0 visible=0 elapsed_sec=0'
    """
    return (
        f"SUMMARY tables={result.total_tables} "
        f"indexed={result.indexed_tables} "
        f"rows={result.total_rows} "
        f"visible={result.visible_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )

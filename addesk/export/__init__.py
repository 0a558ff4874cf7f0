"""Export row contract and presentation-boundary formatting."""

from .formatting import (
    MetricCard,
    build_metric_cards,
    format_number,
    format_pct,
    to_fixed,
)
from .rows import (
    EXPORT_COLUMNS,
    build_export_rows,
    export_filename,
    flatten_structure,
    item_to_row,
    structure_frame,
    summary_rows,
)

__all__ = [
    "EXPORT_COLUMNS",
    "MetricCard",
    "build_export_rows",
    "build_metric_cards",
    "export_filename",
    "flatten_structure",
    "format_number",
    "format_pct",
    "item_to_row",
    "structure_frame",
    "summary_rows",
    "to_fixed",
]

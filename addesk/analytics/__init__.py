"""Aggregation and report building for campaign dashboards."""

from .aggregator import (
    aggregate,
    aggregate_tree,
    compute_totals,
    pacing,
    percentage,
    round_half_up,
)
from .builder import (
    build_daily_series,
    build_dashboard_data,
    build_flat_dashboard_data,
    chart_label,
    discover_zones,
    format_period,
    parse_day,
    split_contracted,
)

__all__ = [
    "aggregate",
    "aggregate_tree",
    "build_daily_series",
    "build_dashboard_data",
    "build_flat_dashboard_data",
    "chart_label",
    "compute_totals",
    "discover_zones",
    "format_period",
    "pacing",
    "parse_day",
    "percentage",
    "round_half_up",
    "split_contracted",
]

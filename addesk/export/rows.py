"""Flattened export rows - the row shape spreadsheet and CSV writers consume."""

import re
from typing import Any, Iterable

import polars as pl

from ..analytics.aggregator import aggregate_tree, compute_totals, pacing
from ..exceptions import VehicleNotFoundError
from ..models.dashboard import StructureItem
from .formatting import to_fixed

DEFAULT_CHILD_PREFIX = "  └ "

EXPORT_SCHEMA = {
    "Veículo": pl.Utf8,
    "Contratado": pl.Int64,
    "Entregue": pl.Int64,
    "Pacing (%)": pl.Int64,
    "Impressões": pl.Int64,
    "Viewables": pl.Int64,
    "VA (%)": pl.Utf8,
    "Cliques": pl.Int64,
    "CTR (%)": pl.Utf8,
    "Views": pl.Int64,
    "VTR (%)": pl.Utf8,
}

EXPORT_COLUMNS = tuple(EXPORT_SCHEMA)


def item_to_row(item: StructureItem, prefix: str = "") -> dict[str, Any]:
    """One export row. Pacing is recomputed from contracted and delivered."""
    return {
        "Veículo": prefix + item.name,
        "Contratado": item.contracted,
        "Entregue": item.delivered,
        "Pacing (%)": pacing(item.delivered, item.contracted),
        "Impressões": item.impressions,
        "Viewables": item.viewables,
        "VA (%)": to_fixed(item.va, 0),
        "Cliques": item.clicks,
        "CTR (%)": to_fixed(item.ctr, 2),
        "Views": item.views,
        "VTR (%)": to_fixed(item.vtr, 2),
    }


def _append_rows(
    item: StructureItem,
    depth: int,
    child_prefix: str,
    rows: list[dict[str, Any]],
) -> None:
    prefix = "" if depth == 0 else "  " * (depth - 1) + child_prefix
    rows.append(item_to_row(item, prefix))
    for child in item.children:
        _append_rows(child, depth + 1, child_prefix, rows)


def flatten_structure(
    structure: Iterable[StructureItem],
    child_prefix: str = DEFAULT_CHILD_PREFIX,
) -> list[dict[str, Any]]:
    """Rows for every node: each vehicle (aggregated) followed by its placements."""
    rows: list[dict[str, Any]] = []
    for item in structure:
        _append_rows(aggregate_tree(item), 0, child_prefix, rows)
    return rows


def summary_rows(structure: Iterable[StructureItem]) -> list[dict[str, Any]]:
    """Campaign totals as Métrica/Valor rows for the general report."""
    totals = compute_totals(structure)
    return [
        {"Métrica": "Contratado Total", "Valor": totals.contracted},
        {"Métrica": "Entregue Total", "Valor": totals.delivered},
        {"Métrica": "Impressões", "Valor": totals.impressions},
        {"Métrica": "Visualizações", "Valor": totals.views},
        {"Métrica": "Cliques", "Valor": totals.clicks},
        {"Métrica": "Viewability (%)", "Valor": to_fixed(totals.viewability, 1)},
        {"Métrica": "CTR (%)", "Valor": to_fixed(totals.ctr, 2)},
        {"Métrica": "VTR (%)", "Valor": to_fixed(totals.vtr, 2)},
    ]


def find_vehicle(structure: list[StructureItem], name: str) -> StructureItem:
    for item in structure:
        if item.name == name:
            return item
    raise VehicleNotFoundError(name, [item.name for item in structure])


def build_export_rows(
    structure: list[StructureItem],
    vehicle: str | None = None,
    child_prefix: str = DEFAULT_CHILD_PREFIX,
) -> list[dict[str, Any]]:
    """Rows for a downloadable report.

    Args:
        structure: Top-level vehicles
        vehicle: Vehicle name for a single-vehicle report, None for the
            general report
        child_prefix: Text prepended to placement names

    Returns:
        General report: totals rows, an empty separator row, then every
        vehicle flattened. Vehicle report: that vehicle flattened.

    Raises:
        VehicleNotFoundError: If ``vehicle`` is not in the structure
    """
    if vehicle is None:
        return [
            *summary_rows(structure),
            {},
            *flatten_structure(structure, child_prefix),
        ]
    return flatten_structure([find_vehicle(structure, vehicle)], child_prefix)


def structure_frame(
    structure: Iterable[StructureItem],
    child_prefix: str = DEFAULT_CHILD_PREFIX,
) -> pl.DataFrame:
    """Flattened structure rows as a DataFrame with the export column order."""
    return pl.DataFrame(flatten_structure(structure, child_prefix), schema=EXPORT_SCHEMA)


def export_filename(vehicle: str | None, extension: str) -> str:
    """``relatorio_geral.csv`` or ``relatorio_<vehicle_slug>.<extension>``."""
    slug = "geral" if vehicle is None else re.sub(r"\s+", "_", vehicle.lower())
    return f"relatorio_{slug}.{extension}"

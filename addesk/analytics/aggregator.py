"""Structure aggregation - rollups of placements into vehicles and totals.

All functions are pure: inputs are never mutated, new values are returned.
"""

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..models.dashboard import StructureItem, Totals

COUNTER_FIELDS = ("contracted", "delivered", "impressions", "viewables", "clicks", "views")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(numerator: int | float, denominator: int | float) -> float:
    """numerator / denominator * 100, or 0.0 when the denominator is 0."""
    if denominator == 0:
        return 0.0
    return numerator / denominator * 100


def pacing(delivered: int, contracted: int) -> int:
    """Delivered as a whole percentage of contracted, 0 with no target."""
    if contracted == 0:
        return 0
    return round_half_up(delivered / contracted * 100)


def _sum_counters(items: Iterable[StructureItem]) -> dict[str, int]:
    sums = dict.fromkeys(COUNTER_FIELDS, 0)
    for item in items:
        for name in COUNTER_FIELDS:
            sums[name] += getattr(item, name)
    return sums


def aggregate(item: StructureItem) -> StructureItem:
    """Roll a node's direct children up into the node.

    Sums contracted, delivered, impressions, viewables, clicks and views over
    the children and recomputes va, ctr and vtr from the sums. Only one level
    is rolled up; use ``aggregate_tree`` for deeper structures. ``pacing`` is
    left as stored.

    Args:
        item: Node to aggregate

    Returns:
        The same node when it has no children, otherwise a new node carrying
        its children's sums.
    """
    if not item.has_children:
        return item

    sums = _sum_counters(item.children)
    impressions = sums["impressions"]
    return replace(
        item,
        **sums,
        va=percentage(sums["viewables"], impressions),
        ctr=percentage(sums["clicks"], impressions),
        vtr=percentage(sums["views"], impressions),
    )


def aggregate_tree(item: StructureItem) -> StructureItem:
    """Aggregate a structure of any depth bottom-up (post-order)."""
    if not item.has_children:
        return item
    children = tuple(aggregate_tree(child) for child in item.children)
    return aggregate(replace(item, children=children))


def compute_totals(structure: Iterable[StructureItem]) -> Totals:
    """Consolidated totals across top-level vehicles.

    Each vehicle is aggregated first so totals reflect its placements, not
    stale vehicle counters. Rates are taken from the summed counters, never
    averaged across vehicles.

    Args:
        structure: Top-level vehicles, aggregated or not

    Returns:
        Totals with summed counters, pacing, viewability, ctr and vtr.
    """
    sums = _sum_counters(aggregate(item) for item in structure)
    impressions = sums["impressions"]
    return Totals(
        **sums,
        pacing=pacing(sums["delivered"], sums["contracted"]),
        viewability=percentage(sums["viewables"], impressions),
        ctr=percentage(sums["clicks"], impressions),
        vtr=percentage(sums["views"], impressions),
    )

"""Payload ingestion: settings, saved JSON and backend payload parsing."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import PayloadValidationError, SettingsLoadError
from ..models.adserver import (
    Campaign,
    CampaignReport,
    DailyCampaignReport,
    FlatCampaignReport,
)
from ..models.settings import ReportSettings

logger = logging.getLogger(__name__)

_CAMPAIGN_LIST = TypeAdapter(list[Campaign])


def load_settings(path: Path) -> ReportSettings:
    """Load report settings from YAML.

    Raises:
        SettingsLoadError: If the file is missing, unparsable or invalid.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return ReportSettings.from_dict(data)
    except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
        raise SettingsLoadError(f"Failed to load settings from {path}: {e}") from e


def load_json(path: Path) -> Any:
    """Read a saved backend payload from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _validate(model: type[BaseModel], payload: Any, source: str) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise PayloadValidationError(source, e.errors()) from e


def parse_campaign(payload: dict[str, Any]) -> Campaign:
    """Validate a single campaign object."""
    return _validate(Campaign, payload, "campaign")


def parse_campaigns(payload: list[dict[str, Any]]) -> list[Campaign]:
    """Validate the campaign list returned by ``GET /campaigns``."""
    try:
        return _CAMPAIGN_LIST.validate_python(payload)
    except ValidationError as e:
        raise PayloadValidationError("campaign list", e.errors()) from e


def is_daily_report(payload: Any) -> bool:
    """Day-granular reports carry a ``days`` list on their sites.

    A report without sites has no flat counters either, so it is treated as
    day-granular whenever it names its campaign and date range.
    """
    if not isinstance(payload, dict):
        return False
    sites = payload.get("sites")
    if isinstance(sites, list) and sites:
        return any(isinstance(site, dict) and "days" in site for site in sites)
    return "dateBegin" in payload and "campaign_id" in payload


def parse_report(payload: Any) -> CampaignReport:
    """Validate a report payload into its shape-specific model.

    Returns:
        DailyCampaignReport for the per-day/per-zone shape, FlatCampaignReport
        for the per-site totals shape.
    """
    if is_daily_report(payload):
        report = _validate(DailyCampaignReport, payload, "daily report")
    else:
        report = _validate(FlatCampaignReport, payload, "flat report")

    logger.debug(
        "Parsed %s with %d site(s)", type(report).__name__, len(report.sites)
    )
    return report

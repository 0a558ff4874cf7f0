"""Custom exceptions for report ingestion and assembly."""

from typing import Any


class ReportError(Exception):
    """Base exception for report errors."""

    pass


class SettingsLoadError(ReportError):
    """Failed to load report settings."""

    pass


class PayloadValidationError(ReportError):
    """Backend payload failed validation against its Pydantic model."""

    def __init__(self, source: str, errors: list[dict[str, Any]]):
        self.source = source
        self.errors = errors
        super().__init__(
            f"Invalid {source} payload: {len(errors)} error(s). "
            f"First error: {errors[0] if errors else 'N/A'}"
        )


class CampaignNotFoundError(ReportError):
    """Requested campaign is not in the fetched campaign list."""

    def __init__(self, campaign_id: int, available_ids: list[int]):
        self.campaign_id = campaign_id
        self.available_ids = available_ids
        super().__init__(
            f"Campaign ID {campaign_id} not found. "
            f"Available: {available_ids[:10]}"
        )


class CampaignMismatchError(ReportError):
    """Report was fetched for a different campaign."""

    def __init__(self, campaign_id: int, report_campaign_id: int):
        self.campaign_id = campaign_id
        self.report_campaign_id = report_campaign_id
        super().__init__(
            f"Report belongs to campaign {report_campaign_id}, "
            f"expected {campaign_id}"
        )


class VehicleNotFoundError(ReportError):
    """Vehicle name not present in the campaign structure."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Vehicle {name!r} not found. Available: {available}")

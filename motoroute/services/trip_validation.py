"""
Trip Validation Service - decides whether a trip is ready to be published

The validator is pure: it reads a TripSnapshot and returns a report. It never
raises for malformed trip content; a broken GPX file or a missing stage field
becomes one more entry in the report. Every check runs on every call, so the
author sees all problems at once.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from motoroute.config import ValidationSettings, get_settings
from motoroute.models.internal_models import GpxAttachment, MediaItem, StageSnapshot, TripSnapshot
from motoroute.services.gpx_parser import GpxParseError, parse_gpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationIssue:
    field: str
    code: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field": self.field, "code": self.code, "message": self.message}


@dataclass
class ValidationReport:
    errors: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.errors]

    def issues_as_dicts(self) -> List[Dict[str, Any]]:
        return [issue.to_dict() for issue in self.errors]


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class TripValidator:
    """Publication checks for a single trip snapshot"""

    def __init__(self, limits: Optional[ValidationSettings] = None):
        self.limits = limits or get_settings().validation

    def validate_for_publication(self, trip: TripSnapshot) -> ValidationReport:
        report = ValidationReport()
        errors = report.errors

        errors.extend(self._check_text_fields(trip))
        errors.extend(self._check_duration(trip))
        errors.extend(self._check_stages(trip.stages))
        errors.extend(self._check_gpx(trip.gpx_file, "gpx_file", "GPX_INVALID", "Trip GPX track"))
        errors.extend(self._check_media(trip.media, "media"))

        if not report.is_valid:
            logger.debug(
                f"Trip {trip.id} failed {len(errors)} publication checks",
                extra={"trip_id": trip.id, "codes": report.codes},
            )
        return report

    def _check_text_fields(self, trip: TripSnapshot) -> List[ValidationIssue]:
        limits = self.limits
        issues = []

        if _is_blank(trip.title):
            issues.append(ValidationIssue("title", "TITLE_REQUIRED", "Title is required"))
        elif not limits.title_min_length <= len(trip.title.strip()) <= limits.title_max_length:
            issues.append(ValidationIssue(
                "title", "TITLE_LENGTH",
                f"Title must be between {limits.title_min_length} and {limits.title_max_length} characters",
            ))

        if _is_blank(trip.summary):
            issues.append(ValidationIssue("summary", "SUMMARY_REQUIRED", "Summary is required"))
        elif not limits.summary_min_length <= len(trip.summary.strip()) <= limits.summary_max_length:
            issues.append(ValidationIssue(
                "summary", "SUMMARY_LENGTH",
                f"Summary must be between {limits.summary_min_length} and {limits.summary_max_length} characters",
            ))

        if _is_blank(trip.destination):
            issues.append(ValidationIssue("destination", "DESTINATION_REQUIRED", "Destination is required"))
        elif len(trip.destination.strip()) > limits.destination_max_length:
            issues.append(ValidationIssue(
                "destination", "DESTINATION_LENGTH",
                f"Destination cannot exceed {limits.destination_max_length} characters",
            ))

        return issues

    def _check_duration(self, trip: TripSnapshot) -> List[ValidationIssue]:
        issues = []
        days_ok = _is_int(trip.duration_days) and trip.duration_days > 0
        if not days_ok:
            issues.append(ValidationIssue(
                "duration_days", "DURATION_DAYS_INVALID", "Duration in days must be a positive integer",
            ))

        nights = trip.duration_nights
        if not _is_int(nights) or nights < 0 or (days_ok and nights > trip.duration_days):
            issues.append(ValidationIssue(
                "duration_nights", "DURATION_NIGHTS_INVALID",
                "Duration in nights must be a non-negative integer not greater than the days",
            ))
        return issues

    def _check_stages(self, stages: List[StageSnapshot]) -> List[ValidationIssue]:
        limits = self.limits

        if not stages:
            return [ValidationIssue("stages", "STAGES_REQUIRED", "Trip must have at least one stage")]

        issues = []
        if len(stages) > limits.max_stages:
            issues.append(ValidationIssue(
                "stages", "STAGES_TOO_MANY", f"A trip cannot have more than {limits.max_stages} stages",
            ))

        indices = sorted(stage.order_index for stage in stages)
        if indices != list(range(len(stages))):
            issues.append(ValidationIssue(
                "stages", "STAGES_ORDER_INVALID", "Stage order must be sequential starting from 01",
            ))

        for stage in sorted(stages, key=lambda s: s.order_index):
            issues.extend(self._check_stage(stage))
        return issues

    def _check_stage(self, stage: StageSnapshot) -> List[ValidationIssue]:
        limits = self.limits
        prefix = f"stages.{stage.label}"
        issues = []

        if _is_blank(stage.title) or not (
            limits.stage_title_min_length <= len(stage.title.strip()) <= limits.stage_title_max_length
        ):
            issues.append(ValidationIssue(
                f"{prefix}.title", "STAGE_TITLE_INVALID",
                f"Stage {stage.label}: title must be between {limits.stage_title_min_length} "
                f"and {limits.stage_title_max_length} characters",
            ))

        if _is_blank(stage.description):
            issues.append(ValidationIssue(
                f"{prefix}.description", "STAGE_DESCRIPTION_REQUIRED",
                f"Stage {stage.label}: description is required",
            ))
        elif len(stage.description) > limits.stage_description_max_length:
            issues.append(ValidationIssue(
                f"{prefix}.description", "STAGE_DESCRIPTION_TOO_LONG",
                f"Stage {stage.label}: description cannot exceed {limits.stage_description_max_length} characters",
            ))

        if stage.gpx_file is None:
            issues.append(ValidationIssue(
                f"{prefix}.gpx_file", "STAGE_GPX_REQUIRED", f"Stage {stage.label}: GPX track is required",
            ))
        else:
            issues.extend(self._check_gpx(
                stage.gpx_file, f"{prefix}.gpx_file", "STAGE_GPX_INVALID", f"Stage {stage.label}: GPX track",
            ))

        issues.extend(self._check_media(stage.media, f"{prefix}.media"))
        return issues

    def _check_gpx(
        self, gpx: Optional[GpxAttachment], field_name: str, code: str, label: str
    ) -> List[ValidationIssue]:
        if gpx is None:
            return []
        try:
            parsed = parse_gpx(gpx.content)
        except GpxParseError as e:
            return [ValidationIssue(field_name, code, f"{label} '{gpx.filename}' could not be read: {e}")]
        if parsed.is_empty:
            return [ValidationIssue(field_name, code, f"{label} '{gpx.filename}' contains no points")]
        return []

    def _check_media(self, media: List[MediaItem], field_name: str) -> List[ValidationIssue]:
        limit = self.limits.caption_max_length
        issues = []
        for position, item in enumerate(media):
            if item.caption is not None and len(item.caption) > limit:
                issues.append(ValidationIssue(
                    f"{field_name}.{position}.caption", "MEDIA_CAPTION_TOO_LONG",
                    f"Media caption cannot exceed {limit} characters",
                ))
            if item.is_temporary:
                issues.append(ValidationIssue(
                    f"{field_name}.{position}.id", "MEDIA_NOT_PERSISTED",
                    f"Media item {item.id} has not been saved yet",
                ))
        return issues


def validate_for_publication(
    trip: TripSnapshot, limits: Optional[ValidationSettings] = None
) -> ValidationReport:
    return TripValidator(limits).validate_for_publication(trip)

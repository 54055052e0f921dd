"""TA tracker domain pipeline.

Loads the hiring-manager tracker export, normalizes candidate rows and
derives funnel, recruiter, panelist and SLA views from them.
"""

from pathlib import Path

from hiring_analytics.config import DEFAULT_LOADER_CONFIG, DEFAULT_SLA_POLICY, LoaderConfig, SLAPolicy
from hiring_analytics.tracker.ingest import HeaderNotFoundError, load_tracker, parse_tracker_content
from hiring_analytics.tracker.transform import normalize_row
from hiring_analytics.tracker.filters import (
    filter_by_attributes,
    filter_by_date_range,
    filter_data_for_hiring_manager,
    filter_data_for_panellist,
    filter_data_for_recruiter,
    search_candidates,
)
from hiring_analytics.tracker.funnel import calculate_pipeline_metrics, calculate_source_distribution
from hiring_analytics.tracker.recruiters import calculate_recruiter_metrics
from hiring_analytics.tracker.panelists import calculate_panelist_metrics, extract_interviews_for_panelist
from hiring_analytics.tracker.sla import (
    feedback_sla_alerts,
    sourcing_sla_alerts,
    time_to_fill_alerts,
    time_to_hire_alerts,
)
from hiring_analytics.tracker.models import CandidateRecord, DateFilters, candidate_schema, records_to_frame
from hiring_analytics.utils.validators import validate_dataframe


def validate(path: Path, config: LoaderConfig = DEFAULT_LOADER_CONFIG) -> dict:
    """Check that the tracker export loads and its normalized rows pass the schema."""
    try:
        records = load_tracker(path, config)
    except (FileNotFoundError, HeaderNotFoundError) as exc:
        return {"status": "error", "message": str(exc)}

    result = validate_dataframe(records_to_frame(records), candidate_schema)
    match result:
        case {"valid": True}:
            return {"status": "ok", "row_count": len(records)}
        case {"errors": errors}:
            return {"status": "error", "message": "; ".join(errors)}
        case _:
            return {"status": "error", "message": "Unknown validation result"}


def run(
    records: list[CandidateRecord],
    filters: DateFilters | None = None,
    sla: SLAPolicy = DEFAULT_SLA_POLICY,
) -> dict:
    """Compute the super-admin view over an already loaded dataset."""
    current = filter_by_date_range(records, filters) if filters else records
    return {
        "pipeline": calculate_pipeline_metrics(current),
        "sources": calculate_source_distribution(current),
        "sourcing_alerts": sourcing_sla_alerts(current, sla),
        "feedback_alerts": feedback_sla_alerts(current, sla),
        "tth_alerts": time_to_hire_alerts(current, sla),
        "ttf_alerts": time_to_fill_alerts(current, sla),
    }

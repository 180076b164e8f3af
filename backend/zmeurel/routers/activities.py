"""Agricultural activity (treatment) router.

Endpoints (besides the standard record routes):
    GET /api/activities/                 List, optionally filtered by pause status
    GET /api/activities/pause-status     Compute a pause status without storing anything

Every activity response carries its earliest harvest date and pause status
relative to ``today``, a query parameter accepted by every route that
returns activities (defaults to the server's date).
"""

from datetime import date

from fastapi import APIRouter, Depends, Query

from zmeurel.entities import EntityType
from zmeurel.routers.records import add_record_routes
from zmeurel.schemas.activity import (
    ActivityCreate,
    ActivityOut,
    ActivityUpdate,
    PauseStatusOut,
)
from zmeurel.services.crud import list_records
from zmeurel.services.pause_status import (
    PauseState,
    compute_pause_status,
    filter_by_pause_state,
)
from zmeurel.services.record_store import RecordStore, get_record_store
from zmeurel.tenancy import get_current_tenant_id

router = APIRouter()


def activity_out(activity: dict, today: date | None = None) -> ActivityOut:
    pause = compute_pause_status(
        activity["application_date"], activity.get("waiting_period_days") or 0, today
    )
    return ActivityOut(
        **activity,
        earliest_harvest_date=pause.earliest_harvest_date,
        pause_status=pause.status,
    )


def reference_date(today: date | None = None) -> dict:
    """``?today=`` override for the pause status of returned activities."""
    return {"today": today}


async def serialize_activities(
    store: RecordStore, tenant_id: str, activities: list[dict], today: date | None = None
) -> list[ActivityOut]:
    return [activity_out(a, today) for a in activities]


@router.get("/", response_model=list[ActivityOut])
async def list_activities(
    pause_status: PauseState | None = None,
    today: date | None = None,
    store: RecordStore = Depends(get_record_store),
    tenant_id: str = Depends(get_current_tenant_id),
):
    activities = await list_records(store, tenant_id, EntityType.ACTIVITY)
    if pause_status is not None:
        activities = filter_by_pause_state(activities, pause_status, today)
    return [activity_out(a, today) for a in activities]


@router.get("/pause-status", response_model=PauseStatusOut)
async def get_pause_status(
    application_date: date,
    waiting_period_days: int = Query(0, ge=0),
    today: date | None = None,
):
    today = today or date.today()
    pause = compute_pause_status(application_date, waiting_period_days, today)
    return PauseStatusOut(
        application_date=application_date,
        waiting_period_days=waiting_period_days,
        today=today,
        earliest_harvest_date=pause.earliest_harvest_date,
        status=pause.status,
    )


add_record_routes(
    router, EntityType.ACTIVITY, ActivityCreate, ActivityUpdate, ActivityOut,
    serialize=serialize_activities,
    include_list=False,
    serialize_params=reference_date,
)

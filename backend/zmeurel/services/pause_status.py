"""Pre-harvest interval ("pause") status for agricultural treatments.

A treatment applied on day D with a waiting period of N days allows
harvesting from day D + N onwards, inclusive.  The reference day is passed
in explicitly; it only defaults to the local system date when omitted.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from zmeurel.middleware.exceptions import BusinessLogicError


class PauseState(str, enum.Enum):
    OK = "OK"
    WAITING = "WAITING"


@dataclass(frozen=True)
class PauseStatus:
    earliest_harvest_date: date
    status: PauseState


def _as_date(value: date | datetime) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    return value


def compute_pause_status(
    application_date: date | datetime,
    waiting_period_days: int,
    today: date | None = None,
) -> PauseStatus:
    """Earliest permitted harvest date and whether it has been reached.

    >>> compute_pause_status(date(2026, 1, 1), 10, today=date(2026, 1, 11)).status
    <PauseState.OK: 'OK'>
    """
    if waiting_period_days is None:
        waiting_period_days = 0
    if waiting_period_days < 0:
        raise BusinessLogicError(
            f"Waiting period cannot be negative: {waiting_period_days}",
            error_code="INVALID_WAITING_PERIOD",
        )

    earliest = _as_date(application_date) + timedelta(days=waiting_period_days)
    reference = _as_date(today) if today is not None else date.today()
    status = PauseState.OK if reference >= earliest else PauseState.WAITING
    return PauseStatus(earliest_harvest_date=earliest, status=status)


def filter_by_pause_state(
    activities: Iterable[dict],
    state: PauseState,
    today: date | None = None,
) -> list[dict]:
    """Keep the activity records whose pause status equals ``state``."""
    return [
        activity
        for activity in activities
        if compute_pause_status(
            activity["application_date"],
            activity.get("waiting_period_days") or 0,
            today,
        ).status == state
    ]

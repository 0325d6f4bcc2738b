"""Time-in-status report: one row per historic status of every task."""

from __future__ import annotations

import csv
from datetime import timezone, tzinfo
from typing import Dict, List, Mapping, TextIO

from clickup_client.models import TaskTimeInStatus
from clickup_client.utils.business_days import business_days_between, status_interval

CSV_FIELDS = [
    "task_id",
    "historic_status",
    "status_start",
    "status_end",
    "status_weekdays_duration",
    "status_order",
    "current_status",
    "current_status_start",
    "current_status_end",
    "current_status_weekdays_duration",
]


def time_in_status_rows(
    results: Mapping[str, TaskTimeInStatus], tz: tzinfo = timezone.utc
) -> List[Dict[str, str]]:
    """Flatten bulk time-in-status results into report rows (task ids sorted)."""
    rows: List[Dict[str, str]] = []
    for task_id in sorted(results):
        history = results[task_id]
        current = history.current_status
        current_start, current_end = status_interval(
            current.total_time.since, current.total_time.by_minute, tz=tz
        )
        current_days = business_days_between(current_start, current_end)

        for entry in history.status_history:
            start, end = status_interval(
                entry.total_time.since, entry.total_time.by_minute, tz=tz
            )
            rows.append(
                {
                    "task_id": task_id,
                    "historic_status": entry.status,
                    "status_start": start.isoformat(),
                    "status_end": end.isoformat(),
                    "status_weekdays_duration": str(business_days_between(start, end)),
                    "status_order": str(entry.orderindex),
                    "current_status": current.status,
                    "current_status_start": current_start.isoformat(),
                    "current_status_end": current_end.isoformat(),
                    "current_status_weekdays_duration": str(current_days),
                }
            )
    return rows


def write_csv(rows: List[Dict[str, str]], out: TextIO) -> None:
    writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)


__all__ = ["CSV_FIELDS", "time_in_status_rows", "write_csv"]

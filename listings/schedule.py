from typing import Dict, List, Sequence

from .schema import OperatingHour


def normalize_operating_hours(operating_hours: Sequence[OperatingHour]) -> List[Dict]:
    """
    Monday-first weekly hours -> one row per open day (1 = Monday, 7 = Sunday).
    Closed days produce no row; an all-closed week yields an empty list.
    """
    rows = []
    for index, hour in enumerate(operating_hours):
        if hour.closed:
            continue
        rows.append({
            "day_of_week": index + 1,
            "is_open": True,
            "open_time": hour.openTime,
            "close_time": hour.closeTime,
        })
    return rows

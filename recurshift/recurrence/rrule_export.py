"""Export recurrence patterns to iCalendar RRULE strings (export-only)."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from recurshift.models.recurrence import (
    ManualPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    WeeklyPattern,
)


# Indexed by our weekday convention (0=Sunday).
_WD_CODES: List[str] = ["SU", "MO", "TU", "WE", "TH", "FR", "SA"]


def pattern_to_rrule(pattern, until: Optional[date] = None) -> Optional[str]:
    """Convert a pattern to an RRULE (without the leading 'RRULE:' prefix).

    Manual patterns have no rule and return None. Out-of-range values are skipped.
    """
    parts: List[str] = []
    if isinstance(pattern, WeeklyPattern):
        days = [_WD_CODES[d] for d in pattern.days_of_week if 0 <= d <= 6]
        if not days:
            return None
        parts.append("FREQ=WEEKLY")
        parts.append("BYDAY=" + ",".join(days))
    elif isinstance(pattern, MonthlyByWeekdayPattern):
        if not 0 <= pattern.day_of_week <= 6:
            return None
        code = _WD_CODES[pattern.day_of_week]
        # Week 5 means "last", which RRULE spells as -1.
        ordinals = [("-1" if n == 5 else str(n)) for n in sorted(pattern.week_numbers) if 1 <= n <= 5]
        if not ordinals:
            return None
        parts.append("FREQ=MONTHLY")
        parts.append("BYDAY=" + ",".join(o + code for o in ordinals))
    elif isinstance(pattern, MonthlySpecificDaysPattern):
        days = sorted(d for d in pattern.days if 1 <= d <= 31)
        if not days:
            return None
        parts.append("FREQ=MONTHLY")
        parts.append("BYMONTHDAY=" + ",".join(str(d) for d in days))
    elif isinstance(pattern, ManualPattern):
        return None
    else:
        return None

    # UNTIL is the last day at 23:59:59 UTC.
    if until is not None:
        parts.append(f"UNTIL={until.strftime('%Y%m%d')}T235959Z")
    return ";".join(parts)

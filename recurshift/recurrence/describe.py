"""Human-readable summaries and previews of recurrence patterns.

The renderer never raises. Malformed weekday or ordinal indices show up as an
explicit "invalid" placeholder; validate_pattern is the authority on whether a
pattern is correct.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from recurshift.models.constants import DEFAULT_LOCALE, DEFAULT_PREVIEW_LIMIT, SUPPORTED_LOCALES
from recurshift.models.recurrence import (
    ManualPattern,
    MonthlyByWeekdayPattern,
    MonthlySpecificDaysPattern,
    RecurrenceConfig,
    WeeklyPattern,
)
from recurshift.recurrence.engine import calculate_dates

logger = logging.getLogger(__name__)


_LABELS: Dict[str, dict] = {
    "en": {
        "weekday_short": ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
        "weekday_long": ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
        "ordinals": ["1st", "2nd", "3rd", "4th", "last"],
        "and": "and",
        "invalid": "invalid",
        "weekly": "Weekly: {days}",
        "weekly_empty": "Weekly (no days selected)",
        "monthly_weekday": "{weeks} {day} of the month",
        "monthly_weekday_empty": "Monthly (no weeks selected)",
        "monthly_specific": "Days {days} of each month",
        "monthly_specific_one": "Day {days} of each month",
        "monthly_specific_empty": "Monthly (no days selected)",
        "manual": "Manually selected dates",
        "unknown": "Pattern not defined",
        "error": "Pattern description unavailable",
        "summary": "{description} • {count} shifts",
        "summary_one": "{description} • 1 shift",
    },
    "pt-BR": {
        "weekday_short": ["Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb"],
        "weekday_long": ["Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado"],
        "ordinals": ["Primeiro(a)", "Segundo(a)", "Terceiro(a)", "Quarto(a)", "Último(a)"],
        "and": "e",
        "invalid": "inválido",
        "weekly": "Semanalmente: {days}",
        "weekly_empty": "Recorrência semanal (nenhum dia selecionado)",
        "monthly_weekday": "{weeks} {day} do mês",
        "monthly_weekday_empty": "Recorrência mensal (nenhuma semana selecionada)",
        "monthly_specific": "Dias {days} de cada mês",
        "monthly_specific_one": "Dia {days} de cada mês",
        "monthly_specific_empty": "Recorrência mensal (nenhum dia selecionado)",
        "manual": "Datas selecionadas manualmente",
        "unknown": "Padrão não definido",
        "error": "Erro na descrição do padrão",
        "summary": "{description} • {count} plantões",
        "summary_one": "{description} • 1 plantão",
    },
}


def _labels(locale: Optional[str]) -> dict:
    if locale not in SUPPORTED_LOCALES:
        locale = DEFAULT_LOCALE if DEFAULT_LOCALE in SUPPORTED_LOCALES else "en"
    return _LABELS[locale]


def _lookup(table: List[str], index: int, labels: dict) -> str:
    if isinstance(index, int) and 0 <= index < len(table):
        return table[index]
    return labels["invalid"]


def _join(items: List[str], conjunction: str) -> str:
    if len(items) <= 1:
        return "".join(items)
    return f"{', '.join(items[:-1])} {conjunction} {items[-1]}"


def describe_pattern(pattern, locale: Optional[str] = None) -> str:
    """Short summary, e.g. "Weekly: Mon, Wed, Fri" or "1st and 3rd Monday of the month"."""
    labels = _labels(locale)
    try:
        return _describe(pattern, labels)
    except Exception as e:
        logger.error(f"Failed to describe recurrence pattern: {type(e).__name__}: {str(e)}")
        return labels["error"]


def _describe(pattern, labels: dict) -> str:
    if isinstance(pattern, WeeklyPattern):
        if not pattern.days_of_week:
            return labels["weekly_empty"]
        days = [_lookup(labels["weekday_short"], d, labels) for d in pattern.days_of_week]
        return labels["weekly"].format(days=", ".join(days))

    if isinstance(pattern, MonthlyByWeekdayPattern):
        if not pattern.week_numbers:
            return labels["monthly_weekday_empty"]
        weeks = [_lookup(labels["ordinals"], n - 1, labels) for n in sorted(pattern.week_numbers)]
        day = _lookup(labels["weekday_long"], pattern.day_of_week, labels)
        return labels["monthly_weekday"].format(weeks=_join(weeks, labels["and"]), day=day)

    if isinstance(pattern, MonthlySpecificDaysPattern):
        if not pattern.days:
            return labels["monthly_specific_empty"]
        valid = sorted(d for d in pattern.days if 1 <= d <= 31)
        shown = [str(d) for d in valid]
        if len(valid) < len(pattern.days):
            shown.append(labels["invalid"])
        key = "monthly_specific_one" if len(shown) == 1 and valid else "monthly_specific"
        return labels[key].format(days=", ".join(shown))

    if isinstance(pattern, ManualPattern):
        return labels["manual"]

    return labels["unknown"]


def preview_dates(config: RecurrenceConfig, limit: int = DEFAULT_PREVIEW_LIMIT) -> List[date]:
    """First `limit` dates the config produces."""
    return calculate_dates(config)[: max(limit, 0)]


def summarize_config(config: RecurrenceConfig, locale: Optional[str] = None) -> str:
    """Description plus the number of shifts the config would create."""
    labels = _labels(locale)
    description = describe_pattern(config.pattern, locale)
    count = len(calculate_dates(config))
    if count == 1:
        return labels["summary_one"].format(description=description)
    return labels["summary"].format(description=description, count=count)

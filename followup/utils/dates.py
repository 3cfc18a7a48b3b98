from __future__ import annotations
import calendar
from datetime import date, timedelta

PERIODS = ("today", "week", "month")

MONTH_NAMES = (
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
)


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def parse_iso_date(value: str | None) -> date | None:
    """'2026-01-31' -> date. Vazio => None; formato inválido => ValueError."""
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Data inválida: {value}")
    value = (value or "").strip()
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Data inválida: {value}")


def week_range(ref: date) -> tuple[date, date]:
    # semana começa na segunda-feira
    start = ref - timedelta(days=ref.weekday())
    return start, start + timedelta(days=6)


def month_range(ref: date) -> tuple[date, date]:
    last_day = calendar.monthrange(ref.year, ref.month)[1]
    return ref.replace(day=1), ref.replace(day=last_day)


def previous_month(ref: date) -> date:
    first = ref.replace(day=1)
    return first - timedelta(days=1)


def period_range(period: str, ref: date, previous: bool = False) -> tuple[date, date]:
    """
    Intervalo (início, fim) do período:
    - today: o dia (ou ontem)
    - week: segunda a domingo (ou semana anterior)
    - month: mês corrente (ou mês anterior)
    """
    if period == "today":
        day = ref - timedelta(days=1) if previous else ref
        return day, day
    if period == "week":
        base = ref - timedelta(weeks=1) if previous else ref
        return week_range(base)
    if period == "month":
        base = previous_month(ref) if previous else ref
        return month_range(base)
    raise ValueError(f"Período inválido: {period}")


def percent(part: int, total: int) -> int:
    """Percentual inteiro, arredondando .5 para cima."""
    if total <= 0:
        return 0
    return int(part * 100 / total + 0.5)

"""Currency and chart formatting for salary estimates."""
from __future__ import annotations

import decimal
import re
from typing import List

from babel import Locale
from babel.numbers import format_compact_decimal, format_currency

from salary_insights.models.contracts import ChartBar
from salary_insights.models.schemas import SalaryEstimate

DEFAULT_LOCALE = "en_US"

_FRACTION = re.compile(r"\.[0#]+")


def _half_up() -> decimal.Context:
    # Babel quantizes in the current decimal context; ties round away from zero
    return decimal.Context(rounding=decimal.ROUND_HALF_UP)


def _whole_currency_pattern(locale: str) -> str:
    # "¤#,##0.00" -> "¤#,##0", "#,##0.00 ¤" -> "#,##0 ¤"
    pattern = Locale.parse(locale).currency_formats["standard"].pattern
    return _FRACTION.sub("", pattern)


def format_amount(value: float, currency_code: str, locale: str = DEFAULT_LOCALE) -> str:
    """Format a whole-currency amount using the locale's grouping and symbol placement."""
    with decimal.localcontext(_half_up()):
        return format_currency(
            value,
            currency_code,
            format=_whole_currency_pattern(locale),
            locale=locale,
            currency_digits=False,
        )


def format_salary_range(estimate: SalaryEstimate, locale: str = DEFAULT_LOCALE) -> str:
    lo = format_amount(estimate.min_salary, estimate.currency_code, locale)
    hi = format_amount(estimate.max_salary, estimate.currency_code, locale)
    return f"{lo} - {hi}"


def format_compact(value: float, locale: str = DEFAULT_LOCALE) -> str:
    """Short axis tick, e.g. 90000 -> "90K"."""
    with decimal.localcontext(_half_up()):
        return format_compact_decimal(decimal.Decimal(str(value)), format_type="short", locale=locale)


def salary_chart(estimate: SalaryEstimate, locale: str = DEFAULT_LOCALE) -> List[ChartBar]:
    """Two bars, minimum first."""
    bars = [("Min Salary", estimate.min_salary), ("Max Salary", estimate.max_salary)]
    return [
        ChartBar(
            name=name,
            label=name.replace(" Salary", ""),
            value=value,
            tick=format_compact(value, locale),
        )
        for name, value in bars
    ]

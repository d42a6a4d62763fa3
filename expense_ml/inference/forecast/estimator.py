"""Month-end spending forecast.

The daily rate is the mean of the month's daily totals after dropping days
above mean + 2 * std (population). This is plain outlier exclusion, not a
robust estimator: with very few days a single large value can still pass.
"""

from __future__ import annotations

import calendar
import datetime as dt
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from expense_ml.data_models import Expense

OUTLIER_STD_FACTOR = 2.0


@dataclass(frozen=True)
class ForecastResult:
    forecasted_total: float
    daily_rate: float


class ForecastEstimator:
    """Projects the month's total spending from the days seen so far."""

    def __init__(self, outlier_std_factor: float = OUTLIER_STD_FACTOR):
        self.outlier_std_factor = outlier_std_factor

    def forecast(self, daily_totals: Sequence[float], days_in_month: int) -> ForecastResult:
        """Forecast the month total from month-to-date daily totals."""
        if len(daily_totals) == 0:
            return ForecastResult(forecasted_total=0.0, daily_rate=0.0)

        values = np.asarray(daily_totals, dtype=np.float64)
        mean = float(values.mean())
        std = float(values.std())  # population (ddof=0)

        clean = values[values <= mean + self.outlier_std_factor * std]
        daily_rate = float(clean.mean()) if clean.size > 0 else mean

        days_remaining = days_in_month - values.size
        forecasted_total = float(values.sum()) + daily_rate * days_remaining
        return ForecastResult(forecasted_total=forecasted_total, daily_rate=daily_rate)

    def forecast_month(
        self,
        expenses: Iterable[Expense],
        today: dt.date,
    ) -> ForecastResult | None:
        """Forecast the current month from booked expenses up to ``today``."""
        start_of_month = today.replace(day=1)
        totals = daily_totals(expenses, start_of_month, today)
        if not totals:
            return None
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        return self.forecast(totals, days_in_month)


def daily_totals(
    expenses: Iterable[Expense],
    start: dt.date,
    end: dt.date,
) -> list[float]:
    """Spending per calendar day in [start, end]; income is ignored."""
    if end < start:
        return []

    n_days = (end - start).days + 1
    totals = [0.0] * n_days
    for expense in expenses:
        if expense.is_income or not start <= expense.date <= end:
            continue
        totals[(expense.date - start).days] += expense.amount
    return totals

"""Expense input model for spending aggregation."""

import datetime as dt

from pydantic import BaseModel, Field


class Expense(BaseModel):
    """A booked expense or income entry."""

    amount: float = Field(ge=0.0)
    date: dt.date
    is_income: bool = False
    title: str = ""
    category: str | None = None

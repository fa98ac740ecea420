"""
Pydantic Schemas for Form Input and Stored Records

Form values arrive as raw strings. They are coerced here, before they
reach the metrics engine: anything non-numeric becomes 0.
"""

import math
import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, field_validator

from ..core.entities import Goals


def coerce_number(value: Any) -> float:
    """Numeric coercion for form fields; non-numeric or non-finite input yields 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


class EntryForm(BaseModel):
    """A submitted daily entry."""
    date: dt.date = Field(description="Business date the activity occurred")
    sales: float = Field(default=0.0, description="Gross sales recorded that day")
    leads: int = Field(default=0, description="Appointments or leads issued that day")
    cancellations: float = Field(default=0.0, description="Sales canceled that day")

    @field_validator("sales", "cancellations", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return coerce_number(value)

    @field_validator("leads", mode="before")
    @classmethod
    def _coerce_leads(cls, value: Any) -> int:
        return int(coerce_number(value))

    def to_record(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "sales": self.sales,
            "leads": self.leads,
            "cancellations": self.cancellations,
        }


class GoalsForm(BaseModel):
    """Goal thresholds as edited on the settings view."""
    high: float = Field(default=5000.0, description="NSLI at or above this is the best tier")
    medium: float = Field(default=3000.0, description="NSLI at or above this is the middle tier")

    @field_validator("high", "medium", mode="before")
    @classmethod
    def _coerce_threshold(cls, value: Any) -> float:
        return coerce_number(value)

    def to_goals(self) -> Goals:
        return Goals(high=self.high, medium=self.medium)

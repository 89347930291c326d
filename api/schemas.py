from __future__ import annotations

import datetime as dt
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field

LayoutName = Literal["event_log", "pulse", "dashboard"]


class PayloadModel(BaseModel):
    """Either raw CSV text or rows already split into cells."""

    csv_text: Optional[str] = None
    rows: Optional[List[List[Optional[str]]]] = None
    separator: Optional[Literal[",", ";"]] = None

    def payload(self) -> Union[str, List[List[Optional[str]]]]:
        if self.csv_text is not None:
            return self.csv_text
        return self.rows or []


class PresenceRequest(PayloadModel):
    layout: LayoutName = "event_log"
    today: Optional[dt.date] = None
    demo_fallback: Optional[bool] = None


class PlanningFiltersModel(BaseModel):
    week_start: Optional[dt.date] = None
    zone: Optional[str] = None
    date: Optional[dt.date] = None
    first_weekday: Optional[int] = Field(default=None, ge=0, le=6)


class PlanningRequest(PayloadModel):
    layout: Literal["dashboard", "pulse"] = "dashboard"
    filters: PlanningFiltersModel = Field(default_factory=PlanningFiltersModel)
    demo_fallback: Optional[bool] = None


class ZoneDayRequest(PayloadModel):
    date: dt.date
    zone: Optional[str] = None


class MetaZonesResponse(BaseModel):
    aliases: dict
    capacities: dict
    default_capacity: int


class MetaListResponse(BaseModel):
    values: List[str]

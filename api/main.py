from __future__ import annotations

from dataclasses import asdict
import logging
import math

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import MetaListResponse, MetaZonesResponse, PlanningRequest, PresenceRequest, ZoneDayRequest
from pulse.charts import daily_occupancy_chart, occupancy_chart
from pulse.filters import PlanningFilters, apply_filters, normalize_filters
from pulse.ingest import EmptyPayloadError, load_presence
from pulse.layouts import LAYOUTS, get_layout
from pulse.planning import available_dates, daily_occupancy, people_for_date_and_zone, rows_to_frame, statistics, zones_for_date
from pulse.records import PresenceSnapshot
from pulse.settings import Settings, get_settings, get_zone_config


app = FastAPI(title="Office Pulse API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _snapshot(req: PresenceRequest | PlanningRequest, settings: Settings, *, today=None) -> PresenceSnapshot:
    demo_fallback = settings.demo_fallback if req.demo_fallback is None else req.demo_fallback
    return load_presence(
        req.payload(),
        layout=get_layout(req.layout),
        zones=get_zone_config(),
        policy=settings.date_policy(),
        today=today,
        separator=req.separator or settings.separator,
        demo_fallback=demo_fallback,
    )


def _planning_rows(req: PlanningRequest, settings: Settings):
    snapshot = _snapshot(req, settings)
    raw = req.filters.model_dump()
    if raw.get("first_weekday") is None:
        raw.pop("first_weekday", None)
    filters: PlanningFilters = normalize_filters(raw, first_weekday=settings.first_weekday)
    return snapshot, filters, apply_filters(snapshot.records, filters)


@app.get("/meta/zones", response_model=MetaZonesResponse)
def meta_zones():
    zones = get_zone_config()
    return _json({"aliases": dict(zones.aliases), "capacities": dict(zones.capacities), "default_capacity": zones.default_capacity})


@app.get("/meta/layouts", response_model=MetaListResponse)
def meta_layouts():
    return _json({"values": sorted(LAYOUTS)})


@app.post("/presence")
def presence(req: PresenceRequest):
    try:
        snapshot = _snapshot(req, get_settings(), today=req.today)
        payload = snapshot.as_dict()
        payload["charts"] = {"occupancy": occupancy_chart(snapshot.records)}
        return _json(payload)
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("presence failed")
        return _error(exc)


@app.post("/planning/rows")
def planning_rows(req: PlanningRequest):
    try:
        snapshot, filters, rows = _planning_rows(req, get_settings())
        return _json(
            {
                "provenance": snapshot.provenance,
                "filters": asdict(filters),
                "rows": [r.as_dict() for r in rows],
                "report": snapshot.report.as_dict(),
            }
        )
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("planning_rows failed")
        return _error(exc)


@app.post("/planning/statistics")
def planning_statistics(req: PlanningRequest):
    try:
        snapshot, filters, rows = _planning_rows(req, get_settings())
        daily = daily_occupancy(rows)
        return _json(
            {
                "provenance": snapshot.provenance,
                "filters": asdict(filters),
                "statistics": statistics(rows),
                "daily": daily.to_dict(orient="records"),
                "charts": {"daily_occupancy": daily_occupancy_chart(daily)},
            }
        )
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("planning_statistics failed")
        return _error(exc)


@app.post("/planning/dates")
def planning_dates(req: PlanningRequest):
    try:
        snapshot = _snapshot(req, get_settings())
        return _json({"provenance": snapshot.provenance, "dates": available_dates(snapshot.records)})
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("planning_dates failed")
        return _error(exc)


@app.post("/planning/zones")
def planning_zones(req: ZoneDayRequest):
    try:
        settings = get_settings()
        zones = get_zone_config()
        snapshot = load_presence(
            req.payload(),
            layout=get_layout("dashboard"),
            zones=zones,
            separator=req.separator or settings.separator,
        )
        if req.zone:
            zone = zones.normalize(req.zone)
            return _json({"zone": zone, "date": req.date.isoformat(), "people": people_for_date_and_zone(snapshot.records, req.date, zone)})
        return _json({"date": req.date.isoformat(), "zones": zones_for_date(snapshot.records, req.date)})
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    except Exception as exc:
        logger.exception("planning_zones failed")
        return _error(exc)


@app.post("/export/planning")
def export_planning(req: PlanningRequest):
    try:
        _, _, rows = _planning_rows(req, get_settings())
    except EmptyPayloadError as exc:
        return _error(exc, status_code=400)
    csv_bytes = rows_to_frame(rows).to_csv(index=False).encode("utf-8")
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": "attachment; filename=planning.csv"})

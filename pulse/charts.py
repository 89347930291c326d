from __future__ import annotations

from typing import Any, Dict, Iterable

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def occupancy_chart(records: Iterable[Any]) -> Dict[str, Any]:
    """Bar of people present per zone, with the zone capacity as a tick."""
    df = pd.DataFrame(
        [{"zone": r.zone, "count": int(r.count), "capacity": int(r.capacity)} for r in records],
        columns=["zone", "count", "capacity"],
    )
    base = alt.Chart(df).encode(x=alt.X("zone:N", title="Zone", sort="-y"))
    bars = base.mark_bar().encode(
        y=alt.Y("count:Q", title="People"),
        tooltip=["zone", alt.Tooltip("count:Q", title="Present"), alt.Tooltip("capacity:Q", title="Capacity")],
    )
    ticks = base.mark_tick(color="black", thickness=2).encode(y=alt.Y("capacity:Q"))
    return to_vega_spec(alt.layer(bars, ticks))


def daily_occupancy_chart(daily: pd.DataFrame) -> Dict[str, Any]:
    line = (
        alt.Chart(daily)
        .mark_line(point=True)
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("occupancy:Q", title="Occupancy (%)"),
            tooltip=["date", alt.Tooltip("count:Q", title="People"), alt.Tooltip("occupancy:Q", format=".1f")],
        )
    )
    return to_vega_spec(line)

import math

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from narrative import Measure, measure_text_width, narrative_box

#figure geometry (px)
FIG_WIDTH, FIG_HEIGHT = 1500, 700
MARGIN = dict(t=50, r=50, b=60, l=60)
PLOT_WIDTH = FIG_WIDTH - MARGIN["l"] - MARGIN["r"]
PLOT_HEIGHT = FIG_HEIGHT - MARGIN["t"] - MARGIN["b"]

X_TITLE = "GDP (current US$), in billions"
Y_TITLE = "Military Expenditure (% of GDP)"

DIM_OPACITY = 0.2
#log10 units for x
DEFAULT_RANGES = {"x": [0.0, 5.0], "y": [0.0, 10.0]}

HOVER = (
    "<b>Country:</b> %{customdata[0]}<br>"
    "<b>Region:</b> %{customdata[1]}<br>"
    "<b>GDP:</b> %{customdata[2]:.2f} billion<br>"
    "<b>Military Expenditure:</b> %{customdata[3]:.2f}% of GDP<br>"
    "<b>Actual Military Expenditure:</b> %{customdata[4]:.2f} billion<extra></extra>"
)

_E10, _E5, _E2 = math.sqrt(50), math.sqrt(10), math.sqrt(2)


def region_colors(regions: list[str]) -> dict[str, str]:
    #D3 qualitative == category10
    palette = px.colors.qualitative.D3
    return {r: palette[i % len(palette)] for i, r in enumerate(regions)}


def _tick_increment(start: float, stop: float, count: int) -> float:
    if stop <= start:
        return 0.0
    step = (stop - start) / count
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    factor = 10 if error >= _E10 else 5 if error >= _E5 else 2 if error >= _E2 else 1
    if power >= 0:
        return factor * 10 ** power
    # negative means 1/step
    return -(10 ** -power) / factor


def nice_linear(lo: float, hi: float, count: int = 10) -> tuple[float, float]:
    """Widen [lo, hi] outward to round tick boundaries (d3 style)."""
    if hi < lo:
        lo, hi = hi, lo
    if hi == lo:
        pad = max(abs(hi), 1.0) * 0.1
        lo, hi = lo - pad, hi + pad

    prestep = None
    for _ in range(10):
        step = _tick_increment(lo, hi, count)
        if step == prestep:
            break
        if step > 0:
            lo, hi = math.floor(lo / step) * step, math.ceil(hi / step) * step
        elif step < 0:
            lo, hi = math.ceil(lo * step) / step, math.floor(hi * step) / step
        else:
            break
        prestep = step
    return float(lo), float(hi)


def nice_log(lo: float, hi: float) -> tuple[float, float]:
    #plotly log axes take their range as exponents
    if lo <= 0 or hi <= 0:
        raise ValueError("log axis needs positive bounds")
    if hi < lo:
        lo, hi = hi, lo
    lo_exp, hi_exp = math.floor(math.log10(lo)), math.ceil(math.log10(hi))
    if hi_exp == lo_exp:
        hi_exp += 1
    return float(lo_exp), float(hi_exp)


def drawable(points: pd.DataFrame) -> pd.DataFrame:
    #log x axis: GDP has to be positive; unknown means can't be placed
    if points.empty:
        return points
    gdp = pd.to_numeric(points["mean_gdp"], errors="coerce")
    pct = pd.to_numeric(points["mean_milex_pct"], errors="coerce")
    ok = np.isfinite(gdp) & np.isfinite(pct) & (gdp > 0)
    return points[ok]


def axis_ranges(points: pd.DataFrame, previous: dict | None = None) -> dict:
    """Nice x/y ranges for ``points``; holds ``previous`` when nothing is drawable."""
    d = drawable(points)
    if d.empty:
        held = previous or DEFAULT_RANGES
        return {"x": list(held["x"]), "y": list(held["y"])}
    x = nice_log(float(d["mean_gdp"].min()), float(d["mean_gdp"].max()))
    y = nice_linear(float(d["mean_milex_pct"].min()), float(d["mean_milex_pct"].max()))
    return {"x": list(x), "y": list(y)}


def make_military_scatter(points: pd.DataFrame,
                          highlighted_region: str | None = None,
                          narrative: str = "",
                          regions: list[str] | None = None,
                          ranges: dict | None = None,
                          year: int | None = None,
                          measure: Measure = measure_text_width) -> go.Figure:
    d = drawable(points)
    if regions is None:
        regions = sorted(d["region"].unique().tolist()) if not d.empty else []
    colors = region_colors(regions)
    if ranges is None:
        ranges = axis_ranges(points)

    title = f"GDP vs Military Expenditure, {year}" if year is not None else "GDP vs Military Expenditure"

    #blank chart, but keep axes and the story box where they were
    if d.empty:
        fig = go.Figure()
        title = "No data for selected year"
    else:
        fig = px.scatter(
            d,
            x="mean_gdp",
            y="mean_milex_pct",
            color="region",
            text="country",
            custom_data=["country", "region", "mean_gdp", "mean_milex_pct", "milex_abs"],
            color_discrete_map=colors,
            category_orders={"region": regions},
            log_x=True,
        )
        #dim everything outside the highlight, hide its labels
        for tr in fig.data:
            dim = highlighted_region is not None and tr.name != highlighted_region
            tr.update(
                mode="markers+text",
                marker=dict(size=10, opacity=DIM_OPACITY if dim else 1.0,
                            line=dict(width=0)),
                textposition="top center",
                textfont=dict(size=12, color="rgba(0,0,0,0)" if dim else "black"),
                hovertemplate=HOVER,
                showlegend=False,
            )

    shapes, annotations = narrative_box(narrative, PLOT_WIDTH, PLOT_HEIGHT, measure)

    fig.update_layout(
        template="plotly_white",
        title=title,
        title_font=dict(size=18),
        width=FIG_WIDTH,
        height=FIG_HEIGHT,
        margin=MARGIN,
        showlegend=False,
        hovermode="closest",
        hoverlabel=dict(bgcolor="white"),
        xaxis=dict(type="log", title=X_TITLE, range=ranges["x"]),
        yaxis=dict(title=Y_TITLE, range=ranges["y"]),
        shapes=shapes,
        annotations=annotations,
    )
    return fig

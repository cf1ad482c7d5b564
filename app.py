# app.py: Dash scrollytelling of GDP vs military expenditure, one region per scene

import argparse
import logging
import os

import pandas as pd
from dash import Dash, dcc, html, Input, Output, State, ALL, ctx

from data_prep import aggregate_year, load_records, region_order
from military_scatter import axis_ranges, make_military_scatter, region_colors
from narrative import measure_text_width
from scenes import (
    BTN_NEXT, BTN_PREVIOUS, BTN_RESET, DEFAULT_YEAR, LEGEND_ITEM, SCENES, YEAR_MAX,
    YEAR_MIN, YEAR_SLIDER, ViewState, control_states, dispatch, enter_scene,
)

logger = logging.getLogger(__name__)

# -------------------------
# Config
# -------------------------
DATA_PATH = os.environ.get("MILEX_DATA_PATH", "military_spending.csv")
DISABLED_BG = "#d3d3d3"
TITLE = "Military Spending Around the World"


# helper wrapper for cards
def control_card(children):
    return html.Div(
        children,
        style={
            "background":"#fff","border":"1px solid #e9ecef","borderRadius":"12px",
            "padding":"14px","boxShadow":"0 2px 8px rgba(0,0,0,0.04)"
        }
    )


def legend_item_style(active: bool) -> dict:
    return {
        "display":"flex","alignItems":"center","gap":"8px",
        "cursor":"pointer","padding":"3px 6px","borderRadius":"6px",
        "border": "2px solid black" if active else "2px solid transparent",
        "color": "black" if active else "gray",
    }


def disabled_style(disabled: bool) -> dict:
    return {"backgroundColor": DISABLED_BG} if disabled else {}


def render_view(records: pd.DataFrame, state: ViewState, previous_ranges: dict | None,
                regions: list[str], measure=measure_text_width) -> dict:
    """Everything the page shows for one ViewState."""
    points = aggregate_year(records, state.selected_year)
    ranges = axis_ranges(points, previous_ranges)
    fig = make_military_scatter(
        points,
        highlighted_region=state.highlighted_region,
        narrative=state.narrative,
        regions=regions,
        ranges=ranges,
        year=state.selected_year,
        measure=measure,
    )
    controls = control_states(state)
    return {
        "figure": fig,
        "ranges": ranges,
        "legend_styles": [legend_item_style(r == state.highlighted_region) for r in regions],
        "slider_disabled": controls.slider_disabled,
        "slider_style": disabled_style(controls.slider_disabled),
        "year_label": str(state.selected_year),
        "scene_label": f"Scene {state.scene_index + 1} of {len(SCENES)}: {state.scene}",
        "previous_disabled": controls.previous_disabled,
        "next_disabled": controls.next_disabled,
        "reset_disabled": controls.reset_disabled,
    }


def create_app(records: pd.DataFrame) -> Dash:
    regions = region_order(records)
    colors = region_colors(regions)
    initial = enter_scene(0, DEFAULT_YEAR)

    app = Dash(__name__)
    app.title = TITLE

    legend = [
        html.Div(
            [
                html.Span(style={"width":"14px","height":"14px","borderRadius":"50%",
                                 "background":colors[r],"display":"inline-block"}),
                html.Span(r),
            ],
            id={"type": LEGEND_ITEM, "region": r},
            n_clicks=0,
            style=legend_item_style(r == initial.highlighted_region),
        )
        for r in regions
    ]

    app.layout = html.Div(
        [
            html.H2(TITLE, style={"margin":"10px 0 8px 0"}),
            html.Div("GDP against military expenditure, one region at a time."),

            # controls
            html.Div(
                [
                    control_card([
                        html.Div("Year"),
                        html.Div(
                            dcc.Slider(
                                id=YEAR_SLIDER,
                                min=YEAR_MIN, max=YEAR_MAX, step=1,
                                value=DEFAULT_YEAR,
                                marks={y: str(y) for y in range(YEAR_MIN, YEAR_MAX + 1, 10)},
                                tooltip={"placement":"bottom","always_visible":False},
                                disabled=True,
                                updatemode="drag",
                            ),
                            id="slider-wrap",
                            style=disabled_style(True),
                        ),
                        html.Div(str(DEFAULT_YEAR), id="year-label",
                                 style={"marginTop":"6px","textAlign":"right",
                                        "fontSize":"0.9rem","opacity":0.8})
                    ]),
                    control_card([
                        html.Div(id="scene-label"),
                        html.Div(
                            [
                                html.Button("Previous", id=BTN_PREVIOUS, n_clicks=0),
                                html.Button("Next", id=BTN_NEXT, n_clicks=0),
                                html.Button("Start Over", id=BTN_RESET, n_clicks=0),
                            ],
                            style={"display":"flex","gap":"8px","marginTop":"8px"}
                        )
                    ]),
                    control_card([
                        html.Div("Regions", style={"fontWeight":"bold","marginBottom":"6px"}),
                        html.Div(legend),
                    ]),
                ],
                style={
                    "display":"grid",
                    "gridTemplateColumns": "repeat(auto-fit, minmax(280px, 1fr))",
                    "gap":"14px",
                    "margin":"14px 0 18px 0"
                }
            ),

            control_card([
                dcc.Graph(
                    id="fig-military",
                    config={"displayModeBar": False},
                )
            ]),

            dcc.Store(id="view-state", data=initial.to_dict()),
            dcc.Store(id="axis-ranges", data=None),
        ],
        style={"maxWidth":"1560px","margin":"0 auto","padding":"12px"}
    )

    # callbacks
    @app.callback(
        Output("view-state","data"),
        Input(BTN_PREVIOUS,"n_clicks"),
        Input(BTN_NEXT,"n_clicks"),
        Input(BTN_RESET,"n_clicks"),
        Input({"type": LEGEND_ITEM, "region": ALL},"n_clicks"),
        Input(YEAR_SLIDER,"value"),
        State("view-state","data"),
        prevent_initial_call=True
    )
    def _on_control(_prev, _next, _reset, _legend, year, data):
        state = ViewState.from_dict(data, regions)
        new_state = dispatch(state, ctx.triggered_id, year)
        logger.debug("%s: %s -> %s", ctx.triggered_id, state, new_state)
        return new_state.to_dict()

    @app.callback(
        Output("fig-military","figure"),
        Output("axis-ranges","data"),
        Output({"type": LEGEND_ITEM, "region": ALL},"style"),
        Output(YEAR_SLIDER,"disabled"),
        Output("slider-wrap","style"),
        Output("year-label","children"),
        Output("scene-label","children"),
        Output(BTN_PREVIOUS,"disabled"),
        Output(BTN_PREVIOUS,"style"),
        Output(BTN_NEXT,"disabled"),
        Output(BTN_NEXT,"style"),
        Output(BTN_RESET,"disabled"),
        Output(BTN_RESET,"style"),
        Input("view-state","data"),
        State("axis-ranges","data"),
    )
    def _render(data, previous_ranges):
        view = render_view(records, ViewState.from_dict(data, regions), previous_ranges, regions)
        return (
            view["figure"],
            view["ranges"],
            view["legend_styles"],
            view["slider_disabled"],
            view["slider_style"],
            view["year_label"],
            view["scene_label"],
            view["previous_disabled"],
            disabled_style(view["previous_disabled"]),
            view["next_disabled"],
            disabled_style(view["next_disabled"]),
            view["reset_disabled"],
            disabled_style(view["reset_disabled"]),
        )

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description=TITLE)
    parser.add_argument("--data", default=DATA_PATH, help="CSV path or URL")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--debug", action="store_true", help="Dash debug mode")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    # everything waits on the data
    records = load_records(args.data)
    app = create_app(records)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()

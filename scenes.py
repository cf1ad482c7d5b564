from __future__ import annotations

from dataclasses import dataclass, replace

#the guided tour: one scene per region, then free exploration
NO_FILTER = "No Filter"
SCENES = (
    "South Asia",
    "Sub-Saharan Africa",
    "Europe & Central Asia",
    "Middle East & North Africa",
    "Latin America & Caribbean",
    "East Asia & Pacific",
    "North America",
    NO_FILTER,
)
LAST_SCENE = len(SCENES) - 1

NARRATIVES = {
    "South Asia": (
        "South Asia exhibited significant diversity in military spending among its nations. "
        "Countries like India, with its substantial military budget, contrast sharply with "
        "others in the region where spending is more restrained."
    ),
    "Sub-Saharan Africa": (
        "Sub-Saharan Africa demonstrated a range of military expenditure levels, from nations "
        "heavily investing in their defense sectors to those with minimal military budgets. "
        "This disparity highlights the region's varied security challenges, from internal "
        "conflicts to international peacekeeping contributions."
    ),
    "Europe & Central Asia": (
        "Europe & Central Asia showed a complex pattern of military expenditure. Western "
        "European countries generally have higher budgets due to their advanced defense "
        "technologies and commitments to NATO. In contrast, some Central Asian nations "
        "allocate more modest budgets."
    ),
    "Middle East & North Africa": (
        "The Middle East & North Africa region had some of the highest military expenditures "
        "globally. The substantial spending by countries such as Saudi Arabia and Egypt "
        "reflects ongoing regional conflicts and security concerns."
    ),
    "Latin America & Caribbean": (
        "Latin America & the Caribbean exhibited a more moderate range of military spending "
        "compared to other regions. Countries in the region prioritize military expenditure "
        "differently, often focusing on internal security and border protection."
    ),
    "East Asia & Pacific": (
        "East Asia & Pacific showed varied military spending, with substantial investments "
        "from countries like China and Japan. China's significant expenditure underscores its "
        "growing geopolitical influence and modernization of its military forces."
    ),
    "North America": (
        "North America, particularly the United States, exhibited high military spending, "
        "reflecting its global defense commitments and advanced technological capabilities. "
        "The U.S. continues to lead in defense expenditure, driven by its extensive military "
        "engagements and strategic interests worldwide."
    ),
    NO_FILTER: "",
}

YEAR_MIN, YEAR_MAX = 1960, 2022
DEFAULT_YEAR = 2021

#dash component ids the controller reacts to
BTN_PREVIOUS = "btn-previous"
BTN_NEXT = "btn-next"
BTN_RESET = "btn-reset"
YEAR_SLIDER = "year-slider"
LEGEND_ITEM = "legend-item"


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(v)))


@dataclass(frozen=True)
class ViewState:
    """Everything the chart depends on besides the data itself."""
    scene_index: int = 0
    highlighted_region: str | None = SCENES[0]
    selected_year: int = DEFAULT_YEAR

    @property
    def scene(self) -> str:
        return SCENES[self.scene_index]

    @property
    def is_no_filter(self) -> bool:
        return self.scene == NO_FILTER

    @property
    def narrative(self) -> str:
        return NARRATIVES.get(self.scene, "")

    def to_dict(self) -> dict:
        return {
            "scene_index": self.scene_index,
            "highlighted_region": self.highlighted_region,
            "selected_year": self.selected_year,
        }

    @classmethod
    def from_dict(cls, data: dict | None, regions=None) -> "ViewState":
        #store payloads come back from the browser, so re-check them
        known = set(regions) if regions is not None else set(SCENES[:LAST_SCENE])
        if not data:
            return enter_scene(0, DEFAULT_YEAR)
        idx = _clamp(data.get("scene_index", 0), 0, LAST_SCENE)
        year = _clamp(data.get("selected_year", DEFAULT_YEAR), YEAR_MIN, YEAR_MAX)
        if SCENES[idx] != NO_FILTER:
            return enter_scene(idx, year)
        region = data.get("highlighted_region")
        return cls(scene_index=idx,
                   highlighted_region=region if isinstance(region, str) and region in known else None,
                   selected_year=year)


@dataclass(frozen=True)
class ControlState:
    previous_disabled: bool
    next_disabled: bool
    reset_disabled: bool
    slider_disabled: bool


def enter_scene(index: int, year: int) -> ViewState:
    idx = _clamp(index, 0, LAST_SCENE)
    scene = SCENES[idx]
    return ViewState(
        scene_index=idx,
        highlighted_region=None if scene == NO_FILTER else scene,
        selected_year=year,
    )


def next_scene(state: ViewState) -> ViewState:
    if state.scene_index >= LAST_SCENE:
        return state
    return enter_scene(state.scene_index + 1, state.selected_year)


def previous_scene(state: ViewState) -> ViewState:
    if state.scene_index <= 0:
        return state
    return enter_scene(state.scene_index - 1, state.selected_year)


def reset_scene(state: ViewState) -> ViewState:
    return enter_scene(0, state.selected_year)


def toggle_legend(state: ViewState, region: str) -> ViewState:
    # region scenes keep their highlight locked to the story
    if not state.is_no_filter:
        return state
    if state.highlighted_region == region:
        return replace(state, highlighted_region=None)
    return replace(state, highlighted_region=region)


def set_year(state: ViewState, year) -> ViewState:
    if not state.is_no_filter or year is None:
        return state
    return replace(state, selected_year=_clamp(year, YEAR_MIN, YEAR_MAX))


def control_states(state: ViewState) -> ControlState:
    idx = state.scene_index
    return ControlState(
        previous_disabled=(idx == 0),
        next_disabled=(idx == LAST_SCENE),
        reset_disabled=(idx == 0),
        slider_disabled=not state.is_no_filter,
    )


def dispatch(state: ViewState, trigger, year=None) -> ViewState:
    """Apply one UI event, identified by the dash component id that fired."""
    if trigger == BTN_NEXT:
        return next_scene(state)
    if trigger == BTN_PREVIOUS:
        return previous_scene(state)
    if trigger == BTN_RESET:
        return reset_scene(state)
    if trigger == YEAR_SLIDER:
        return set_year(state, year)
    #pattern-matching ids arrive as dicts
    if isinstance(trigger, dict) and trigger.get("type") == LEGEND_ITEM:
        return toggle_legend(state, trigger.get("region"))
    return state

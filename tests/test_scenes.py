"""scenes: the scene controller state machine"""

import pytest

from scenes import (
    BTN_NEXT,
    BTN_PREVIOUS,
    BTN_RESET,
    DEFAULT_YEAR,
    LAST_SCENE,
    LEGEND_ITEM,
    NARRATIVES,
    NO_FILTER,
    SCENES,
    YEAR_SLIDER,
    ViewState,
    control_states,
    dispatch,
    enter_scene,
    next_scene,
    previous_scene,
    reset_scene,
    set_year,
    toggle_legend,
)


def at(index, year=DEFAULT_YEAR):
    return enter_scene(index, year)


class TestSceneList:
    """fixed scene list"""

    def test_eight_scenes_ending_in_no_filter(self):
        assert len(SCENES) == 8
        assert SCENES[-1] == NO_FILTER
        assert LAST_SCENE == 7

    def test_every_region_scene_has_narrative(self):
        for s in SCENES[:-1]:
            assert NARRATIVES[s]
        assert NARRATIVES[NO_FILTER] == ""


class TestTransitions:
    """next / previous / reset"""

    def test_initial_state(self):
        s = ViewState()
        assert s.scene_index == 0
        assert s.highlighted_region == "South Asia"
        assert s.selected_year == DEFAULT_YEAR

    def test_highlight_follows_scene(self):
        s = ViewState()
        for i in range(1, 7):
            s = next_scene(s)
            assert s.scene_index == i
            assert s.highlighted_region == SCENES[i]

    def test_no_filter_clears_highlight(self):
        s = at(6)
        s = next_scene(s)
        assert s.scene_index == 7
        assert s.highlighted_region is None

    def test_next_at_end_is_noop(self):
        s = at(7)
        assert next_scene(s) == s

    def test_previous_at_start_is_noop(self):
        s = at(0)
        s2 = previous_scene(s)
        assert s2.scene_index == 0
        c = control_states(s2)
        assert c.previous_disabled
        assert c.reset_disabled

    def test_previous_from_no_filter(self):
        s = previous_scene(at(7))
        assert s.scene_index == 6
        assert s.highlighted_region == "North America"

    def test_reset_keeps_year(self):
        s = reset_scene(at(7, 1995))
        assert s.scene_index == 0
        assert s.highlighted_region == "South Asia"
        assert s.selected_year == 1995

    def test_enter_scene_clamps(self):
        assert enter_scene(-3, 2000).scene_index == 0
        assert enter_scene(42, 2000).scene_index == 7


class TestControlStates:
    """control_states()"""

    @pytest.mark.parametrize("index", range(8))
    def test_enablement(self, index):
        c = control_states(at(index))
        assert c.previous_disabled == (index == 0)
        assert c.reset_disabled == (index == 0)
        assert c.next_disabled == (index == 7)
        assert c.slider_disabled == (index != 7)


class TestLegendToggle:
    """toggle_legend()"""

    @pytest.mark.parametrize("index", range(7))
    def test_ignored_in_region_scenes(self, index):
        s = at(index)
        assert toggle_legend(s, "Europe & Central Asia") == s

    def test_toggle_twice_clears(self):
        s = at(7)
        s = toggle_legend(s, "Europe & Central Asia")
        assert s.highlighted_region == "Europe & Central Asia"
        s = toggle_legend(s, "Europe & Central Asia")
        assert s.highlighted_region is None
        assert s.scene_index == 7

    def test_switches_region(self):
        s = toggle_legend(at(7), "South Asia")
        s = toggle_legend(s, "North America")
        assert s.highlighted_region == "North America"


class TestSetYear:
    """set_year()"""

    def test_locked_outside_no_filter(self):
        s = at(2, 2021)
        assert set_year(s, 1990) == s

    def test_keeps_highlight(self):
        s = toggle_legend(at(7), "South Asia")
        s = set_year(s, 1990)
        assert s.selected_year == 1990
        assert s.highlighted_region == "South Asia"

    def test_clamped(self):
        assert set_year(at(7), 1900).selected_year == 1960
        assert set_year(at(7), 2100).selected_year == 2022


class TestDispatch:
    """dispatch() maps component ids to transitions"""

    def test_buttons(self):
        s = dispatch(ViewState(), BTN_NEXT)
        assert s.scene_index == 1
        assert dispatch(s, BTN_PREVIOUS).scene_index == 0
        assert dispatch(at(5), BTN_RESET).scene_index == 0

    def test_slider(self):
        assert dispatch(at(7), YEAR_SLIDER, 2000).selected_year == 2000

    def test_legend_pattern_id(self):
        trigger = {"type": LEGEND_ITEM, "region": "East Asia & Pacific"}
        assert dispatch(at(7), trigger).highlighted_region == "East Asia & Pacific"
        assert dispatch(at(3), trigger).highlighted_region == SCENES[3]

    def test_unknown_trigger(self):
        s = at(4)
        assert dispatch(s, "something-else") == s
        assert dispatch(s, None) == s


class TestStoreRoundTrip:
    """ViewState <-> dcc.Store payload"""

    def test_no_filter_highlight_survives(self):
        s = toggle_legend(at(7, 2005), "North America")
        assert ViewState.from_dict(s.to_dict()) == s

    def test_region_scene_repairs_highlight(self):
        s = ViewState.from_dict({"scene_index": 2, "highlighted_region": None,
                                 "selected_year": 2010})
        assert s.highlighted_region == SCENES[2]

    def test_empty_payload(self):
        assert ViewState.from_dict(None) == enter_scene(0, DEFAULT_YEAR)

    def test_unknown_region_dropped(self):
        s = ViewState.from_dict({"scene_index": 7, "highlighted_region": "Atlantis",
                                 "selected_year": 2010})
        assert s.highlighted_region is None

    def test_non_string_region_dropped(self):
        s = ViewState.from_dict({"scene_index": 7, "highlighted_region": ["South Asia"],
                                 "selected_year": 2010})
        assert s.highlighted_region is None

    def test_region_checked_against_given_list(self):
        data = {"scene_index": 7, "highlighted_region": "Antarctica", "selected_year": 2010}
        assert ViewState.from_dict(data, ["Antarctica"]).highlighted_region == "Antarctica"
        assert ViewState.from_dict(data).highlighted_region is None

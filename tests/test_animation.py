"""
Tests for the animation timeline.
"""

import pytest

from src.animation import Timeline, TransitionGroup, ease_quad_in_out


@pytest.fixture
def elements():
    return {"a": {"opacity": 0, "x": 0}, "b": {"opacity": 0, "x": 10}}


@pytest.fixture
def timeline(elements):
    return Timeline(
        read=lambda element_id, names: {n: elements[element_id].get(n) for n in names},
        write=lambda element_id, attrs: elements[element_id].update(attrs),
    )


class TestTimeline:
    """Tests for scheduling and advancing transitions."""

    def test_interpolates_linearly(self, timeline, elements):
        timeline.schedule("a", {"opacity": 1}, 100)

        timeline.advance(50)
        assert elements["a"]["opacity"] == pytest.approx(0.5)

        timeline.advance(50)
        assert elements["a"]["opacity"] == 1

    def test_completion_callback_fires_once(self, timeline):
        ended = []
        timeline.schedule("a", {"opacity": 1}, 100).on_end(ended.append)

        timeline.advance(100)
        timeline.advance(100)
        assert len(ended) == 1
        assert ended[0].done is True

    def test_delay_postpones_start(self, timeline, elements):
        timeline.schedule("a", {"opacity": 1}, 100, delay=100)

        timeline.advance(50)
        assert elements["a"]["opacity"] == 0

        timeline.advance(100)
        assert elements["a"]["opacity"] == pytest.approx(0.5)

    def test_start_value_read_when_transition_starts(self, timeline, elements):
        timeline.schedule("a", {"x": 100}, 100, delay=50)
        elements["a"]["x"] = 50

        timeline.advance(100)
        assert elements["a"]["x"] == pytest.approx(75)

    def test_same_attribute_interrupts(self, timeline, elements):
        ended = []
        first = timeline.schedule("a", {"opacity": 1}, 100).on_end(ended.append)
        timeline.advance(50)

        timeline.schedule("a", {"opacity": 0}, 100)
        timeline.advance(200)

        assert first.cancelled is True
        assert ended == []
        assert elements["a"]["opacity"] == 0

    def test_other_attributes_not_interrupted(self, timeline, elements):
        timeline.schedule("a", {"opacity": 1}, 100)
        timeline.schedule("a", {"x": 20}, 100)
        timeline.advance(100)

        assert elements["a"] == {"opacity": 1, "x": 20}

    def test_cancel_element(self, timeline, elements):
        ended = []
        timeline.schedule("a", {"opacity": 1}, 100).on_end(ended.append)
        timeline.schedule("b", {"opacity": 1}, 100)

        timeline.cancel_element("a")
        timeline.advance(100)

        assert ended == []
        assert elements["a"]["opacity"] == 0
        assert elements["b"]["opacity"] == 1

    def test_continuation_runs_within_same_advance(self, timeline, elements):
        def back(_transition):
            timeline.schedule("a", {"x": 0}, 100)

        timeline.schedule("a", {"x": 100}, 100).on_end(back)
        timeline.advance(150)

        assert elements["a"]["x"] == pytest.approx(50)

    def test_zero_duration_applies_immediately(self, timeline, elements):
        timeline.schedule("b", {"x": 3}, 0)
        timeline.advance(0)
        assert elements["b"]["x"] == 3

    def test_non_numeric_snaps_at_end(self, timeline, elements):
        elements["a"]["fill"] = "#ffffff"
        timeline.schedule("a", {"fill": "#000000"}, 100)

        timeline.advance(99)
        assert elements["a"]["fill"] == "#ffffff"
        timeline.advance(1)
        assert elements["a"]["fill"] == "#000000"

    def test_run_until_idle(self, timeline, elements):
        timeline.schedule("a", {"opacity": 1}, 100, delay=400)
        timeline.schedule("b", {"opacity": 1}, 300)

        timeline.run_until_idle()

        assert timeline.pending == []
        assert timeline.now == 500
        assert elements["a"]["opacity"] == 1
        assert elements["b"]["opacity"] == 1

    def test_run_until_idle_stops_at_limit(self, timeline):
        def again(_transition):
            timeline.schedule("a", {"x": 0}, 100).on_end(again)

        timeline.schedule("a", {"x": 0}, 100).on_end(again)
        timeline.run_until_idle(limit=1000)

        assert timeline.now == 1000
        assert len(timeline.pending) == 1

    def test_eased_transition(self, timeline, elements):
        timeline.schedule("a", {"x": 100}, 100, easing="quad-in-out")
        timeline.advance(25)
        assert elements["a"]["x"] == pytest.approx(100 * ease_quad_in_out(0.25))


class TestTransitionGroup:
    """Tests for TransitionGroup."""

    def test_empty_group_completes_immediately(self):
        completed = []
        group = TransitionGroup([], lambda: completed.append(True))
        assert group.completed is True
        assert completed == [True]

    def test_completes_after_last_member(self, timeline):
        completed = []
        group = TransitionGroup(
            [
                timeline.schedule("a", {"opacity": 1}, 100),
                timeline.schedule("b", {"opacity": 1}, 100, delay=200),
            ],
            lambda: completed.append(timeline.now),
        )

        timeline.advance(150)
        assert group.completed is False

        timeline.advance(200)
        assert completed == [300]

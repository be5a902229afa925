"""
Tests for the SVG scene.
"""

import pytest

from src.svg_scene import POINTER_ENTER, POINTER_LEAVE, SceneError, SvgScene


@pytest.fixture
def scene():
    return SvgScene(width=200, height=100)


class TestElements:
    """Tests for creating, selecting and removing elements."""

    def test_create_assigns_unique_ids(self, scene):
        first = scene.create("rect", classes=("item",))
        second = scene.create("rect", classes=("item",))
        assert first.id != second.id
        assert first.id in scene

    def test_select_by_class_in_creation_order(self, scene):
        a = scene.create("rect", classes=("item", "item-circle"))
        scene.create("text", classes=("label",))
        b = scene.create("rect", classes=("item", "item-circle"))

        assert [e.id for e in scene.select("item-circle")] == [a.id, b.id]

    def test_update_attrs_and_text(self, scene):
        element = scene.create("text", attrs={"x": 1}, text="Jan")
        scene.update(element.id, {"x": 5, "y": 2}, text="Feb")

        assert element.attrs == {"x": 5, "y": 2}
        assert element.text == "Feb"

    def test_remove_class(self, scene):
        scene.create("rect", classes=("item-circle",))
        scene.create("rect", classes=("item-circle",))
        label = scene.create("text", classes=("label",))

        assert scene.remove_class("item-circle") == 2
        assert scene.select("item-circle") == []
        assert label.id in scene

    def test_get_missing_element(self, scene):
        with pytest.raises(SceneError):
            scene.get("el-999")

    def test_remove_abandons_transitions(self, scene):
        element = scene.create("rect", attrs={"opacity": 0})
        ended = []
        scene.animate(element.id, {"opacity": 1}, 100).on_end(ended.append)

        scene.remove(element.id)
        scene.timeline.advance(200)

        assert ended == []
        assert scene.timeline.pending == []


class TestHandlers:
    """Tests for pointer handlers."""

    def test_dispatch_runs_handler(self, scene):
        element = scene.create("rect")
        seen = []
        scene.on(element.id, POINTER_ENTER, seen.append)

        assert scene.dispatch(element.id, POINTER_ENTER) is True
        assert seen == [element]

    def test_dispatch_without_handler(self, scene):
        element = scene.create("rect")
        assert scene.dispatch(element.id, POINTER_LEAVE) is False

    def test_off_detaches_handler(self, scene):
        element = scene.create("rect")
        scene.on(element.id, POINTER_ENTER, lambda e: None)
        scene.off(element.id, POINTER_ENTER)
        assert scene.dispatch(element.id, POINTER_ENTER) is False


class TestAnimate:
    """Tests for animating element attributes."""

    def test_animate_updates_attrs(self, scene):
        element = scene.create("rect", attrs={"opacity": 0})
        scene.animate(element.id, {"opacity": 1}, 100)

        scene.timeline.advance(50)
        assert element.attrs["opacity"] == pytest.approx(0.5)

    def test_animate_unknown_element(self, scene):
        with pytest.raises(SceneError):
            scene.animate("el-404", {"opacity": 1}, 100)


class TestToSvg:
    """Tests for SVG serialization."""

    def test_serializes_shapes(self, scene):
        scene.create(
            "rect",
            classes=("item", "item-circle"),
            attrs={"x": 1, "y": 2, "width": 10, "height": 10, "fill": "#7bc96f", "opacity": 1},
        )
        scene.create("text", classes=("label", "label-month"), attrs={"x": 40, "y": 20}, text="Mar")

        svg = scene.to_svg()

        assert svg.startswith("<svg")
        assert 'class="item item-circle"' in svg
        assert 'fill="#7bc96f"' in svg
        assert ">Mar</text>" in svg

    def test_serializes_tooltip_group(self, scene):
        scene.create(
            "tooltip",
            classes=("heatmap-tooltip",),
            attrs={"x": 5, "y": 5, "width": 250, "height": 40, "padding": 15, "opacity": 0},
            text="3 contributions",
        )
        svg = scene.to_svg()

        assert 'class="heatmap-tooltip"' in svg
        assert "3 contributions" in svg

    def test_size_from_scene(self, scene):
        scene.set_size(1000, 170)
        svg = scene.to_svg()
        assert 'width="1000"' in svg
        assert 'height="170"' in svg

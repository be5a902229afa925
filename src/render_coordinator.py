"""
Draw and update passes for the contribution heatmap.

A redraw resolves the year window, selects the records inside it, lays out
one cell per day, replaces every previously drawn element, starts the
entrance animation and draws the month and weekday labels. Pointer handlers
on cells and labels route through the HighlightController.
"""

import logging
import math
import random
from dataclasses import asdict, dataclass
from datetime import date
from typing import Callable

from src import calendar_indexer, calendar_utils, layout_engine
from src.animation import TransitionGroup
from src.highlight_controller import HighlightController
from src.layout_engine import Geometry
from src.models import (
    ActivityRecord,
    GridCell,
    HeatmapConfig,
    HighlightKind,
    YearWindow,
    parse_activity_records,
    to_date,
)
from src.svg_scene import POINTER_ENTER, POINTER_LEAVE, Element, SvgScene
from src.value_scaler import parse_hex_color, scale_color, scale_size

logger = logging.getLogger(__name__)

TRANSITION_DURATION = 500
TOOLTIP_HEIGHT = 40
LABEL_COLOR = "#aaaaaa"

CELL_CLASS = "item-circle"
MONTH_LABEL_CLASS = "label-month"
DAY_LABEL_CLASS = "label-day"
TOOLTIP_CLASS = "heatmap-tooltip"

TOOLTIP_TEMPLATES = {
    "zh": "{total} 条数据创建于 {date}",
    "en": "{total} contributions on {date}",
}


class MissingDataError(Exception):
    """Raised when a redraw is triggered before any data was supplied."""

    pass


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one full redraw."""

    window: YearWindow
    geometry: Geometry
    max_total: float
    cells: tuple[GridCell, ...]


def select_records(
    records: list[ActivityRecord], window: YearWindow, is_fill: bool = False
) -> list[ActivityRecord]:
    """
    Records to draw for `window`, one per date, oldest first.

    Records outside the window are dropped. Records sharing a date are summed.
    With `is_fill`, days without a record get a zero total.
    """
    totals: dict[date, float] = {}
    for record in records:
        if window.contains(record.date):
            totals[record.date] = totals.get(record.date, 0) + record.total

    if is_fill:
        for day in calendar_indexer.window_days(window):
            totals.setdefault(day, 0)

    return [ActivityRecord(date=day, total=totals[day]) for day in sorted(totals)]


def max_total(records: list[ActivityRecord]) -> float:
    """Largest total in `records`; negative totals count as zero."""
    return max(max((record.total for record in records), default=0), 0)


def build_cells(
    records: list[ActivityRecord],
    window: YearWindow,
    geometry: Geometry,
    config: HeatmapConfig,
    peak: float,
) -> tuple[GridCell, ...]:
    """Lay out one GridCell per record with its scaled size and color."""
    cells = []
    for record in records:
        column = calendar_indexer.cell_column(record.date, window, config.week_start)
        row = calendar_indexer.cell_row(record.date, config.week_start)
        size = scale_size(record.total, peak, geometry.cell_size)
        x, y = layout_engine.centered_cell_position(column, row, geometry, size)
        cells.append(
            GridCell(
                record=record,
                column=column,
                row=row,
                size=size,
                color=scale_color(record.total, peak, config.color, config.fill_color),
                x=x,
                y=y,
            )
        )
    return tuple(cells)


def _validate_config(config: HeatmapConfig) -> None:
    parse_hex_color(config.color)
    if not 0 <= config.week_start <= 6:
        raise ValueError(f"week_start must be in 0-6, got {config.week_start!r}")


def entrance_delay(rng: random.Random, duration: float = TRANSITION_DURATION) -> float:
    """Randomized start delay in [0, 2 * duration], weighted toward the ends."""
    return (math.cos(math.pi * rng.random()) + 1) * duration


def tooltip_text(record: ActivityRecord, locale: str) -> str:
    total = record.total
    if isinstance(total, float) and total.is_integer():
        total = int(total)
    template = TOOLTIP_TEMPLATES.get(calendar_utils.resolve_locale(locale), TOOLTIP_TEMPLATES["en"])
    return template.format(total=total or 0, date=calendar_utils.format_date(record.date, locale=locale))


class RenderCoordinator:
    """
    Drives redraws and hover interactions on an SvgScene.

    Args:
        scene: Rendering surface
        data: Activity records (mappings or ActivityRecord); required before redraw
        config: Display configuration; defaults applied when None
        container_width: Width of the host container
        anchor: Any date in the year to display; defaults to today
        on_window_change: Called with {"start", "end"} once per redraw
        on_handler: Pass-through channel for host-defined interactions
        rng: Random source for entrance delays
        transition_duration: Base animation duration in ms
    """

    def __init__(
        self,
        scene: SvgScene,
        data: list | None = None,
        config: HeatmapConfig | None = None,
        container_width: float | None = None,
        anchor: date | None = None,
        on_window_change: Callable[[dict], None] | None = None,
        on_handler: Callable[[object], None] | None = None,
        rng: random.Random | None = None,
        transition_duration: float = TRANSITION_DURATION,
    ):
        # The hover pulse reschedules itself on completion and needs time to pass
        if transition_duration <= 0:
            raise ValueError(f"transition_duration must be positive, got {transition_duration!r}")

        self.scene = scene
        self.data = parse_activity_records(data) if data is not None else None
        self.config = config or HeatmapConfig()
        self.container_width = container_width
        self.anchor = to_date(anchor) if anchor is not None else None
        self.on_window_change = on_window_change
        self.on_handler = on_handler
        self.highlight = HighlightController()
        self.transition_duration = transition_duration
        self._rng = rng or random.Random()
        self._result: RenderResult | None = None
        self._cells_by_element: dict[str, GridCell] = {}
        self._tooltip: Element | None = None

    @property
    def result(self) -> RenderResult | None:
        return self._result

    def cell_element(self, day: date) -> Element:
        """Scene element drawn for `day`."""
        for element_id, cell in self._cells_by_element.items():
            if cell.record.date == day:
                return self.scene.get(element_id)
        raise KeyError(f"No cell drawn for {day}")

    def set_data(self, data: list) -> RenderResult:
        return self._redraw_with(data=parse_activity_records(data))

    def set_config(self, config: HeatmapConfig) -> RenderResult:
        return self._redraw_with(config=config)

    def resize(self, container_width: float | None) -> RenderResult:
        return self._redraw_with(container_width=container_width)

    def select_date(self, anchor) -> RenderResult:
        return self._redraw_with(anchor=to_date(anchor))

    def _redraw_with(self, **inputs) -> RenderResult:
        """Redraw with new inputs, keeping the previous ones if the redraw fails."""
        previous = {name: getattr(self, name) for name in inputs}
        for name, value in inputs.items():
            setattr(self, name, value)
        try:
            return self.redraw()
        except Exception:
            for name, value in previous.items():
                setattr(self, name, value)
            raise

    def emit_handler(self, payload: object) -> None:
        """Forward a host-defined interaction untouched."""
        if self.on_handler is not None:
            self.on_handler(payload)

    def redraw(self) -> RenderResult:
        """
        Full redraw for the current data, config, width and anchor.

        Returns:
            RenderResult with the window, geometry and laid-out cells

        Raises:
            MissingDataError: If no data has been supplied
            ValueError: If the config has an invalid color or week start;
                the scene is left as it was
        """
        if self.data is None:
            raise MissingDataError("Heatmap data is required before drawing")
        _validate_config(self.config)

        if self.anchor is None:
            self.anchor = calendar_utils.today()
        window = calendar_indexer.year_window(self.anchor)

        records = select_records(self.data, window, self.config.is_fill)
        peak = max_total(records)

        columns = calendar_indexer.week_column_count(window, self.config.week_start)
        geometry = layout_engine.compute_geometry(self.container_width, columns)
        cells = build_cells(records, window, geometry, self.config, peak)

        # Nothing above touches the scene
        self.scene.set_size(geometry.grid_width, geometry.grid_height)
        self.highlight.reset()
        self._clear()
        self._result = RenderResult(window=window, geometry=geometry, max_total=peak, cells=cells)

        self._draw_cells(cells)
        self._start_entrance()
        self._draw_month_labels(window, geometry)
        self._draw_weekday_labels(window, geometry)
        self._draw_tooltip()

        logger.debug(
            "Drew %d cells for %s..%s (max total %s, cell size %.2f)",
            len(cells), window.start, window.end, peak, geometry.cell_size,
        )

        if self.on_window_change is not None:
            self.on_window_change({"start": window.start, "end": window.end})

        return self._result

    def _clear(self) -> None:
        for class_name in (CELL_CLASS, MONTH_LABEL_CLASS, DAY_LABEL_CLASS, TOOLTIP_CLASS):
            self.scene.remove_class(class_name)
        self._cells_by_element = {}
        self._tooltip = None

    def _draw_cells(self, cells: tuple[GridCell, ...]) -> None:
        for cell in cells:
            element = self.scene.create(
                "rect",
                classes=("item", CELL_CLASS),
                attrs={**self._resting_attrs(cell), "fill": cell.color, "opacity": 0},
                data=cell.record,
            )
            self._cells_by_element[element.id] = cell
            self.scene.on(element.id, POINTER_ENTER, self._on_cell_enter)
            self.scene.on(element.id, POINTER_LEAVE, self._on_cell_leave)

    def _start_entrance(self) -> None:
        """Staggered fade-in; pointer events are dropped until every cell is in."""
        self.highlight.begin_transition()
        transitions = [
            self.scene.animate(
                element_id,
                {"opacity": 1},
                self.transition_duration,
                delay=entrance_delay(self._rng, self.transition_duration),
            )
            for element_id in self._cells_by_element
        ]
        TransitionGroup(transitions, self.highlight.end_transition)

    def _draw_month_labels(self, window: YearWindow, geometry: Geometry) -> None:
        font_size = layout_engine.label_font_size(geometry)
        for boundary in calendar_indexer.month_boundaries(window):
            column = calendar_indexer.cell_column(boundary, window, self.config.week_start)
            x, y = layout_engine.month_label_position(column, geometry)
            element = self.scene.create(
                "text",
                classes=("label", MONTH_LABEL_CLASS),
                attrs={"x": x, "y": y, "font_size": font_size, "fill": LABEL_COLOR},
                text=calendar_utils.month_label(boundary, self.config.locale),
                data=boundary,
            )
            self.scene.on(element.id, POINTER_ENTER, self._on_month_enter)
            self.scene.on(element.id, POINTER_LEAVE, self._on_label_leave)

    def _draw_weekday_labels(self, window: YearWindow, geometry: Geometry) -> None:
        font_size = layout_engine.label_font_size(geometry)
        first_week = calendar_indexer.week_aligned_start(window.start, self.config.week_start)
        for row in range(7):
            day = calendar_utils.add_days(first_week, row)
            x, y = layout_engine.weekday_label_position(row, geometry)
            element = self.scene.create(
                "text",
                classes=("label", DAY_LABEL_CLASS),
                attrs={"x": x, "y": y, "font_size": font_size, "fill": LABEL_COLOR},
                text=calendar_utils.weekday_label(day, self.config.locale),
                data=row,
            )
            self.scene.on(element.id, POINTER_ENTER, self._on_weekday_enter)
            self.scene.on(element.id, POINTER_LEAVE, self._on_label_leave)

    def _draw_tooltip(self) -> None:
        self._tooltip = self.scene.create(
            "tooltip",
            classes=(TOOLTIP_CLASS,),
            attrs={
                "x": 0,
                "y": 0,
                "width": layout_engine.TOOLTIP_WIDTH,
                "height": TOOLTIP_HEIGHT,
                "padding": layout_engine.TOOLTIP_PADDING,
                "opacity": 0,
            },
        )

    def _resting_attrs(self, cell: GridCell) -> dict:
        return {"x": cell.x, "y": cell.y, "width": cell.size, "height": cell.size}

    def _on_cell_enter(self, element: Element) -> None:
        cell = self._cells_by_element[element.id]
        if not self.highlight.pointer_enter(HighlightKind.CELL, cell.record.date):
            return
        self._pulse(element.id, cell)
        self._show_tooltip(cell)

    def _on_cell_leave(self, element: Element) -> None:
        cell = self._cells_by_element[element.id]
        if not self.highlight.pointer_leave():
            return
        # Interrupts the pulse, which shares these attributes
        self.scene.animate(element.id, self._resting_attrs(cell), self.transition_duration / 2)
        self._hide_tooltip()

    def _pulse(self, element_id: str, cell: GridCell) -> None:
        """Grow to 1.1x, shrink back, and repeat while the cell stays active."""
        state = self.highlight.state
        if state.active_kind != HighlightKind.CELL or state.active_key != cell.record.date:
            return

        geometry = self._result.geometry
        x, y = layout_engine.pulse_position(cell.column, cell.row, geometry)
        size = layout_engine.pulse_size(geometry)
        grow = self.scene.animate(
            element_id,
            {"x": x, "y": y, "width": size, "height": size},
            self.transition_duration,
        )

        def shrink(_transition):
            back = self.scene.animate(element_id, self._resting_attrs(cell), self.transition_duration)
            back.on_end(lambda _t: self._pulse(element_id, cell))

        grow.on_end(shrink)

    def _show_tooltip(self, cell: GridCell) -> None:
        slot_x, slot_y = layout_engine.cell_position(cell.column, cell.row, self._result.geometry)
        x, y = layout_engine.tooltip_position(slot_x, slot_y, self._result.geometry)
        self.scene.update(
            self._tooltip.id,
            {"x": x, "y": y},
            text=tooltip_text(cell.record, self.config.locale),
        )
        self.scene.animate(self._tooltip.id, {"opacity": 1}, self.transition_duration / 2)

    def _hide_tooltip(self) -> None:
        self.scene.animate(self._tooltip.id, {"opacity": 0}, self.transition_duration / 2)

    def _on_month_enter(self, element: Element) -> None:
        month_start = element.data
        if self.highlight.pointer_enter(HighlightKind.MONTH, (month_start.year, month_start.month)):
            self._fade_cells()

    def _on_weekday_enter(self, element: Element) -> None:
        if self.highlight.pointer_enter(HighlightKind.WEEKDAY, element.data):
            self._fade_cells()

    def _on_label_leave(self, element: Element) -> None:
        if self.highlight.pointer_leave():
            self._fade_cells()

    def _fade_cells(self) -> None:
        """Animate every cell to its highlight opacity, holding the guard until done."""
        self.highlight.begin_transition()
        transitions = [
            self.scene.animate(
                element_id,
                {"opacity": self.highlight.opacity_for(cell.record.date, cell.row)},
                self.transition_duration,
            )
            for element_id, cell in self._cells_by_element.items()
        ]
        TransitionGroup(transitions, self.highlight.end_transition)

    def describe(self) -> dict:
        """
        JSON-ready snapshot of the last redraw.

        Returns:
            Dictionary with window, geometry, cells, month_labels and day_labels
        """
        if self._result is None:
            raise MissingDataError("Nothing has been drawn yet")

        result = self._result
        return {
            "window": {
                "start": result.window.start.isoformat(),
                "end": result.window.end.isoformat(),
            },
            "geometry": asdict(result.geometry),
            "max_total": result.max_total,
            "cells": [
                {
                    "date": cell.record.date.isoformat(),
                    "total": cell.record.total,
                    "column": cell.column,
                    "row": cell.row,
                    "x": cell.x,
                    "y": cell.y,
                    "size": cell.size,
                    "color": cell.color,
                }
                for cell in result.cells
            ],
            "month_labels": [
                {"text": e.text, "x": e.attrs["x"], "y": e.attrs["y"], "month": e.data.month}
                for e in self.scene.select(MONTH_LABEL_CLASS)
            ],
            "day_labels": [
                {"text": e.text, "x": e.attrs["x"], "y": e.attrs["y"], "row": e.data}
                for e in self.scene.select(DAY_LABEL_CLASS)
            ],
        }

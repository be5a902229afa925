"""
Pixel geometry for the heatmap grid.

Geometry is recomputed whenever the container width or the displayed window
changes; it is a frozen value passed to every positioning function.
"""

import math
from dataclasses import dataclass

MIN_WIDTH = 1000
LABEL_PADDING = 40
GUTTER = 5
PULSE_SCALE = 1.1
TOOLTIP_WIDTH = 250
TOOLTIP_PADDING = 15


@dataclass(frozen=True)
class Geometry:
    """Grid dimensions for one container width and week-column count."""

    width: float
    cell_size: float
    grid_width: float
    grid_height: float
    label_padding: float
    gutter: float

    @property
    def pitch(self) -> float:
        """Distance between the origins of neighbouring cells."""
        return self.cell_size + self.gutter


def compute_geometry(
    container_width: float | None,
    week_columns: int,
    label_padding: float = LABEL_PADDING,
    gutter: float = GUTTER,
) -> Geometry:
    """
    Compute cell size and grid dimensions.

    Widths below MIN_WIDTH (including zero or an unmeasurable None) are
    clamped to MIN_WIDTH so cells stay legible.

    Args:
        container_width: Current width of the host container
        week_columns: Number of week-columns to fit
        label_padding: Space reserved for month/weekday labels
        gutter: Gap between cells

    Returns:
        Geometry for the grid

    Raises:
        ValueError: If week_columns is not positive
    """
    if week_columns <= 0:
        raise ValueError(f"week_columns must be positive, got {week_columns}")

    width = container_width if container_width and container_width > MIN_WIDTH else MIN_WIDTH
    cell_size = (width - label_padding) / week_columns - gutter
    grid_height = label_padding + 7 * (cell_size + gutter)

    return Geometry(
        width=width,
        cell_size=cell_size,
        grid_width=width,
        grid_height=grid_height,
        label_padding=label_padding,
        gutter=gutter,
    )


def cell_position(column: int, row: int, geometry: Geometry) -> tuple[float, float]:
    """Top-left corner of the grid slot at (column, row)."""
    x = column * geometry.pitch + geometry.label_padding
    y = geometry.label_padding + row * geometry.pitch
    return x, y


def centered_cell_position(
    column: int, row: int, geometry: Geometry, actual_size: float
) -> tuple[float, float]:
    """Top-left corner of a square of `actual_size` centered in its slot."""
    x, y = cell_position(column, row, geometry)
    offset = (geometry.cell_size - actual_size) / 2
    return x + offset, y + offset


def pulse_size(geometry: Geometry, scale: float = PULSE_SCALE) -> float:
    return geometry.cell_size * scale


def pulse_position(
    column: int, row: int, geometry: Geometry, scale: float = PULSE_SCALE
) -> tuple[float, float]:
    """Top-left corner of the enlarged hover square, centered on the slot."""
    return centered_cell_position(column, row, geometry, pulse_size(geometry, scale))


def label_font_size(geometry: Geometry) -> int:
    return math.floor(geometry.label_padding / 3)


def month_label_position(column: int, geometry: Geometry) -> tuple[float, float]:
    """Month labels sit above the column holding the first of the month."""
    x, _ = cell_position(column, 0, geometry)
    return x, geometry.label_padding / 2


def weekday_label_position(row: int, geometry: Geometry) -> tuple[float, float]:
    """Weekday labels sit in the left padding, vertically inside their row band."""
    y = geometry.label_padding + row * geometry.pitch + geometry.pitch / 1.75
    return geometry.label_padding / 3, y


def tooltip_position(
    cell_x: float,
    cell_y: float,
    geometry: Geometry,
    tooltip_width: float = TOOLTIP_WIDTH,
    tooltip_padding: float = TOOLTIP_PADDING,
) -> tuple[float, float]:
    """
    Anchor point for the tooltip of a cell whose slot starts at (cell_x, cell_y).

    The tooltip opens at the cell center and flips to the left when it would
    overflow the right edge of the container.
    """
    x = cell_x + geometry.cell_size / 2
    y = cell_y + geometry.cell_size / 2
    if geometry.width - x < tooltip_width + tooltip_padding * 3:
        x -= tooltip_width + tooltip_padding * 2
    return x, y

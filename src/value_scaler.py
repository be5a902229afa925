"""
Map activity totals to cell colors and sizes.
"""

import re

WHITE = (255, 255, 255)

# Lower bound of the color domain as a fraction of the max total; keeps
# small positive totals visibly tinted instead of washed out.
COLOR_DOMAIN_FLOOR = -0.15

_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(color: str) -> tuple[int, int, int]:
    """
    Parse '#rgb' or '#rrggbb' into an (r, g, b) tuple.

    Raises:
        ValueError: If the string is not a hex color
    """
    match = _HEX_PATTERN.match(color.strip()) if isinstance(color, str) else None
    if not match:
        raise ValueError(f"Invalid hex color: {color!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def format_hex_color(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def interpolate_color(start: tuple[int, int, int], end: tuple[int, int, int], t: float) -> str:
    """Linear RGB interpolation; `t` is clamped to [0, 1]."""
    t = min(max(t, 0.0), 1.0)
    rgb = tuple(round(a + (b - a) * t) for a, b in zip(start, end))
    return format_hex_color(rgb)


def scale_color(total: float, max_total: float, base_color: str, fill_color: str) -> str:
    """
    Color for a cell.

    Zero (and negative) totals get `fill_color` unchanged. Positive totals are
    interpolated from white to `base_color` over [-0.15 * max_total, max_total].
    With no activity in the window (max_total <= 0) the domain collapses and
    positive totals clamp to `base_color`.

    Args:
        total: The day's activity total
        max_total: Largest total in the displayed window
        base_color: Hex color for the highest intensity
        fill_color: Color for days without activity

    Returns:
        '#rrggbb' color string, or `fill_color` as given
    """
    if total <= 0:
        return fill_color

    base_rgb = parse_hex_color(base_color)
    if max_total <= 0:
        return format_hex_color(base_rgb)

    low = COLOR_DOMAIN_FLOOR * max_total
    t = (total - low) / (max_total - low)
    return interpolate_color(WHITE, base_rgb, t)


def scale_size(total: float, max_total: float, base_size: float) -> float:
    """
    Side length for a cell.

    Intensity shrinks a cell by at most 25% so low-activity days stay visible.

    Args:
        total: The day's activity total
        max_total: Largest total in the displayed window
        base_size: Full cell size in pixels

    Returns:
        Size in [0.75 * base_size, base_size]
    """
    if max_total <= 0:
        return base_size
    clamped = min(max(total, 0), max_total)
    return base_size * 0.75 + (base_size * clamped / max_total) * 0.25

"""
Configuration management for heatmap-daily.

Loads heatmap display defaults from environment variables.
"""

import os
from dotenv import load_dotenv

from src.models import DEFAULT_COLOR, DEFAULT_FILL_COLOR, DEFAULT_LOCALE, HeatmapConfig
from src.value_scaler import parse_hex_color

# Load .env file from project root
load_dotenv()

HEATMAP_COLOR = os.getenv("HEATMAP_COLOR", DEFAULT_COLOR)
HEATMAP_FILL_COLOR = os.getenv("HEATMAP_FILL_COLOR", DEFAULT_FILL_COLOR)
HEATMAP_LOCALE = os.getenv("HEATMAP_LOCALE", DEFAULT_LOCALE)
HEATMAP_IS_FILL = os.getenv("HEATMAP_IS_FILL", "false")
HEATMAP_WEEK_START = os.getenv("HEATMAP_WEEK_START", "0")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def validate_config():
    """Validate that configured values can be used for rendering."""
    invalid = []

    for name, value in (("HEATMAP_COLOR", HEATMAP_COLOR), ("HEATMAP_FILL_COLOR", HEATMAP_FILL_COLOR)):
        try:
            parse_hex_color(value)
        except ValueError:
            invalid.append(f"{name}={value!r} (expected a hex color like #7bc96f)")

    if HEATMAP_IS_FILL.strip().lower() not in _TRUE_VALUES | _FALSE_VALUES:
        invalid.append(f"HEATMAP_IS_FILL={HEATMAP_IS_FILL!r} (expected true or false)")

    if not HEATMAP_WEEK_START.strip().isdigit() or int(HEATMAP_WEEK_START) > 6:
        invalid.append(f"HEATMAP_WEEK_START={HEATMAP_WEEK_START!r} (expected 0-6, 0 = Sunday)")

    if invalid:
        raise ValueError(
            f"Invalid heatmap configuration: {', '.join(invalid)}\n"
            "Check your .env file or environment variables."
        )


def default_config() -> HeatmapConfig:
    """
    Build the display configuration from the environment.

    Raises:
        ValueError: If any configured value is invalid
    """
    validate_config()
    return HeatmapConfig(
        color=HEATMAP_COLOR,
        fill_color=HEATMAP_FILL_COLOR,
        locale=HEATMAP_LOCALE,
        is_fill=HEATMAP_IS_FILL.strip().lower() in _TRUE_VALUES,
        week_start=int(HEATMAP_WEEK_START),
    )

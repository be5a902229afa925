"""
heatmap-daily: calendar contribution heatmaps

Entry point for rendering a heatmap to SVG from the command line.
"""

import argparse
import json
import logging
import random
from pathlib import Path

from src.cli import display_calendar, display_window
from src.config import default_config
from src.demo_data import generate_demo_records
from src.models import ActivityRecordError, parse_activity_records
from src.render_coordinator import RenderCoordinator
from src.svg_scene import SvgScene

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render a contribution heatmap to SVG.")
    parser.add_argument("--data", type=Path, help="JSON file with [{date, total}, ...] records")
    parser.add_argument("--year", type=int, help="Year to display (defaults to this year)")
    parser.add_argument("--width", type=float, default=1000, help="Container width in pixels")
    parser.add_argument("--out", type=Path, default=Path("heatmap.svg"), help="Output SVG path")
    parser.add_argument("--seed", type=int, help="Seed for demo data")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def load_records(path: Path) -> list:
    """
    Read activity records from a JSON file.

    Raises:
        ActivityRecordError: If the file does not hold a list of records
    """
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ActivityRecordError(f"{path} must contain a JSON list of records")
    return parse_activity_records(raw)


def main(argv: list[str] | None = None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    print("heatmap-daily - Render your activity year!")
    print("-" * 50)

    try:
        config = default_config()
    except ValueError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1

    try:
        if args.data:
            records = load_records(args.data)
        else:
            records = generate_demo_records(rng=random.Random(args.seed))
    except (OSError, json.JSONDecodeError, ActivityRecordError) as e:
        print(f"\nError: {e}")
        return 1

    anchor = f"{args.year:04d}-01-01" if args.year else None
    coordinator = RenderCoordinator(
        SvgScene(),
        data=records,
        config=config,
        container_width=args.width,
        anchor=anchor,
        on_window_change=lambda w: logger.debug("Window changed to %s..%s", w["start"], w["end"]),
    )
    result = coordinator.redraw()
    coordinator.scene.timeline.run_until_idle()

    args.out.write_text(coordinator.scene.to_svg(), encoding="utf-8")

    display_window(result)
    display_calendar(result, locale=config.locale, week_start=config.week_start)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    exit(main())

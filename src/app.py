"""
FastAPI web application for heatmap-daily.

Provides REST API endpoints that lay out and render contribution heatmaps.
"""

import random
from datetime import date
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel, Field

from src.config import default_config
from src.demo_data import generate_demo_records
from src.models import ActivityRecord, ActivityRecordError, HeatmapConfig
from src.render_coordinator import MissingDataError, RenderCoordinator
from src.svg_scene import SvgScene

app = FastAPI(
    title="heatmap-daily",
    description="Calendar contribution heatmap layout and rendering",
    version="0.1.0",
)

templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

DEFAULT_WIDTH = 1000
HEX_COLOR_PATTERN = r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"
# Same lower bound as the `year` query parameter
MIN_ANCHOR = date(1970, 1, 1)


class RecordIn(BaseModel):
    """One day of activity in a request body."""

    date: date
    total: float = Field(..., description="Activity total for the day")


class ConfigIn(BaseModel):
    """Request model for display configuration."""

    color: str = Field("#7bc96f", pattern=HEX_COLOR_PATTERN, description="Highest-intensity color")
    fill_color: str = Field("#ebedf0", pattern=HEX_COLOR_PATTERN, description="Color for empty days")
    locale: str = Field("zh-cn", min_length=2, max_length=20, description="Display locale")
    is_fill: bool = Field(False, description="Synthesize zero-total days missing from data")
    week_start: int = Field(0, ge=0, le=6, description="First weekday of a column (0 = Sunday)")


class HeatmapRequest(BaseModel):
    """Request model for laying out a heatmap."""

    data: list[RecordIn] | None = Field(None, description="Activity records")
    config: ConfigIn | None = None
    width: float | None = Field(None, ge=0, description="Container width in pixels")
    anchor: date | None = Field(
        None, ge=MIN_ANCHOR, description="Any date in the year to display"
    )


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def _resolve_config(config: ConfigIn | None) -> HeatmapConfig:
    """
    Use the request's config, or the environment defaults.

    Raises:
        HTTPException: on configuration errors
    """
    if config is not None:
        return HeatmapConfig(**config.model_dump())
    try:
        return default_config()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")


def _draw(
    records: list[ActivityRecord] | None,
    config: HeatmapConfig,
    width: float | None,
    anchor: date | None,
) -> RenderCoordinator:
    """
    Run a full redraw and let the entrance animation finish.

    Raises:
        HTTPException: when data is missing or malformed
    """
    try:
        coordinator = RenderCoordinator(
            SvgScene(),
            data=records,
            config=config,
            container_width=width,
            anchor=anchor,
            rng=random.Random(0),
        )
        coordinator.redraw()
    except MissingDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ActivityRecordError as e:
        raise HTTPException(status_code=422, detail=str(e))

    coordinator.scene.timeline.run_until_idle()
    return coordinator


def _demo_anchor(year: int | None) -> date | None:
    return date(year, 1, 1) if year is not None else None


@app.get("/", response_class=HTMLResponse)
def index(request: Request, year: int | None = Query(None, ge=1970, le=9999)):
    """Render the demo heatmap page."""
    coordinator = _draw(generate_demo_records(), _resolve_config(None), DEFAULT_WIDTH, _demo_anchor(year))
    window = coordinator.result.window
    data = {
        "svg": coordinator.scene.to_svg(),
        "year": window.start.year,
        "cell_count": len(coordinator.result.cells),
    }
    return templates.TemplateResponse(request, "index.html", data)


@app.post("/api/heatmap")
def layout_heatmap(payload: HeatmapRequest):
    """
    Lay out a heatmap for the posted records.

    Args:
        payload: HeatmapRequest with data, optional config, width and anchor

    Returns:
        JSON with window, geometry, cells and labels
    """
    records = None
    if payload.data is not None:
        records = [ActivityRecord(date=r.date, total=r.total) for r in payload.data]

    coordinator = _draw(records, _resolve_config(payload.config), payload.width, payload.anchor)
    return coordinator.describe()


@app.get("/api/heatmap/demo")
def demo_heatmap(
    year: int | None = Query(None, ge=1970, le=9999),
    width: float | None = Query(None, ge=0),
    seed: int | None = None,
):
    """
    Lay out a heatmap for generated demo data.

    Returns:
        JSON with window, geometry, cells and labels
    """
    records = generate_demo_records(rng=random.Random(seed))
    coordinator = _draw(records, _resolve_config(None), width, _demo_anchor(year))
    return coordinator.describe()


@app.get("/heatmap.svg")
def heatmap_svg(
    year: int | None = Query(None, ge=1970, le=9999),
    width: float | None = Query(None, ge=0),
    seed: int | None = None,
):
    """Render the demo heatmap as an SVG image."""
    records = generate_demo_records(rng=random.Random(seed))
    coordinator = _draw(records, _resolve_config(None), width, _demo_anchor(year))
    return Response(content=coordinator.scene.to_svg(), media_type="image/svg+xml")

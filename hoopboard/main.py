from __future__ import annotations

from datetime import date
from pathlib import Path
import asyncio
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from hoopboard.log_buffer import get_buffer_handler, install_buffer_handler
from hoopboard.presentation import build_cards, display_date
from hoopboard.relay import relay_app
from hoopboard.schedule.controller import ScheduleController
from hoopboard.schedule.state import active_notice, shift_date
from hoopboard.schemas import NoticeOut, ScheduleOut
from hoopboard.settings import get_settings

_PACKAGE_DIR = Path(__file__).resolve().parent

app = FastAPI(title="Hoopboard")
app.mount("/static", StaticFiles(directory=_PACKAGE_DIR / "static"), name="static")
app.mount("/relay", relay_app, name="relay")
templates = Jinja2Templates(directory=_PACKAGE_DIR / "templates")
logger = logging.getLogger(__name__)
controller = ScheduleController(get_settings())
_refresh_task: asyncio.Task | None = None
_refresh_stop: asyncio.Event | None = None


@app.on_event("startup")
async def start_schedule() -> None:
    global _refresh_task, _refresh_stop
    install_buffer_handler()
    logger.info("App starting up, loading today's schedule")
    await controller.load()
    _refresh_stop = asyncio.Event()
    _refresh_task = asyncio.create_task(controller.run_refresh_loop(_refresh_stop))


@app.on_event("shutdown")
async def stop_schedule() -> None:
    global _refresh_task, _refresh_stop
    if _refresh_stop:
        _refresh_stop.set()
    if _refresh_task:
        await _refresh_task
    _refresh_task = None
    _refresh_stop = None


def parse_query_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD") from exc


def _schedule_out() -> ScheduleOut:
    state = controller.state
    notice = active_notice(state, controller.now())
    games = list(state.games)
    return ScheduleOut(
        date=state.current_date.isoformat(),
        is_today=controller.is_today(),
        loading=state.loading,
        source=state.source,
        count=len(games),
        games=games,
        notice=NoticeOut(message=notice.message, expires_at=notice.expires_at) if notice else None,
        message="No games scheduled for this date." if not games else None,
    )


@app.get("/", response_class=HTMLResponse)
async def schedule_page(request: Request, date: str | None = None):
    requested = parse_query_date(date)
    if requested is not None and requested != controller.state.current_date:
        controller.set_date(requested)
        await controller.load()
    elif not controller.state.applied_seq:
        await controller.load()

    state = controller.state
    today = controller.is_today()
    tz = controller.settings.tz
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "request": request,
            "display_date": display_date(state.current_date, today),
            "current_date": state.current_date.isoformat(),
            "prev_date": shift_date(state.current_date, -1, tz).isoformat(),
            "next_date": shift_date(state.current_date, 1, tz).isoformat(),
            "is_today": today,
            "refresh_seconds": controller.settings.refresh_seconds,
            "cards": build_cards(state.games),
            "notice": active_notice(state, controller.now()),
        },
    )


@app.get("/api/games", response_model=ScheduleOut)
def api_games():
    return _schedule_out()


@app.post("/api/schedule/navigate", response_model=ScheduleOut)
async def api_navigate(days: int = 1):
    controller.navigate(days)
    await controller.load()
    return _schedule_out()


@app.post("/api/schedule/date", response_model=ScheduleOut)
async def api_set_date(value: str):
    requested = parse_query_date(value)
    if requested is None:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD")
    controller.set_date(requested)
    await controller.load()
    return _schedule_out()


@app.post("/api/schedule/refresh", response_model=ScheduleOut)
async def api_refresh():
    await controller.load()
    return _schedule_out()


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str | None = None):
    handler = get_buffer_handler()
    try:
        entries = handler.entries(limit=limit, min_level=level)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"entries": entries}

import logging
import time
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from booker.application.config import resolve_config
from booker.application.factory import get_study_service
from booker.application.scheduler import time_split
from booker.application.service import StudyService
from booker.consts import VERSION
from booker.domain.constants import DEFAULT_DURATION
from booker.domain.errors import ItemNotFound, ItemValidationError
from booker.domain.models import Category, Language
from booker.infrastructure.serialization import ReviewItemRecord

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("booker.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"Booker Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("Booker Server shutting down...")


app = FastAPI(
    title="Booker Server",
    description="Local API for Booker front-ends (schedule, calendar, reminders).",
    version=VERSION,
    lifespan=lifespan,
)


@app.exception_handler(OSError)
async def storage_error_handler(request: Request, exc: OSError):
    # Nothing was replaced in memory; the last saved collection stays current.
    logger.error(f"Storage failure on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500, content={"detail": f"Could not write to the data directory: {exc}"}
    )


@lru_cache(maxsize=1)
def get_service() -> StudyService:
    # The HTTP surface never prompts for notification permission.
    return get_study_service(resolve_config(), interactive=False)


ServiceDep = Annotated[StudyService, Depends(get_service)]


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ItemCreate(BaseModel):
    topic: str
    description: str | None = None
    language: Language = Language.SPANISH
    category: Category = Category.GRAMMAR
    duration: int = DEFAULT_DURATION


class TimeSplitResponse(BaseModel):
    main: int
    secondary: int
    has_split: bool


class TodayResponse(BaseModel):
    date: str
    day_offset: int
    count: int
    total_minutes: int
    time_string: str
    has_tasks: bool
    items: list[ReviewItemRecord]


class ProjectionResponse(BaseModel):
    date: str
    stage: int
    kind: str


class ClockResponse(BaseModel):
    date: str
    day_offset: int


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/items", response_model=list[ReviewItemRecord])
def list_items(service: ServiceDep, archived: bool | None = None):
    items = service.items
    if archived is not None:
        items = tuple(i for i in items if i.is_archived == archived)
    return [ReviewItemRecord.from_item(i) for i in items]


@app.post("/items", response_model=ReviewItemRecord, status_code=201)
def create_item(req: ItemCreate, service: ServiceDep):
    try:
        item = service.log(
            req.topic,
            description=req.description,
            language=req.language,
            category=req.category,
            duration=req.duration,
        )
    except ItemValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return ReviewItemRecord.from_item(item)


@app.post("/items/{item_id}/complete", response_model=ReviewItemRecord)
def complete_item(item_id: str, service: ServiceDep):
    try:
        item = service.complete(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}") from None
    except ItemValidationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return ReviewItemRecord.from_item(item)


@app.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: str, service: ServiceDep):
    try:
        service.delete(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}") from None


@app.get("/items/{item_id}/schedule", response_model=list[ProjectionResponse])
def item_schedule(item_id: str, service: ServiceDep):
    try:
        entries = service.schedule(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}") from None
    return [
        ProjectionResponse(date=e.date.isoformat(), stage=e.stage, kind=e.kind.value)
        for e in entries
    ]


@app.get("/items/{item_id}/split", response_model=TimeSplitResponse)
def item_split(item_id: str, service: ServiceDep):
    try:
        item = service.get(item_id)
    except ItemNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown item: {item_id}") from None
    split = time_split(item.original_duration, item.category)
    return TimeSplitResponse(main=split.main, secondary=split.secondary, has_split=split.has_split)


@app.get("/today", response_model=TodayResponse)
def today(service: ServiceDep):
    stats = service.today_stats()
    due = service.agenda().get(service.today, [])
    return TodayResponse(
        date=service.today.isoformat(),
        day_offset=service.clock.offset,
        count=stats.count,
        total_minutes=stats.total_minutes,
        time_string=stats.time_string,
        has_tasks=stats.has_tasks,
        items=[ReviewItemRecord.from_item(i) for i in due],
    )


@app.post("/simulation/advance", response_model=ClockResponse)
def simulation_advance(service: ServiceDep):
    new_today = service.advance_day()
    return ClockResponse(date=new_today.isoformat(), day_offset=service.clock.offset)


@app.post("/simulation/reset", response_model=ClockResponse)
def simulation_reset(service: ServiceDep):
    new_today = service.reset_date()
    return ClockResponse(date=new_today.isoformat(), day_offset=service.clock.offset)

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, Field

from ariba.application.analytics import analyze
from ariba.application.clock import system_clock
from ariba.application.deck_exporter import export_deck
from ariba.application.scheduler import schedule
from ariba.consts import VERSION
from ariba.domain.constants import MAX_REVIEW_TIME
from ariba.domain.errors import (
    EmptyCollection,
    InvalidGrade,
    InvalidReviewTime,
    SerializationFailed,
    WriteFailed,
)
from ariba.domain.models import ReviewEvent
from ariba.domain.ports import Clock, ReminderNotifier
from ariba.infrastructure.notifier import LoggingNotifier
from ariba.infrastructure.serialization import CardRecord

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("ariba.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"ariba server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("ariba server shutting down...")


app = FastAPI(
    title="ariba server",
    description="SM-2 scheduling and learning analytics over HTTP.",
    version=VERSION,
    lifespan=lifespan,
)

_notifier = LoggingNotifier()


def get_clock() -> Clock:
    return system_clock


def get_notifier() -> ReminderNotifier:
    return _notifier


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness probe for hosts embedding the scheduler; reports version and uptime.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


class ScheduleRequest(BaseModel):
    card: CardRecord
    # Unvalidated here; the scheduler accepts only a plain int in 0-5.
    grade: Any


@app.post("/schedule", response_model=CardRecord)
async def schedule_card(req: ScheduleRequest, clock: Clock = Depends(get_clock)):
    """Apply one review and return the rescheduled card."""
    try:
        updated = schedule(req.card.to_card(), req.grade, clock=clock)
    except InvalidGrade as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return CardRecord.from_card(updated)


class ReviewRecord(BaseModel):
    card_id: str
    review_time: int = Field(ge=0, le=MAX_REVIEW_TIME)
    grade: int


class AnalyzeRequest(BaseModel):
    cards: list[CardRecord]
    reviews: list[ReviewRecord] | None = None


class AnalyticsResponse(BaseModel):
    total_cards: int
    mastered_cards: int
    avg_response_time: float
    success_rate: float
    study_streak: int | None


@app.post("/analyze", response_model=AnalyticsResponse)
async def analyze_cards(req: AnalyzeRequest, clock: Clock = Depends(get_clock)):
    """Summarize a card collection."""
    reviews = None
    if req.reviews is not None:
        reviews = [ReviewEvent(**r.model_dump()) for r in req.reviews]

    try:
        analytics = analyze([r.to_card() for r in req.cards], reviews=reviews, clock=clock)
    except (EmptyCollection, InvalidReviewTime) as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return AnalyticsResponse(**asdict(analytics))


class ExportRequest(BaseModel):
    cards: list[CardRecord]
    file_path: str
    format: str | None = None


@app.post("/export")
def export_cards(req: ExportRequest):
    """Write the cards to a file on the server host."""
    logger.info(f"Export requested: {len(req.cards)} cards to {req.file_path}")
    try:
        message = export_deck([r.to_card() for r in req.cards], req.file_path, req.format)
    except SerializationFailed as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except WriteFailed as e:
        logger.error(f"Export failed: {e}")
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"message": message}


class ReminderRequest(BaseModel):
    message: str


@app.post("/reminder")
async def send_reminder(req: ReminderRequest, notifier: ReminderNotifier = Depends(get_notifier)):
    notifier.send(req.message)
    return {"ok": True}

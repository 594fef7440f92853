"""Now and quotes API controller."""

import logging

from fastapi import APIRouter, Depends, Query

from app.core.config import Settings
from app.core.dependencies import get_settings
from app.domains.now.service import NowService, QuoteService
from app.schemas.base import ResponseSchema
from app.schemas.now import NowUpdate, QuoteCreate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/now", tags=["now"])
quotes_router = APIRouter(prefix="/api/quotes", tags=["now"])


def _now_service(settings: Settings) -> NowService:
    return NowService(settings.now_file, QuoteService(settings.quotes_file))


@router.get("", response_model=ResponseSchema)
async def get_now(settings: Settings = Depends(get_settings)):
    """Weather, image and a fresh random quote."""
    now = _now_service(settings).get_now()
    return ResponseSchema(status="success", data=now.model_dump(mode="json"))


@router.post("", response_model=ResponseSchema)
async def update_now(update: NowUpdate, settings: Settings = Depends(get_settings)):
    snapshot = _now_service(settings).update_now(update)
    return ResponseSchema(
        status="success", message="Snapshot updated", data=snapshot.model_dump(mode="json")
    )


@quotes_router.get("", response_model=ResponseSchema)
async def get_quotes(
    tag: str | None = Query(None, description="Only quotes carrying this tag"),
    settings: Settings = Depends(get_settings),
):
    quotes = QuoteService(settings.quotes_file).list_quotes(tag)
    return ResponseSchema(status="success", data=[q.model_dump(mode="json") for q in quotes])


@quotes_router.post("", response_model=ResponseSchema, status_code=201)
async def create_quote(quote_data: QuoteCreate, settings: Settings = Depends(get_settings)):
    quote = QuoteService(settings.quotes_file).add_quote(quote_data)
    return ResponseSchema(
        status="success", message="Quote added", data=quote.model_dump(mode="json")
    )

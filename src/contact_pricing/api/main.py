import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from contact_pricing import __version__
from contact_pricing.config.logging import configure_logging
from contact_pricing.config.settings import get_settings
from contact_pricing.engine import Quote
from contact_pricing.ui.formatting import format_currency
from contact_pricing.api.state import engine

logger = logging.getLogger(__name__)

configure_logging()

app = FastAPI(
    title="Contact Pricing API",
    description="Tiered subscription quotes for contact volumes",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class CalcRequest(BaseModel):
    volume: int


class QuoteResponse(BaseModel):
    volume: int
    outcome: str  # "absent", "priced" or "consultation"
    quote: Optional[dict] = None
    total_display: Optional[str] = None


def _quote_response(volume: int, quote: Optional[Quote]) -> QuoteResponse:
    if quote is None:
        return QuoteResponse(volume=volume, outcome="absent")
    total_display = None
    if not quote.consultation:
        total_display = format_currency(quote.total)
    return QuoteResponse(
        volume=volume,
        outcome=quote.kind,
        quote=jsonable_encoder(quote.to_dict()),
        total_display=total_display,
    )


@app.get("/")
async def root():
    return {"status": "online", "message": "Contact Pricing API Active"}


@app.get("/plans")
async def get_plans():
    return [jsonable_encoder(plan.to_dict()) for plan in engine.plans]


@app.post("/calculate", response_model=QuoteResponse)
async def calculate_quote(req: CalcRequest):
    try:
        return _quote_response(req.volume, engine.calculate(req.volume))
    except Exception as e:
        logger.exception("Quote failed for volume %s", req.volume)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/quote/{volume}", response_model=QuoteResponse)
async def get_quote(volume: int):
    try:
        return _quote_response(volume, engine.calculate(volume))
    except Exception as e:
        logger.exception("Quote failed for volume %s", volume)
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    has_report = settings.build_report.exists()
    return {
        "engine_active": True,
        "plan_count": len(engine.plans),
        "consultation_level": engine.consultation_level,
        "schedule_last_build": settings.build_report.stat().st_mtime if has_report else None
    }

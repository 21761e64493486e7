# footprint/main.py
import logging
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from . import climate_client, config, credits, crud, gemini_client, models, ranking, schemas
from .aggregate import aggregate
from .database import Base, engine, get_db
from .direct import ReadingSession, convert, unit_for
from .factors import EMISSION_FACTORS, MONTHLY_LIMIT_KG, OCR_CATEGORIES

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create DB tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Carbon Footprint API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


def _session_from(readings) -> ReadingSession:
    session = ReadingSession()
    for r in readings:
        session.submit(r.category, r.quantity, r.source)
    return session


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/factors")
def list_factors():
    return {
        "monthly_limit_kg": MONTHLY_LIMIT_KG,
        "ocr_categories": list(OCR_CATEGORIES),
        "factors": [f._asdict() for f in EMISSION_FACTORS.values()],
    }


# -----------------
# Calculation
# -----------------
@app.post("/calculate", response_model=schemas.CalculateOut)
def calculate(payload: schemas.CalculateIn):
    answers = payload.answers
    zone = None
    if payload.latitude is not None and payload.longitude is not None:
        zone = climate_client.fetch_climate_zone(payload.latitude, payload.longitude)
        home = climate_client.apply_climate_zone(answers.home_energy, zone)
        answers = answers.model_copy(update={"home_energy": home})

    footprint = aggregate(answers, _session_from(payload.readings), payload.household_size)
    return schemas.CalculateOut(
        footprint=footprint,
        credits=credits.evaluate(footprint.grand_total_kg),
        tips=ranking.rank(footprint.breakdown),
        climate_zone=answers.home_energy.climate_zone,
    )


@app.get("/climate")
def climate(lat: float, lon: float):
    return {"climate_zone": climate_client.fetch_climate_zone(lat, lon)}


# -----------------
# Bill / receipt upload
# -----------------
@app.post("/readings/extract", response_model=schemas.ExtractOut)
def extract_reading(category: str = Form(...), file: UploadFile = File(...)):
    if category not in OCR_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unsupported document category. Use one of: {list(OCR_CATEGORIES)}")
    contents = file.file.read()
    value = gemini_client.extract_reading(contents, category, file.content_type or "image/jpeg")
    if value is None:
        return schemas.ExtractOut(category=category)
    return schemas.ExtractOut(category=category, value=value, emission=convert(category, value),
                              unit=unit_for(category))


# -----------------
# Ledger
# -----------------
@app.post("/records")
def save_records(payload: schemas.SaveIn, db: Session = Depends(get_db)):
    session = _session_from(payload.readings)
    records = crud.records_from_session(session, payload.household_size)
    if not records:
        raise HTTPException(status_code=400, detail="Nothing to save")
    rows = crud.create_records(db, payload.user_id, records)
    logger.info("Saved %d emission records for %s", len(rows), payload.user_id)
    return {"saved": len(rows), "ids": [r.id for r in rows]}


@app.get("/records")
def list_records(
    user_id: str,
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    rows = crud.get_records_for_user(db, user_id, year, month)
    return [
        {
            "id": r.id,
            "category": r.category,
            "amount": round(r.amount or 0.0, 2),
            "source": r.source,
            "description": r.description,
            "recorded_at": r.recorded_at.isoformat() if r.recorded_at else None,
        }
        for r in rows
    ]


@app.get("/credits")
def credit_history(user_id: str, db: Session = Depends(get_db)):
    months = credits.monthly_credits(crud.get_records_for_user(db, user_id))
    return {
        "monthly_limit_kg": MONTHLY_LIMIT_KG,
        "total_credits": round(credits.total_credits(months), 2),
        "months": [m.model_dump() for m in months],
    }


@app.get("/recommendations", response_model=schemas.RecommendationsOut)
def recommendations(user_id: str, db: Session = Depends(get_db)):
    totals = crud.category_totals(db, user_id)
    return schemas.RecommendationsOut(
        tips=ranking.rank(totals),
        priorities=ranking.prioritize(totals),
        totals={k: round(v, 2) for k, v in totals.items()},
    )


@app.get("/summary", response_model=schemas.SummaryOut)
def month_summary(
    user_id: str,
    year: Optional[int] = Query(default=None, ge=2000, le=2100),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    db: Session = Depends(get_db),
):
    now = datetime.utcnow()
    year = now.year if year is None else year
    month = now.month if month is None else month

    totals = crud.category_totals(db, user_id, year, month)
    folded = ranking.fold_totals(totals)
    categories = [
        schemas.CategoryTotal(category=c, title=ranking.TIP_CATALOG[c][0], total_kg=kg)
        for c, kg in sorted(folded.items(), key=lambda p: p[1], reverse=True)
    ]
    return schemas.SummaryOut(
        year=year,
        month=month,
        credits=credits.evaluate(sum(totals.values(), 0.0)),
        categories=categories,
        tips=ranking.rank(totals),
    )

# footprint/models.py
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String, Text

from .database import Base


def gen_id(prefix):
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


class EmissionRecord(Base):
    __tablename__ = "emissions"
    id = Column(String, primary_key=True, default=lambda: gen_id("emission"))
    user_id = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False)  # electricity, petrol, diesel, bus, train, clothing, ...
    amount = Column(Float, default=0.0)  # kg CO2
    source = Column(String, nullable=False, default="manual")  # manual | ocr
    description = Column(Text)
    recorded_at = Column(DateTime, default=datetime.utcnow, index=True)

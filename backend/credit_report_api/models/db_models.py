"""
Credit Report API - SQLAlchemy ORM Models

The normalizer hands over raw text only. Format checks on identifiers and
numeric conversion of the score happen here, at the storage boundary.
"""
import re
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, JSON
from sqlalchemy.orm import validates
from ..database import Base


MOBILE_NUMBER_RE = re.compile(r"^[6-9]\d{9}$")  # Indian mobile format
PAN_RE = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")  # Income tax PAN format
CREDIT_SCORE_RANGE = (300, 900)


class ReportValidationError(ValueError):
    """A normalized report breaks a storage constraint."""


class ReportDB(Base):
    """Persisted normalized credit report."""
    __tablename__ = "reports"

    id = Column(String(36), primary_key=True)  # UUID
    source_file = Column(String(500))

    # ==========================================================================
    # IDENTITY
    # ==========================================================================
    name = Column(String(255), nullable=False)
    mobile_number = Column(String(10), nullable=False)
    pan = Column(String(10), nullable=False, index=True)
    credit_score = Column(Integer, nullable=True)

    # Summary figures and accounts stay as the raw text the bureau sent
    summary_data = Column(JSON)
    accounts_json = Column(JSON)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @validates("name")
    def validate_name(self, key, value):
        value = (value or "").strip()
        if not value:
            raise ReportValidationError("name is required")
        return value

    @validates("mobile_number")
    def validate_mobile_number(self, key, value):
        value = (value or "").strip()
        if not MOBILE_NUMBER_RE.match(value):
            raise ReportValidationError(f"Invalid mobile number: {value!r}")
        return value

    @validates("pan")
    def validate_pan(self, key, value):
        value = (value or "").strip().upper()
        if not PAN_RE.match(value):
            raise ReportValidationError(f"Invalid PAN: {value!r}")
        return value

    @validates("credit_score")
    def validate_credit_score(self, key, value):
        if value is None:
            return None
        low, high = CREDIT_SCORE_RANGE
        if not low <= value <= high:
            raise ReportValidationError(f"Credit score {value} outside {low}-{high}")
        return value

"""
Report Store

Persists NormalizedReport records and rebuilds their wire shape for display.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.db_models import ReportDB, ReportValidationError
from ..models.ssot import NormalizedReport

logger = logging.getLogger(__name__)


def _parse_score(raw: str) -> Optional[int]:
    """Bureau scores arrive as text; blank means not scored."""
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ReportValidationError(f"Credit score is not a number: {raw!r}")


class ReportStore:
    """Session-scoped access to stored reports."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, report: NormalizedReport, source_file: Optional[str] = None,
             report_id: Optional[str] = None) -> ReportDB:
        """
        Add a report to the session and flush it.

        Raises ReportValidationError when an identity field breaks a store
        constraint. Committing is left to the caller.
        """
        data = report.to_dict()
        identity = data["identity"]

        row = ReportDB(
            id=report_id or str(uuid4()),
            source_file=source_file,
            name=identity["name"],
            mobile_number=identity["mobileNumber"],
            pan=identity["pan"],
            credit_score=_parse_score(identity["creditScore"]),
            summary_data=data["summary"],
            accounts_json=data["accounts"],
        )
        self.db.add(row)
        self.db.flush()
        logger.info(f"Stored report {row.id} with {len(data['accounts'])} accounts")
        return row

    def get(self, report_id: str) -> Optional[ReportDB]:
        return self.db.query(ReportDB).filter(ReportDB.id == report_id).first()

    def list(self) -> List[ReportDB]:
        return self.db.query(ReportDB).order_by(ReportDB.created_at.desc()).all()

    def delete(self, report_id: str) -> bool:
        row = self.get(report_id)
        if not row:
            return False
        self.db.delete(row)
        self.db.flush()
        return True

    @staticmethod
    def to_report(row: ReportDB) -> Dict[str, Any]:
        """Stored row → NormalizedReport wire shape (all leaves text)."""
        return {
            "identity": {
                "name": row.name or "",
                "mobileNumber": row.mobile_number or "",
                "pan": row.pan or "",
                "creditScore": "" if row.credit_score is None else str(row.credit_score),
            },
            "summary": row.summary_data or {},
            "accounts": row.accounts_json or [],
        }

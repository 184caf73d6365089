"""
Credit Report API - Reports Router

Handles bureau XML upload, normalization and persistence, plus retrieval
and deletion of stored reports.
"""
from __future__ import annotations
import logging
import os
from typing import List, Optional
from uuid import uuid4

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..database import get_db
from ..services.parsing import parse_xml, normalize
from ..services.report_store import ReportStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reports"])

# Configuration
UPLOAD_DIR = os.getenv("UPLOAD_DIR", os.path.join(".", "uploads"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024))  # 10 MB
ALLOWED_EXTENSION = ".xml"


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class CreditCardResponse(BaseModel):
    bankName: str = ""
    accountNumber: str = ""
    accountType: str = ""
    portfolioType: str = ""


class AddressResponse(BaseModel):
    line1: str = ""
    line2: str = ""
    line3: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""


class AccountResponse(BaseModel):
    creditCard: CreditCardResponse
    openDate: str = ""
    closedDate: str = ""
    creditLimit: str = ""
    highestCredit: str = ""
    currentBalance: str = ""
    amountOverdue: str = ""
    accountStatus: str = ""
    dateReported: str = ""
    address: AddressResponse


class IdentityResponse(BaseModel):
    name: str = ""
    mobileNumber: str = ""
    pan: str = ""
    creditScore: str = ""


class SummaryResponse(BaseModel):
    totalAccounts: str = ""
    activeAccounts: str = ""
    closedAccounts: str = ""
    currentBalanceAmount: str = ""
    securedAccountsAmount: str = ""
    unsecuredAccountsAmount: str = ""
    last7DaysCreditEnquiries: str = ""


class NormalizedReportResponse(BaseModel):
    identity: IdentityResponse
    summary: SummaryResponse
    accounts: List[AccountResponse] = []


class UploadResponse(BaseModel):
    message: str
    data: NormalizedReportResponse
    dbId: str


class StoredReportResponse(BaseModel):
    dbId: str
    sourceFile: str
    createdAt: str
    data: NormalizedReportResponse


class ReportListItem(BaseModel):
    id: str
    sourceFile: str
    name: str
    creditScore: str
    accounts: int
    createdAt: str


class DeleteResponse(BaseModel):
    status: str
    dbId: str


class ErrorResponse(BaseModel):
    error: str


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def get_upload_path(report_id: str) -> str:
    """Where the raw upload for a report is kept."""
    return os.path.join(UPLOAD_DIR, f"{report_id}{ALLOWED_EXTENSION}")


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_report(
    xmlData: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db)
):
    """
    Upload a bureau XML report, normalize it and store the result.
    """
    if xmlData is None or not xmlData.filename:
        return error_response(400, "No XML file uploaded")

    # Validate file type
    if os.path.splitext(xmlData.filename)[1].lower() != ALLOWED_EXTENSION:
        return error_response(400, "Only XML files are allowed")

    raw = await xmlData.read(MAX_UPLOAD_BYTES + 1)
    if len(raw) > MAX_UPLOAD_BYTES:
        return error_response(413, "File too large")

    report_id = str(uuid4())
    file_path = get_upload_path(report_id)
    try:
        os.makedirs(UPLOAD_DIR, exist_ok=True)
        with open(file_path, "wb") as buffer:
            buffer.write(raw)

        # XML → tree → NormalizedReport
        parsed = parse_xml(raw.decode("utf-8-sig"))
        report = normalize(parsed)

        ReportStore(db).save(report, source_file=xmlData.filename, report_id=report_id)
        db.commit()
    except Exception as e:
        db.rollback()
        # Rejected uploads have no row to delete them through
        if os.path.exists(file_path):
            os.remove(file_path)
        logger.error(f"Error processing report {xmlData.filename}: {e}")
        return error_response(500, "Failed to parse or save XML file")

    logger.info(f"Report {report_id} saved from {xmlData.filename}")

    return UploadResponse(
        message="XML file uploaded and parsed successfully!",
        data=report.to_dict(),
        dbId=report_id,
    )


@router.get("/reports", response_model=List[ReportListItem])
async def list_reports(db: Session = Depends(get_db)):
    """List stored reports, newest first."""
    return [
        ReportListItem(
            id=row.id,
            sourceFile=row.source_file or "",
            name=row.name,
            creditScore="" if row.credit_score is None else str(row.credit_score),
            accounts=len(row.accounts_json or []),
            createdAt=str(row.created_at),
        )
        for row in ReportStore(db).list()
    ]


@router.get("/reports/{report_id}", response_model=StoredReportResponse,
            responses={404: {"model": ErrorResponse}})
async def get_report(report_id: str, db: Session = Depends(get_db)):
    row = ReportStore(db).get(report_id)
    if not row:
        return error_response(404, "Report not found")

    return StoredReportResponse(
        dbId=row.id,
        sourceFile=row.source_file or "",
        createdAt=str(row.created_at),
        data=ReportStore.to_report(row),
    )


@router.delete("/reports/{report_id}", response_model=DeleteResponse,
               responses={404: {"model": ErrorResponse}})
async def delete_report(report_id: str, db: Session = Depends(get_db)):
    """Delete a stored report and its raw upload."""
    if not ReportStore(db).delete(report_id):
        return error_response(404, "Report not found")
    db.commit()

    file_path = get_upload_path(report_id)
    if os.path.exists(file_path):
        os.remove(file_path)

    return DeleteResponse(status="deleted", dbId=report_id)

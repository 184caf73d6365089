"""
Credit Report API - FastAPI Application

Main entry point for the bureau report backend.

Architecture:
- Upload (XML) → XML tree builder → generic tree
- Generic tree → Report normalizer → NormalizedReport
- NormalizedReport → ReportStore (SQLAlchemy)
"""
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .routers import reports_router
from .database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Credit Report API",
    description="""
    Normalizes bureau credit reports (INProfileResponse XML) into
    identity, summary and per-account sections.

    ## Pipeline
    1. **Upload**: multipart field `xmlData`, `.xml` only, 10 MB limit
    2. **Parsing**: XML → list-wrapped tree → NormalizedReport
    3. **Storage**: NormalizedReport persisted with identifier checks

    All normalized values are the raw text found in the report.
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reports_router)


@app.get("/")
async def root():
    """Root endpoint - liveness message."""
    return {"message": "Backend is running successfully!"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# For running with: python -m credit_report_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8001)))

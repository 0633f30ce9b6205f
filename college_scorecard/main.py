"""FastAPI application setup for the College Scorecard service."""

import os

from fastapi import FastAPI

from utils.logging_utils import setup_logging

setup_logging(level=os.getenv("LOG_LEVEL", "INFO"), job_name="college_scorecard")

from .api import router as api_router  # noqa: E402

app = FastAPI(title="College Scorecard Client")


@app.get("/healthz")
def healthz():
    """Liveness probe."""
    return {"status": "ok"}


# API routes
app.include_router(api_router, prefix="/v1")

"""
FastAPI backend for the Chemodose dosage calculator.

Provides endpoints for:
- Listing, editing, reordering and duplicating drugs
- Importing and exporting JSON backups
- Calculating dose results for patient inputs
- Previewing and linting formulas

File-based storage (no database): {data_dir}/drugs.json
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chemodose import __version__
from chemodose.api.routers import calculate, drugs, system
from chemodose.startup import ensure_initialized

logger = logging.getLogger(__name__)

ensure_initialized()


# =============================================================================
# APP SETUP
# =============================================================================

app = FastAPI(
    title="Chemodose API",
    description="Formula-driven dosage calculation and drug catalogue management",
    version=__version__,
)

# CORS for a separately served frontend during development
_cors_origins = ["http://localhost:5173", "http://localhost:3000"]
_extra_origin = os.getenv("CHEMODOSE_CORS_ORIGIN")
if _extra_origin:
    _cors_origins.append(_extra_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system.router)
app.include_router(drugs.router)
app.include_router(calculate.router)

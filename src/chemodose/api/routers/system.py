"""System endpoints: health check and version info."""

from fastapi import APIRouter
from pydantic import BaseModel

from chemodose import __version__
from chemodose.api.dependencies import get_data_dir


router = APIRouter(tags=["system"])


class VersionInfo(BaseModel):
    """Application version information."""

    version: str
    display: str  # Formatted for UI display


@router.get("/api/health")
@router.get("/health")  # Keep both for compatibility
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "data_dir": str(get_data_dir())}


@router.get("/api/version", response_model=VersionInfo)
def get_version():
    """Get application version info."""
    return VersionInfo(
        version=__version__,
        display=f"v{__version__}",
    )

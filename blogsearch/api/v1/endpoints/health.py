"""Health check endpoint. No store access; used for liveness probes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from blogsearch.api.v1.dependencies import get_app_settings
from blogsearch.core.config import Settings
from blogsearch.infrastructure.firebase import get_firestore_client
from blogsearch.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Return ok plus whether the search backend is configured."""
    backend = "firestore" if get_firestore_client() is not None else "unconfigured"
    return HealthResponse(version=settings.app_version, search_backend=backend)

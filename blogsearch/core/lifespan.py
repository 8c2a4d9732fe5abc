"""Application lifespan: startup and shutdown.

Only wiring of infrastructure (logging, Firestore client, telemetry);
no search logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from blogsearch.core.config import get_settings
from blogsearch.infrastructure.firebase import close_firebase, init_firebase
from blogsearch.shared.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
    setup_logging,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Firestore client (if credentials are set),
    telemetry (if enabled). Shutdown order: Firestore client close,
    telemetry shutdown.
    """
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    app.state.firestore_enabled = init_firebase()
    if not app.state.firestore_enabled:
        logger.warning("Firestore not configured; search endpoints will return 503")

    if settings.telemetry_enabled:
        telemetry = TelemetryConfig.from_settings(settings)
        if telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        ):
            telemetry.instrument(app)
            set_telemetry(telemetry)

    yield

    # ---- Shutdown ----
    await close_firebase()
    app.state.firestore_enabled = False

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

"""Process-wide Firestore client.

Credentials come from FIREBASE_SERVICE_ACCOUNT_KEY (the service account JSON
itself) or FIREBASE_SERVICE_ACCOUNT_PATH (a file holding it); the key wins
when both are set. Without either the service still starts and search is
reported as unconfigured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from blogsearch.core.config import Settings, get_settings
from blogsearch.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)

logger = logging.getLogger(__name__)

_firestore_client: FirestoreRESTClient | None = None


def load_service_account(settings: Settings) -> dict[str, Any] | None:
    """Return the service account JSON as a dict, or None when none is configured.

    Raises:
        ValueError: the key or file is not a JSON object.
    """
    if settings.firebase_service_account_key is not None:
        raw = settings.firebase_service_account_key.get_secret_value()
        source = "FIREBASE_SERVICE_ACCOUNT_KEY"
    elif settings.firebase_service_account_path:
        path = Path(settings.firebase_service_account_path).expanduser()
        if not path.is_file():
            logger.warning("Service account file not found: %s", path.resolve())
            return None
        raw = path.read_text(encoding="utf-8")
        source = str(path)
    else:
        return None

    try:
        info = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValueError(f"{source} is not valid JSON") from e
    if not isinstance(info, dict):
        raise ValueError(f"{source} must hold a JSON object")
    return info


def init_firebase(settings: Settings | None = None) -> bool:
    """Create the shared Firestore client; True when search has a backend.

    Idempotent. Bad credentials are logged and reported as False instead of
    failing startup.
    """
    global _firestore_client
    if _firestore_client is not None:
        return True
    settings = settings or get_settings()
    try:
        info = load_service_account(settings)
        if info is None:
            logger.info("No Firestore credentials; search is disabled")
            return False
        project_id = info.get("project_id")
        if not project_id:
            logger.error("Service account JSON has no project_id")
            return False
        _firestore_client = FirestoreRESTClient(
            project_id,
            _get_credentials(info),
            timeout=settings.firestore_timeout_seconds,
        )
    except Exception:
        logger.exception("Firestore initialization failed")
        return False
    logger.info("Firestore client ready for project %s", project_id)
    return True


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the shared client, or None if init_firebase has not succeeded."""
    return _firestore_client


async def close_firebase() -> None:
    """Release the client's connection pool (app shutdown, end of a script)."""
    global _firestore_client
    client, _firestore_client = _firestore_client, None
    if client is not None:
        await client.aclose()
        logger.info("Firestore client closed")

"""Tests for Firestore client setup from service account settings."""

import json
from pathlib import Path

import pytest
from pydantic import SecretStr

from blogsearch.core.config import Settings
from blogsearch.infrastructure.firebase import client as firebase_client
from blogsearch.infrastructure.firebase import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from blogsearch.infrastructure.firebase.client import load_service_account


@pytest.fixture
def no_env_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_KEY", raising=False)
    monkeypatch.delenv("FIREBASE_SERVICE_ACCOUNT_PATH", raising=False)


def test_no_credentials_disables_search(no_env_credentials: None) -> None:
    settings = Settings()
    assert load_service_account(settings) is None
    assert init_firebase(settings) is False
    assert get_firestore_client() is None


def test_key_without_project_id_is_rejected(no_env_credentials: None) -> None:
    settings = Settings(firebase_service_account_key=SecretStr('{"type": "service_account"}'))
    assert init_firebase(settings) is False
    assert get_firestore_client() is None


def test_malformed_key_is_rejected(no_env_credentials: None) -> None:
    settings = Settings(firebase_service_account_key=SecretStr("{not json"))
    with pytest.raises(ValueError, match="not valid JSON"):
        load_service_account(settings)
    assert init_firebase(settings) is False


def test_key_must_be_an_object(no_env_credentials: None) -> None:
    settings = Settings(firebase_service_account_key=SecretStr('["a"]'))
    with pytest.raises(ValueError, match="JSON object"):
        load_service_account(settings)


def test_reads_service_account_file(no_env_credentials: None, tmp_path: Path) -> None:
    key_file = tmp_path / "sa.json"
    key_file.write_text(json.dumps({"project_id": "demo"}), encoding="utf-8")
    settings = Settings(firebase_service_account_path=str(key_file))
    assert load_service_account(settings) == {"project_id": "demo"}


def test_missing_service_account_file(no_env_credentials: None, tmp_path: Path) -> None:
    settings = Settings(firebase_service_account_path=str(tmp_path / "missing.json"))
    assert load_service_account(settings) is None


async def test_init_and_close(
    no_env_credentials: None, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(firebase_client, "_get_credentials", lambda info: object())
    settings = Settings(
        firebase_service_account_key=SecretStr('{"project_id": "demo"}'),
        firestore_timeout_seconds=5,
    )
    try:
        assert init_firebase(settings) is True
        db = get_firestore_client()
        assert db is not None
        assert db.project_id == "demo"
        # Second call keeps the existing client.
        assert init_firebase(settings) is True
        assert get_firestore_client() is db
    finally:
        await close_firebase()
    assert get_firestore_client() is None

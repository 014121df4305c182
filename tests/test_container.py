"""Tests for container wiring."""

import asyncio

import pytest
from pydantic import ValidationError

from headshot_studio.config import Settings, resolve_api_key
from headshot_studio.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.generation_service.configured
    assert container.generation_service.model == settings.gemini_model
    _, controller = container.session_store.create()
    assert controller.max_upload_bytes == settings.max_upload_bytes
    asyncio.run(container.close_resources())
    assert len(container.session_store) == 0


def test_build_container_without_api_key_is_unconfigured() -> None:
    container = build_container(Settings(gemini_api_key="  ", _env_file=None))

    assert not container.generation_service.configured


def test_resolve_api_key_treats_blank_as_missing() -> None:
    assert resolve_api_key(None) is None
    assert resolve_api_key("") is None
    assert resolve_api_key(" key ") == "key"


@pytest.mark.parametrize(
    "field", ["max_sessions", "max_upload_bytes", "session_ttl_seconds"]
)
def test_settings_reject_non_positive_limits(field: str) -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **{field: 0})

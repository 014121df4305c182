"""Tests for the Gemini image client adapter."""

import asyncio
from types import SimpleNamespace

from google.genai import types

from headshot_studio.adapters.gemini_image_client import GeminiImageClient


class _FakeModels:
    def __init__(self, response: object) -> None:
        self.response = response
        self.last_kwargs: dict[str, object] | None = None

    async def generate_content(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_kwargs = kwargs
        return self.response


def _fake_genai(response: object) -> SimpleNamespace:
    return SimpleNamespace(aio=SimpleNamespace(models=_FakeModels(response)))


def _response(*parts: object) -> SimpleNamespace:
    content = SimpleNamespace(parts=list(parts))
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


def _response_without_parts() -> SimpleNamespace:
    content = SimpleNamespace(parts=None)
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


def test_gemini_client_maps_text_and_image_parts() -> None:
    fake = _fake_genai(
        _response(
            SimpleNamespace(text="Done", inline_data=None),
            SimpleNamespace(
                text=None,
                inline_data=SimpleNamespace(data=b"png-bytes", mime_type="image/png"),
            ),
        )
    )
    client = GeminiImageClient(client=fake)

    parts = asyncio.run(
        client.generate_content(
            model="gemini-2.5-flash-image",
            prompt="Make it formal",
            image_bytes=b"\xff\xd8\xffjpeg",
            mime_type="image/jpeg",
        )
    )

    assert parts[0].text == "Done"
    assert parts[1].data == b"png-bytes"
    assert parts[1].mime_type == "image/png"

    kwargs = fake.aio.models.last_kwargs
    assert kwargs["model"] == "gemini-2.5-flash-image"
    prompt_part, image_part = kwargs["contents"]
    assert prompt_part.text == "Make it formal"
    assert image_part.inline_data.mime_type == "image/jpeg"
    assert isinstance(kwargs["config"], types.GenerateContentConfig)


def _parts_for(response: object) -> object:
    client = GeminiImageClient(client=_fake_genai(response))
    return asyncio.run(
        client.generate_content(
            model="m", prompt="p", image_bytes=b"x", mime_type="image/jpeg"
        )
    )


def test_gemini_client_reports_missing_content_as_none() -> None:
    assert _parts_for(SimpleNamespace(candidates=None)) is None
    assert _parts_for(SimpleNamespace(candidates=[])) is None
    assert _parts_for(_response_without_parts()) is None


def test_gemini_client_keeps_empty_parts_list() -> None:
    assert _parts_for(_response()) == []


def test_gemini_client_create_builds_sdk_client() -> None:
    client = GeminiImageClient.create("test-key", timeout_ms=1000)

    assert client.client is not None

"""Tests for the background edit sub-workflow."""

import asyncio
import io
from datetime import UTC, datetime

import pytest
from PIL import Image

from headshot_studio.domain.errors import (
    CompositingError,
    InvalidStateError,
    LocalProcessingError,
)
from headshot_studio.domain.workflow import Backdrop, EditState
from headshot_studio.services.background_edit import BackgroundEditController
from tests.conftest import FakeBackgroundRemover, make_cutout_png, make_jpeg


def _editor(remover: FakeBackgroundRemover) -> BackgroundEditController:
    return BackgroundEditController(make_jpeg(), remover)


def test_start_stores_processed_image() -> None:
    remover = FakeBackgroundRemover()
    editor = _editor(remover)

    asyncio.run(editor.start())

    assert editor.state is EditState.EDITED
    assert editor.processed_image is not None
    assert editor.processed_image.read_bytes() == remover.result
    assert editor.last_error is None
    editor.close()


def test_start_twice_invokes_remover_once() -> None:
    remover = FakeBackgroundRemover()
    editor = _editor(remover)

    asyncio.run(editor.start())
    asyncio.run(editor.start())

    assert remover.calls == 1
    editor.close()


def test_start_while_processing_is_ignored() -> None:
    async def scenario() -> FakeBackgroundRemover:
        gate = asyncio.Event()
        remover = FakeBackgroundRemover(gate=gate)
        editor = _editor(remover)
        task = asyncio.create_task(editor.start())
        await asyncio.sleep(0)
        assert editor.busy

        await editor.start()
        gate.set()
        await task
        editor.close()
        return remover

    remover = asyncio.run(scenario())

    assert remover.calls == 1


def test_failure_moves_to_failed_with_message() -> None:
    remover = FakeBackgroundRemover(error=LocalProcessingError("blocked"))
    editor = _editor(remover)

    asyncio.run(editor.start())

    assert editor.state is EditState.FAILED
    assert editor.last_error == "blocked"
    assert editor.processed_image is None


def test_unexpected_failure_uses_readable_message() -> None:
    editor = _editor(FakeBackgroundRemover(error=RuntimeError("onnx crashed")))

    asyncio.run(editor.start())

    assert editor.state is EditState.FAILED
    assert editor.last_error == LocalProcessingError.default_message


def test_failed_edit_can_be_retried() -> None:
    remover = FakeBackgroundRemover(error=LocalProcessingError())
    editor = _editor(remover)
    asyncio.run(editor.start())

    remover.error = None
    asyncio.run(editor.start())

    assert editor.state is EditState.EDITED
    assert editor.last_error is None
    assert remover.calls == 2
    editor.close()


def test_cancel_releases_processed_image_and_allows_redo() -> None:
    remover = FakeBackgroundRemover()
    editor = _editor(remover)
    asyncio.run(editor.start())
    processed = editor.processed_image
    assert processed is not None

    editor.cancel()

    assert editor.state is EditState.IDLE
    assert editor.processed_image is None
    assert processed.released

    asyncio.run(editor.start())
    assert remover.calls == 2
    editor.close()


def test_close_during_processing_discards_late_result() -> None:
    async def scenario() -> BackgroundEditController:
        gate = asyncio.Event()
        editor = _editor(FakeBackgroundRemover(gate=gate))
        task = asyncio.create_task(editor.start())
        await asyncio.sleep(0)

        editor.close()
        gate.set()
        await task
        return editor

    editor = asyncio.run(scenario())

    assert editor.processed_image is None
    assert editor.state is EditState.PROCESSING


def test_download_transparent_returns_png_unchanged() -> None:
    remover = FakeBackgroundRemover()
    editor = _editor(remover)
    asyncio.run(editor.start())

    exported = editor.download(now=datetime(2024, 1, 1, tzinfo=UTC))

    assert exported.content == remover.result
    assert exported.media_type == "image/png"
    assert exported.filename.startswith("headshot-bg-removed-")
    assert exported.filename.endswith(".png")
    editor.close()


def test_download_white_backdrop_is_opaque_jpeg() -> None:
    editor = _editor(FakeBackgroundRemover())
    asyncio.run(editor.start())
    editor.select_backdrop(Backdrop.WHITE)

    exported = editor.download()

    assert exported.media_type == "image/jpeg"
    assert exported.filename.startswith("headshot-white-")
    assert exported.filename.endswith(".jpg")
    image = Image.open(io.BytesIO(exported.content))
    assert image.mode == "RGB"
    assert "A" not in image.getbands()
    editor.close()


def test_download_outside_edited_raises() -> None:
    editor = _editor(FakeBackgroundRemover())

    with pytest.raises(InvalidStateError):
        editor.download()


def test_download_with_undecodable_result_raises_compositing_error() -> None:
    editor = _editor(FakeBackgroundRemover(result=b"garbage"))
    asyncio.run(editor.start())
    editor.select_backdrop(Backdrop.DARK)

    with pytest.raises(CompositingError):
        editor.download()
    editor.close()


def test_backdrop_can_be_selected_in_any_state() -> None:
    editor = _editor(FakeBackgroundRemover(result=make_cutout_png()))
    states: list[EditState] = []
    editor.subscribe(lambda snapshot: states.append(snapshot.state))

    editor.select_backdrop(Backdrop.GREEN)

    assert editor.selected_backdrop is Backdrop.GREEN
    assert editor.snapshot().selected_backdrop is Backdrop.GREEN
    assert states == [EditState.IDLE]

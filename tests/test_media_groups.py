"""Тесты сборки альбомов из отдельных апдейтов."""

import asyncio

import pytest

from tattoo_bot.services.media_groups import MediaGroupBuffer, MediaGroupCollector

DELAY = 0.02


class Recorder:
    """Запоминает все слитые альбомы."""

    def __init__(self) -> None:
        self.flushed: list[MediaGroupBuffer] = []

    async def __call__(self, buffer: MediaGroupBuffer) -> None:
        self.flushed.append(buffer)


@pytest.mark.asyncio
async def test_group_is_flushed_once_after_delay() -> None:
    collector = MediaGroupCollector(delay=DELAY)
    recorder = Recorder()

    for file_id in ["a", "b", "c"]:
        collector.add("g1", 555, file_id, recorder)

    # До истечения задержки ничего не сливается
    assert recorder.flushed == []
    assert collector.pending == 1

    await asyncio.sleep(DELAY * 5)

    assert len(recorder.flushed) == 1
    assert recorder.flushed[0].file_ids == ["a", "b", "c"]
    assert recorder.flushed[0].user_id == 555
    assert collector.pending == 0


@pytest.mark.asyncio
async def test_caption_from_any_photo_is_kept() -> None:
    collector = MediaGroupCollector(delay=DELAY)
    recorder = Recorder()

    collector.add("g1", 555, "a", recorder)
    collector.add("g1", 555, "b", recorder, caption="  dragon on shoulder ")
    collector.add("g1", 555, "c", recorder, caption="")

    await asyncio.sleep(DELAY * 5)

    assert recorder.flushed[0].caption == "dragon on shoulder"


@pytest.mark.asyncio
async def test_groups_are_independent() -> None:
    collector = MediaGroupCollector(delay=DELAY)
    recorder = Recorder()

    collector.add("g1", 555, "a", recorder)
    collector.add("g2", 777, "b", recorder)

    await asyncio.sleep(DELAY * 5)

    by_group = {buffer.group_id: buffer.file_ids for buffer in recorder.flushed}
    assert by_group == {"g1": ["a"], "g2": ["b"]}


@pytest.mark.asyncio
async def test_claim_is_single_shot() -> None:
    """Забрать буфер можно только один раз."""
    collector = MediaGroupCollector(delay=10)
    recorder = Recorder()
    collector.add("g1", 555, "a", recorder)

    first = collector.claim("g1")
    second = collector.claim("g1")

    assert first is not None
    assert first.file_ids == ["a"]
    assert second is None
    await collector.close()


@pytest.mark.asyncio
async def test_late_photo_starts_new_batch() -> None:
    """Фото, пришедшее после слива, попадает в новый пакет, а не теряется."""
    collector = MediaGroupCollector(delay=DELAY)
    recorder = Recorder()

    collector.add("g1", 555, "a", recorder)
    await asyncio.sleep(DELAY * 5)
    collector.add("g1", 555, "b", recorder)
    await asyncio.sleep(DELAY * 5)

    assert [buffer.file_ids for buffer in recorder.flushed] == [["a"], ["b"]]


@pytest.mark.asyncio
async def test_flush_error_is_logged_not_raised() -> None:
    collector = MediaGroupCollector(delay=DELAY)

    async def broken(buffer: MediaGroupBuffer) -> None:
        raise RuntimeError("boom")

    collector.add("g1", 555, "a", broken)
    await asyncio.sleep(DELAY * 5)

    assert collector.pending == 0


@pytest.mark.asyncio
async def test_close_cancels_pending_groups() -> None:
    collector = MediaGroupCollector(delay=10)
    recorder = Recorder()
    collector.add("g1", 555, "a", recorder)

    await collector.close()

    assert collector.pending == 0
    assert recorder.flushed == []

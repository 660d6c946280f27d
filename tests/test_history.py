"""Tests for history storage."""

import asyncio
from datetime import datetime, timedelta

from navim.core import HistoryEntry
from navim.storage import Database, HistoryRepository


def run(coro):
    return asyncio.run(coro)


def test_add_and_list_newest_first(temp_dir):
    async def scenario():
        async with Database(temp_dir / "history.db") as db:
            repo = HistoryRepository(db)
            start = datetime(2024, 1, 1, 12, 0)
            for i in range(3):
                await repo.add_entry(HistoryEntry(
                    query="rust",
                    title=f"Page {i}",
                    url=f"https://example.com/{i}",
                    visited_at=start + timedelta(minutes=i),
                ))
            return await repo.get_entries()

    entries = run(scenario())

    assert [e.title for e in entries] == ["Page 2", "Page 1", "Page 0"]
    assert entries[0].visited_at == datetime(2024, 1, 1, 12, 2)
    assert entries[0].display_time == "2024-01-01 12:02"
    assert all(e.id is not None for e in entries)


def test_only_newest_entries_are_kept(temp_dir):
    async def scenario():
        async with Database(temp_dir / "history.db") as db:
            repo = HistoryRepository(db, max_entries=5)
            start = datetime(2024, 1, 1)
            for i in range(8):
                await repo.add_entry(HistoryEntry(
                    query="q",
                    title=f"Page {i}",
                    url=f"https://example.com/{i}",
                    visited_at=start + timedelta(hours=i),
                ))
            return await repo.count(), await repo.get_entries()

    count, entries = run(scenario())

    assert count == 5
    assert [e.title for e in entries] == [f"Page {i}" for i in range(7, 2, -1)]


def test_history_survives_reopen(temp_dir):
    path = temp_dir / "history.db"

    async def write():
        async with Database(path) as db:
            await HistoryRepository(db).add_entry(
                HistoryEntry(query="q", title="Saved", url="https://example.com/")
            )

    async def read():
        async with Database(path) as db:
            return await HistoryRepository(db).get_entries()

    run(write())
    entries = run(read())

    assert len(entries) == 1
    assert entries[0].title == "Saved"
    assert entries[0].query == "q"


def test_clear(temp_dir):
    async def scenario():
        async with Database(temp_dir / "history.db") as db:
            repo = HistoryRepository(db)
            await repo.add_entry(HistoryEntry(query="q", title="t", url="https://x.com/"))
            await repo.clear()
            return await repo.count()

    assert run(scenario()) == 0


def test_limit(temp_dir):
    async def scenario():
        async with Database(temp_dir / "history.db") as db:
            repo = HistoryRepository(db)
            for i in range(4):
                await repo.add_entry(HistoryEntry(query="q", title=str(i), url=f"https://x.com/{i}"))
            return await repo.get_entries(limit=2)

    assert len(run(scenario())) == 2

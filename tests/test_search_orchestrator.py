"""End-to-end tests for debounce → plan → merge → staleness gate → render."""
import asyncio

from conftest import FakeCatalog, FakeDisplay, StepClock, make_games
from models.game_record import GameRecord
from services.config import SearchConfig
from services.search_orchestrator import SearchOrchestrator
from services.staleness_guard import StalenessGuard


def test_integer_query_example():
    text = [GameRecord("100", "Seven Wonders", "2010"), GameRecord("101", "7 Ronin", "2013")]
    by_id = [GameRecord("7", "Cave Troll", "2002")]
    catalog = FakeCatalog({("text", "7"): text, ("id", "7"): by_id})
    display = FakeDisplay()

    entries = asyncio.run(SearchOrchestrator(catalog, display).run_search("7"))

    assert [e.record.id for e in entries] == ["7", "100", "101"]
    assert entries[0].target == "game/7"
    assert display.events == [("busy", True), ("show", 3), ("busy", False)]


def test_large_query_ranks_exact_first():
    base = make_games("Catan", 80)
    exact = [GameRecord("13", "Catan", "1995"), GameRecord("5", "Catan dup")]
    catalog = FakeCatalog({("text", "catan"): base, ("exact", "catan"): exact})
    display = FakeDisplay()

    entries = asyncio.run(SearchOrchestrator(catalog, display).run_search("catan"))

    assert [e.record.id for e in entries[:3]] == ["13", "5", "1"]
    # id "5" appears once, as the exact match.
    assert [e.record.id for e in entries].count("5") == 1
    assert entries[1].record.name == "Catan dup"
    assert len(entries) == 80


def test_result_cap_applies_to_merged_list():
    base = make_games("Game", 120)
    exact = make_games("Exact", 40, start=1000)
    catalog = FakeCatalog({("text", "game"): base, ("exact", "game"): exact})
    display = FakeDisplay()

    entries = asyncio.run(SearchOrchestrator(catalog, display).run_search("game"))

    assert len(entries) == 100
    assert [e.record for e in entries] == (exact + base)[:100]


def test_empty_query_clears_without_searching():
    catalog = FakeCatalog()
    display = FakeDisplay()

    entries = asyncio.run(SearchOrchestrator(catalog, display).run_search(""))

    assert entries == []
    assert catalog.calls == []
    assert display.events == [("clear",), ("busy", False)]


def test_no_matches_renders_empty_list():
    display = FakeDisplay()
    entries = asyncio.run(SearchOrchestrator(FakeCatalog(), display).run_search("zzz"))
    assert entries == []
    assert display.events == [("busy", True), ("show", 0), ("busy", False)]


def test_stale_job_is_skipped_even_if_it_finishes_last():
    catalog = FakeCatalog(
        {("text", "cat"): make_games("Cat", 2), ("text", "catan"): make_games("Catan", 1)},
        delays={("text", "cat"): 0.08, ("text", "catan"): 0.01},
    )
    display = FakeDisplay()
    orchestrator = SearchOrchestrator(
        catalog, display, guard=StalenessGuard(clock=StepClock(1, 2))
    )

    async def main():
        old = asyncio.ensure_future(orchestrator.run_search("cat"))
        await asyncio.sleep(0.005)
        new = asyncio.ensure_future(orchestrator.run_search("catan"))
        return await old, await new

    old_result, new_result = asyncio.run(main())

    assert old_result is None
    assert [e.label for e in new_result] == ["Catan 1 (2000)"]
    assert display.entries == new_result
    assert display.events.count(("show", 1)) == 1
    assert ("show", 2) not in display.events


def test_stale_job_is_skipped_when_it_finishes_first():
    catalog = FakeCatalog(
        {("text", "cat"): make_games("Cat", 2), ("text", "catan"): make_games("Catan", 1)},
        delays={("text", "cat"): 0.01, ("text", "catan"): 0.05},
    )
    display = FakeDisplay()
    orchestrator = SearchOrchestrator(catalog, display)

    async def main():
        old = asyncio.ensure_future(orchestrator.run_search("cat"))
        await asyncio.sleep(0)
        new = asyncio.ensure_future(orchestrator.run_search("catan"))
        return await old, await new

    old_result, new_result = asyncio.run(main())

    assert old_result is None
    assert len(new_result) == 1
    # Superseded job leaves the indicator alone and never clears the list.
    assert display.events == [("busy", True), ("busy", True), ("show", 1), ("busy", False)]


def test_on_input_debounces_to_last_text():
    catalog = FakeCatalog({("text", "catan"): make_games("Catan", 1)})
    display = FakeDisplay()
    orchestrator = SearchOrchestrator(catalog, display, SearchConfig(debounce_ms=30))

    async def main():
        for text in ["c", "ca", "cat", "cata", "catan"]:
            orchestrator.on_input(text)
            await asyncio.sleep(0.005)
        await asyncio.sleep(0.06)
        await orchestrator.shutdown()

    asyncio.run(main())

    assert catalog.calls == [("text", "catan")]
    assert len(display.entries) == 1


def test_shutdown_cancels_pending_search():
    catalog = FakeCatalog()
    display = FakeDisplay()
    orchestrator = SearchOrchestrator(catalog, display, SearchConfig(debounce_ms=50))

    async def main():
        orchestrator.on_input("catan")
        await orchestrator.shutdown()
        await asyncio.sleep(0.08)

    asyncio.run(main())
    assert catalog.calls == []
    assert display.events == []


def test_shutdown_cancels_search_stuck_on_the_network():
    catalog = FakeCatalog(delays={("text", "catan"): 10})
    display = FakeDisplay()
    orchestrator = SearchOrchestrator(catalog, display, SearchConfig(debounce_ms=0))

    async def main():
        orchestrator.on_input("catan")
        await asyncio.sleep(0.02)
        await asyncio.wait_for(orchestrator.shutdown(), timeout=1)

    asyncio.run(main())
    assert catalog.calls == [("text", "catan")]
    assert ("show", 0) not in display.events

from __future__ import annotations

import random
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.models.category import Category, WordEntry
from app.services.category_store import CategoryStore
from app.services.errors import GameNotFound, InvalidPlayer
from app.services.game_factory import GameFactory
from app.services.game_registry import GameRegistry
from app.services.reveal import RevealController, RevealResult, SolutionDiscloser


BANANA = Category(id="c-banana", name="Banana", words=[WordEntry(word="Banana", hint="Fruit")])
PLAIN = Category(id="c-plain", name="Plain", words=[WordEntry(word="Kettle")])


@pytest.fixture
def registry():
    return GameRegistry(ttl_seconds=3600)


@pytest.fixture
def factory(tmp_path, registry):
    store = CategoryStore(path=tmp_path / "none.json")
    return GameFactory(categories=store, registry=registry, rng=random.Random(5))


@pytest.fixture
def reveal(registry):
    return RevealController(registry)


@pytest.fixture
def disclose(registry):
    return SolutionDiscloser(registry)


def test_banana_example(factory, reveal, disclose):
    game = factory.create(["c-banana"], 5, 1, hints_enabled=True, custom_categories=[BANANA])
    (imposter,) = game.imposter_seats

    for player in range(1, 6):
        result = reveal.reveal(game.game_id, player)
        if player == imposter:
            assert result == RevealResult(role="imposter", hint="Fruit")
        else:
            assert result == RevealResult(role="player", word="Banana")

    solution = disclose.solution(game.game_id)
    assert solution.word == "Banana"
    assert solution.imposters == [imposter]
    assert game.revealed == {1, 2, 3, 4, 5}


@pytest.mark.parametrize("hints_enabled", [True, False])
def test_roles_match_seats_and_hint_rules(factory, reveal, hints_enabled):
    game = factory.create(["c-banana"], 9, 3, hints_enabled=hints_enabled, custom_categories=[BANANA])

    for player in range(1, 10):
        result = reveal.reveal(game.game_id, player)
        if player in game.imposter_seats:
            assert result.role == "imposter"
            assert result.word is None
            assert result.hint == ("Fruit" if hints_enabled else None)
        else:
            assert result.role == "player"
            assert result.word == game.secret_word
            assert result.hint is None


def test_imposter_without_defined_hint_gets_none(factory, reveal):
    game = factory.create(["c-plain"], 4, 1, hints_enabled=True, custom_categories=[PLAIN])
    (imposter,) = game.imposter_seats
    assert reveal.reveal(game.game_id, imposter) == RevealResult(role="imposter")


def test_reveal_is_idempotent_and_unordered(factory, reveal):
    game = factory.create(["c-banana"], 6, 2, hints_enabled=True, custom_categories=[BANANA])

    later = reveal.reveal(game.game_id, 6)
    again = reveal.reveal(game.game_id, 6)

    assert later == again
    assert game.revealed == {6}


@pytest.mark.parametrize("player", [0, 7, -1])
def test_reveal_out_of_range_player(factory, reveal, player):
    game = factory.create(["c-banana"], 6, 2, custom_categories=[BANANA])
    with pytest.raises(InvalidPlayer):
        reveal.reveal(game.game_id, player)
    assert game.revealed == set()


def test_unknown_game(reveal, disclose):
    with pytest.raises(GameNotFound):
        reveal.reveal("nope", 1)
    with pytest.raises(GameNotFound):
        disclose.solution("nope")


def test_solution_available_before_any_reveal(factory, disclose):
    game = factory.create(["c-banana"], 10, 4, custom_categories=[BANANA])
    solution = disclose.solution(game.game_id)
    assert solution.imposters == sorted(game.imposter_seats)
    assert set(solution.imposters) == game.imposter_seats


def test_reveal_racing_eviction_fails_cleanly(factory, registry, reveal, monkeypatch):
    game = factory.create(["c-banana"], 5, 1, custom_categories=[BANANA])
    registry.evict(game.game_id)

    # le reveal a récupéré la référence juste avant l'éviction
    monkeypatch.setattr(registry, "get", lambda game_id: game)

    with pytest.raises(GameNotFound):
        reveal.reveal(game.game_id, 1)
    assert game.revealed == set()


def test_concurrent_reveals_of_one_game_are_all_recorded(factory, reveal):
    game = factory.create(["c-banana"], 20, 3, custom_categories=[BANANA])
    players = list(range(1, 21)) * 3

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda p: reveal.reveal(game.game_id, p), players))

    assert game.revealed == set(range(1, 21))
    assert results[:20] == results[20:40] == results[40:]


def test_locked_game_does_not_block_another_game(factory, reveal):
    busy = factory.create(["c-banana"], 5, 1, custom_categories=[BANANA])
    other = factory.create(["c-banana"], 5, 1, custom_categories=[BANANA])

    with busy.lock:
        with ThreadPoolExecutor(max_workers=1) as pool:
            future = pool.submit(reveal.reveal, other.game_id, 1)
            result = future.result(timeout=2)

    assert result.role in {"player", "imposter"}
    assert other.revealed == {1}
    assert busy.revealed == set()

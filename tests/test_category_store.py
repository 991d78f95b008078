from __future__ import annotations

import pytest

from app.models.category import Category, WordEntry
from app.services.category_store import CATEGORIES, CategoryStore
from app.services.errors import CategoryNotFound
from app.services.io_utils import write_json


@pytest.fixture
def store(tmp_path):
    path = tmp_path / "categories.json"
    write_json(
        path,
        {
            "categories": [
                {"id": "fruits", "name": "Fruits", "words": [{"word": "Banana", "hint": "Yellow"}, {"word": " "}]},
                {"id": "tools", "name": "Tools", "words": [{"word": " Hammer ", "hint": "  "}]},
            ]
        },
    )
    return CategoryStore(path=path)


def test_all_lists_summaries_in_file_order(store):
    summaries = [s.model_dump() for s in store.all()]
    assert summaries == [{"id": "fruits", "name": "Fruits"}, {"id": "tools", "name": "Tools"}]


def test_load_normalises_words(store):
    assert [w.word for w in store.get("fruits").words] == ["Banana"]
    hammer = store.get("tools").words[0]
    assert hammer.word == "Hammer"
    assert hammer.hint is None


def test_missing_catalog_file_gives_empty_catalog(tmp_path):
    empty = CategoryStore(path=tmp_path / "absent.json")
    assert empty.all() == []


def test_resolve_builtin_and_custom(store):
    custom = Category(id="c-1", name="Mine", words=[WordEntry(word="Kazoo", hint="Buzz")])
    resolved = store.resolve(["fruits", "c-1"], [custom])

    assert list(resolved.keys()) == ["fruits", "c-1"]
    assert resolved["c-1"].words[0].word == "Kazoo"


def test_resolve_ignores_duplicates_and_unreferenced_customs(store):
    unused = Category(id="c-2", name="Unused", words=[WordEntry(word="Nope")])
    resolved = store.resolve(["tools", "tools"], [unused])
    assert list(resolved.keys()) == ["tools"]


def test_resolve_prefers_builtin_over_custom_with_same_id(store):
    shadow = Category(id="fruits", name="Shadow", words=[WordEntry(word="Kiwi")])
    resolved = store.resolve(["fruits"], [shadow])
    assert resolved["fruits"].name == "Fruits"


def test_resolve_unknown_id_raises(store):
    with pytest.raises(CategoryNotFound) as excinfo:
        store.resolve(["fruits", "ghost"])
    assert excinfo.value.status_code == 404
    assert "ghost" in excinfo.value.message


def test_shipped_catalog_is_loaded():
    ids = {c.id for c in CATEGORIES.all()}
    assert {"animals", "food", "places"} <= ids
    assert all(CATEGORIES.get(cid).words for cid in ids)

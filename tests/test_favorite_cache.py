"""Tests for the per-user favorites cache."""

from __future__ import annotations

import json

import pytest

from models.favorite import FavoriteRecord, SavedFavorite
from models.part import Part
from services.favorite_cache import FAVORITES_CACHE_VERSION, FavoriteCache, favorite_identity
from utils.errors import NotAuthenticatedError


def _record(build_id: int = 0, total_price: float = 35999.0, **kwargs) -> FavoriteRecord:
    return FavoriteRecord(
        build_id=build_id,
        total_price=total_price,
        category=kwargs.pop("category", "Gaming"),
        parts=(Part(name="Ryzen 5 5600", display_type="CPU", price=7495.0),),
        timestamp="2025-03-05T10:00:00+00:00",
        **kwargs,
    )


def test_empty_cache_is_never_favorite(favorites_cache):
    for build_index, total_price in [(0, 0.0), (1, 35999.0), (99, 1.5)]:
        assert favorites_cache.is_favorite(42, build_index, total_price) is False


def test_toggle_once_adds_exactly_one_record(favorites_cache):
    assert favorites_cache.upsert_toggle(42, _record()) is True

    matching = [r for r in favorites_cache.records(42) if r.identity == (0, 35999.0)]
    assert len(matching) == 1
    assert favorites_cache.is_favorite(42, 0, 35999.0) is True


def test_toggle_twice_removes_the_record(favorites_cache):
    favorites_cache.upsert_toggle(42, _record())

    assert favorites_cache.upsert_toggle(42, _record()) is False
    assert favorites_cache.records(42) == []
    assert favorites_cache.is_favorite(42, 0, 35999.0) is False


def test_identity_is_index_and_price(favorites_cache):
    favorites_cache.upsert_toggle(42, _record(build_id=0, total_price=35999.0))

    assert favorites_cache.is_favorite(42, 1, 35999.0) is False
    assert favorites_cache.is_favorite(42, 0, 36000.0) is False
    # Same identity with a different snapshot still toggles the existing record off.
    assert favorites_cache.upsert_toggle(42, _record(category="Office")) is False


def test_identity_ignores_float_noise():
    assert favorite_identity(2, 0.1 + 0.2) == favorite_identity(2, 0.3)


def test_cache_is_scoped_per_user(favorites_cache):
    favorites_cache.upsert_toggle(42, _record())

    assert favorites_cache.is_favorite("42", 0, 35999.0) is True
    assert favorites_cache.is_favorite(43, 0, 35999.0) is False
    assert favorites_cache.records(43) == []


def test_cache_persists_across_instances(tmp_path):
    path = tmp_path / "favorites.json"
    FavoriteCache(path).upsert_toggle(42, _record(remote_id=101))

    reloaded = FavoriteCache(path)
    (record,) = reloaded.records(42)
    assert record.remote_id == 101
    assert record.parts[0].name == "Ryzen 5 5600"
    assert reloaded.remote_id_for(42, 0, 35999.0) == 101

    document = json.loads(path.read_text(encoding="utf-8"))
    assert document["version"] == FAVORITES_CACHE_VERSION
    assert list(document["users"]) == ["42"]


@pytest.mark.parametrize("user_id", [None, ""])
def test_guest_has_no_cache_scope(favorites_cache, user_id):
    with pytest.raises(NotAuthenticatedError):
        favorites_cache.upsert_toggle(user_id, _record())
    assert favorites_cache.records(user_id) == []
    assert favorites_cache.is_favorite(user_id, 0, 35999.0) is False
    assert not favorites_cache.path.exists()


def test_corrupt_cache_file_reads_as_empty(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_text("{ not json", encoding="utf-8")
    cache = FavoriteCache(path)

    assert cache.records(42) == []
    assert cache.upsert_toggle(42, _record()) is True
    assert cache.is_favorite(42, 0, 35999.0) is True


def test_version_mismatch_discards_cache(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_text(json.dumps({"version": 0, "users": {"42": [{}]}}), encoding="utf-8")

    assert FavoriteCache(path).records(42) == []


def test_reconcile_replaces_local_records_with_remote(favorites_cache):
    favorites_cache.upsert_toggle(42, _record(build_id=5, total_price=10.0))
    remote = [
        SavedFavorite(id=7, build_id=0, total_price=35999.0, category="Gaming"),
        SavedFavorite(id=8, build_id=0, total_price=35999.0),
        SavedFavorite(id=9, build_id=2, total_price=51000.0),
    ]

    favorites_cache.reconcile(42, remote)

    records = favorites_cache.records(42)
    assert [record.identity for record in records] == [(0, 35999.0), (2, 51000.0)]
    assert [record.remote_id for record in records] == [7, 9]
    assert favorites_cache.is_favorite(42, 5, 10.0) is False


def test_remove_remote(favorites_cache):
    favorites_cache.upsert_toggle(42, _record(remote_id=101))

    assert favorites_cache.remove_remote(42, 555) is False
    assert favorites_cache.remove_remote(42, 101) is True
    assert favorites_cache.records(42) == []


def test_clear_only_affects_one_user(favorites_cache):
    favorites_cache.upsert_toggle(42, _record())
    favorites_cache.upsert_toggle(43, _record())

    favorites_cache.clear(42)

    assert favorites_cache.records(42) == []
    assert len(favorites_cache.records(43)) == 1


def test_invalid_utf8_cache_file_reads_as_empty(tmp_path):
    path = tmp_path / "favorites.json"
    path.write_bytes(b'{"version": 1, "users": {"42": [\xff\xfe]}}')
    cache = FavoriteCache(path)

    assert cache.is_favorite(42, 0, 1.0) is False
    assert cache.records(42) == []
    assert cache.upsert_toggle(42, _record()) is True
    assert cache.is_favorite(42, 0, 35999.0) is True


def test_malformed_cached_part_fields_take_defaults(tmp_path):
    path = tmp_path / "favorites.json"
    row = _record().to_dict()
    row["parts"] = [{"name": "Ryzen 5 5600", "price": "abc", "id": None, "image": 7}]
    path.write_text(
        json.dumps({"version": FAVORITES_CACHE_VERSION, "users": {"42": [row]}}), encoding="utf-8"
    )

    ((part,),) = [record.parts for record in FavoriteCache(path).records(42)]

    assert part == Part(name="Ryzen 5 5600", image="7")

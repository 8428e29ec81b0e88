"""Shared fixtures: sample backend payloads, a file-backed cache, session users."""

from __future__ import annotations

import json

import pytest

from models.user import SessionUser
from services.favorite_cache import FavoriteCache

LOWER_CASE_PARTS = [
    {"partType": "cpu", "name": "Ryzen 5 5600", "price": 7495, "id": 11},
    {"partType": "gpu", "name": "RTX 4060 Ventus 2X", "price": "18,995.00", "id": 12},
    {"partType": "psu", "name": "Seasonic Focus 650W", "price": 3950.5, "id": 13},
]

CAPITALIZED_PARTS = [
    {"Type": "Processors", "Title": "Ryzen 5 5600", "Price": "7495", "ID": "11"},
    {"Type": "Graphics Cards", "Title": "RTX 4060 Ventus 2X", "Price": 18995, "ID": 12},
    {"Type": "Power Supply", "Title": "Seasonic Focus 650W", "Price": "3950.50", "ID": 13},
]

FLAT_SLOT_BUILD = {
    "cpu_name": "Ryzen 5 5600",
    "cpu_price": "7495",
    "cpu_id": 11,
    "gpu_name": "RTX 4060 Ventus 2X",
    "gpu_price": 18995,
    "gpu_id": 12,
    "psu_name": "Seasonic Focus 650W",
    "psu_price": "3950.50",
    "psu_id": 13,
    "total_price": 30440.5,
}


@pytest.fixture
def build_data_build() -> dict:
    return {
        "build_data": json.dumps(
            {
                "parts": CAPITALIZED_PARTS,
                "needs": "1080p esports and streaming",
                "description": "Balanced AM4 build",
                "category": "Gaming",
            }
        ),
        "total_price": 30440.5,
    }


@pytest.fixture
def parts_data_build() -> dict:
    double_escaped = json.dumps(LOWER_CASE_PARTS).replace('"', '\\"')
    return {"parts_data": double_escaped, "total_price": "30440.50"}


@pytest.fixture
def parts_list_build() -> dict:
    return {"parts": [dict(part) for part in LOWER_CASE_PARTS], "total_price": 30440.5}


@pytest.fixture
def flat_slot_build() -> dict:
    return dict(FLAT_SLOT_BUILD)


@pytest.fixture
def favorites_cache(tmp_path) -> FavoriteCache:
    return FavoriteCache(tmp_path / "favorites.json")


@pytest.fixture
def signed_in_user() -> SessionUser:
    return SessionUser(id=42, fullname="Test Builder")


@pytest.fixture
def guest_user() -> SessionUser:
    return SessionUser(id=7, is_guest=True)

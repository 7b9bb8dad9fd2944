"""
Shared fixtures for the lottocore test suite.
"""
from datetime import datetime

import pytest

from lottocore.models import Entry, HistoricalRecord, LotteryType
from lottocore.profiles import Profile, ProfileCatalog

CREATED_AT = datetime(2025, 8, 4, 10, 0)


@pytest.fixture
def catalog():
    return ProfileCatalog()


@pytest.fixture
def mega_sena(catalog):
    return catalog.get(LotteryType.MEGA_SENA)


@pytest.fixture
def quina(catalog):
    return catalog.get(LotteryType.QUINA)


@pytest.fixture
def lotofacil(catalog):
    return catalog.get(LotteryType.LOTOFACIL)


@pytest.fixture
def lotomania(catalog):
    return catalog.get(LotteryType.LOTOMANIA)


@pytest.fixture
def dupla_sena(catalog):
    return catalog.get(LotteryType.DUPLA_SENA)


@pytest.fixture
def timemania(catalog):
    return catalog.get(LotteryType.TIMEMANIA)


@pytest.fixture
def super_sete(catalog):
    return catalog.get(LotteryType.SUPER_SETE)


@pytest.fixture
def tiny_profile():
    """Range 1..6 with six numbers per entry: exactly one possible entry."""
    return Profile(
        type=LotteryType.MEGA_SENA,
        name="Tiny",
        min_number=1,
        max_number=6,
        entry_size=6,
        prize_tier_sizes=frozenset({6}),
    )


@pytest.fixture
def created_at():
    return CREATED_AT


@pytest.fixture
def make_entry():
    def _make(numbers, profile=None, companion=None, entry_id="test-entry"):
        return Entry(
            id=entry_id,
            numbers=tuple(numbers),
            created_at=CREATED_AT,
            lottery_type=profile.type if profile is not None else None,
            companion_value=companion,
        )
    return _make


@pytest.fixture
def make_record():
    def _make(sequence_id, numbers, second=None, companion=None, profile=None):
        return HistoricalRecord(
            sequence_id=sequence_id,
            draw_numbers=tuple(numbers),
            second_draw_numbers=tuple(second) if second is not None else None,
            companion_value=companion,
            lottery_type=profile.type if profile is not None else None,
        )
    return _make

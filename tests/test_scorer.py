"""
Tests for the outcome scorer.
"""
import pytest

from lottocore.models import DualDrawMode, HistoricalRecord, LotteryType
from lottocore.scorer import OutcomeScorer


@pytest.fixture
def scorer():
    return OutcomeScorer()


class TestStandardScoring:

    def test_intersection_hits(self, scorer, mega_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6], mega_sena)
        verdict = scorer.score(entry, make_record(1, [4, 5, 6, 7, 8, 9]), mega_sena)
        assert verdict.hit_count == 3
        assert verdict.prize_tier == 0
        assert verdict.is_prize is False
        assert verdict.companion_hit is None

    def test_prize_tier(self, scorer, mega_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6], mega_sena)
        verdict = scorer.score(entry, make_record(1, [1, 2, 3, 4, 50, 60]), mega_sena)
        assert verdict.hit_count == 4
        assert verdict.prize_tier == 4
        assert verdict.is_prize is True

    def test_independent_of_order(self, scorer, quina, make_entry, make_record):
        entry = make_entry([5, 10, 20, 40, 80], quina)
        forward = scorer.score(entry, make_record(1, [5, 10, 21, 41, 80]), quina)
        backward = scorer.score(entry, make_record(1, [80, 41, 21, 10, 5]), quina)
        assert forward == backward
        assert forward.hit_count == 3

    def test_zero_hit_tier(self, scorer, lotomania, make_entry, make_record):
        """Lotomania pays for zero hits."""
        entry = make_entry(range(0, 50), lotomania)
        verdict = scorer.score(entry, make_record(1, range(50, 70)), lotomania)
        assert verdict.hit_count == 0
        assert verdict.prize_tier == 0
        assert verdict.is_prize is True


class TestDualDraw:

    @pytest.fixture
    def record(self, make_record):
        return make_record(1, [1, 2, 3, 10, 11, 12], second=[1, 2, 3, 4, 5, 20])

    @pytest.mark.parametrize("mode, expected", [
        (DualDrawMode.FIRST, 3),
        (DualDrawMode.SECOND, 5),
        (DualDrawMode.BEST, 5),
    ])
    def test_modes(self, scorer, dupla_sena, make_entry, record, mode, expected):
        entry = make_entry([1, 2, 3, 4, 5, 6], dupla_sena)
        assert scorer.score(entry, record, dupla_sena, mode).hit_count == expected

    def test_best_is_max_of_both(self, scorer, dupla_sena, make_entry, record):
        entry = make_entry([10, 11, 12, 20, 30, 40], dupla_sena)
        first = scorer.score(entry, record, dupla_sena, DualDrawMode.FIRST).hit_count
        second = scorer.score(entry, record, dupla_sena, DualDrawMode.SECOND).hit_count
        best = scorer.score(entry, record, dupla_sena, DualDrawMode.BEST).hit_count
        assert (first, second, best) == (3, 1, 3)

    def test_missing_second_draw(self, scorer, dupla_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6], dupla_sena)
        record = make_record(1, [1, 2, 3, 4, 5, 6])
        assert scorer.score(entry, record, dupla_sena, DualDrawMode.SECOND).hit_count == 0
        assert scorer.score(entry, record, dupla_sena, DualDrawMode.BEST).hit_count == 6


class TestColumnar:

    def test_positional_equality(self, scorer, super_sete, make_entry, make_record):
        """Only same-column matches count, not shared digits."""
        entry = make_entry([7, 6, 5, 4, 3, 2, 1], super_sete)
        verdict = scorer.score(entry, make_record(1, [1, 2, 3, 4, 5, 6, 7]), super_sete)
        assert verdict.hit_count == 1
        assert verdict.is_prize is False

    def test_repeated_digits(self, scorer, super_sete, make_entry, make_record):
        entry = make_entry([1, 2, 3, 0, 0, 0, 0], super_sete)
        verdict = scorer.score(entry, make_record(1, [1, 2, 3, 9, 9, 9, 9]), super_sete)
        assert verdict.hit_count == 3
        assert verdict.prize_tier == 3


class TestCompanion:

    def test_companion_hit_is_prize(self, scorer, timemania, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], timemania, companion=5)
        verdict = scorer.score(entry, make_record(1, [70, 71, 72, 73, 74, 75, 76], companion=5), timemania)
        assert verdict.hit_count == 0
        assert verdict.companion_hit is True
        assert verdict.is_prize is True

    def test_companion_miss(self, scorer, timemania, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], timemania, companion=5)
        verdict = scorer.score(entry, make_record(1, [70, 71, 72, 73, 74, 75, 76], companion=6), timemania)
        assert verdict.companion_hit is False
        assert verdict.is_prize is False

    def test_no_companion_verdict_without_category(self, scorer, mega_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6], mega_sena, companion=5)
        verdict = scorer.score(entry, make_record(1, [1, 20, 30, 40, 50, 60], companion=5), mega_sena)
        assert verdict.companion_hit is None

    def test_missing_companion_on_entry(self, scorer, timemania, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6, 7, 8, 9, 10], timemania)
        verdict = scorer.score(entry, make_record(1, [1, 2, 3, 4, 5, 6, 7], companion=5), timemania)
        assert verdict.companion_hit is None
        assert verdict.hit_count == 7


class TestMismatchedVariants:

    def test_different_types_yield_neutral_verdict(self, scorer, mega_sena, quina, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5], quina)
        record = make_record(1, [1, 2, 3, 4, 5, 6], profile=mega_sena)
        verdict = scorer.score(entry, record, mega_sena)
        assert verdict.hit_count == 0
        assert verdict.is_prize is False

    def test_mismatch_does_not_trigger_zero_hit_tier(self, scorer, lotomania, mega_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6], mega_sena)
        record = make_record(1, range(50, 70), profile=lotomania)
        assert scorer.score(entry, record, lotomania).is_prize is False

    def test_untyped_values_use_profile(self, scorer, mega_sena, make_entry, make_record):
        entry = make_entry([1, 2, 3, 4, 5, 6])
        assert entry.lottery_type is None
        assert scorer.score(entry, make_record(1, [1, 2, 3, 4, 5, 6]), mega_sena).prize_tier == 6

    def test_record_type_mismatch_with_profile(self, scorer, quina, make_entry):
        record = HistoricalRecord(
            sequence_id=1, draw_numbers=(1, 2, 3, 4, 5), lottery_type=LotteryType.MEGA_SENA
        )
        assert scorer.score(make_entry([1, 2, 3, 4, 5]), record, quina).hit_count == 0

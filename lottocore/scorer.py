"""
Outcome Scorer for lottocore.

Compares an entry with a historical record under the comparison rules of
the profile and derives the prize tier:

1. Columnar profiles count positional matches.
2. Dual-draw profiles compare against the first draw, the second draw or
   the better of both, depending on the DualDrawMode.
3. Every other profile counts the set intersection with the draw.

A companion hit (e.g. a team id) is reported separately and also makes the
verdict a prize. Scoring never raises on mismatched inputs; an entry and a
record of different game variants simply yield a zero-hit, non-prize verdict.
"""
from typing import Optional, Sequence

from loguru import logger

from lottocore.models import DualDrawMode, Entry, HistoricalRecord, Verdict
from lottocore.profiles import Profile


def _positional_hits(numbers: Sequence[int], drawn: Sequence[int]) -> int:
    return sum(1 for picked, result in zip(numbers, drawn) if picked == result)


def _set_hits(numbers: Sequence[int], drawn: Optional[Sequence[int]]) -> int:
    if not drawn:
        return 0
    return len(set(numbers) & set(drawn))


def _variants_match(entry: Entry, record: HistoricalRecord, profile: Profile) -> bool:
    types = {t for t in (entry.lottery_type, record.lottery_type) if t is not None}
    types.add(profile.type)
    return len(types) == 1


class OutcomeScorer:
    """Scores entries against historical records."""

    def __init__(self):
        logger.debug("OutcomeScorer initialized.")

    def count_hits(
        self,
        entry: Entry,
        record: HistoricalRecord,
        profile: Profile,
        dual_draw_mode: DualDrawMode = DualDrawMode.BEST,
    ) -> int:
        if profile.is_columnar:
            return _positional_hits(entry.numbers, record.draw_numbers)

        if profile.has_dual_draw:
            hits_first = _set_hits(entry.numbers, record.draw_numbers)
            hits_second = _set_hits(entry.numbers, record.second_draw_numbers)
            if dual_draw_mode is DualDrawMode.FIRST:
                return hits_first
            if dual_draw_mode is DualDrawMode.SECOND:
                return hits_second
            return max(hits_first, hits_second)

        return _set_hits(entry.numbers, record.draw_numbers)

    def score(
        self,
        entry: Entry,
        record: HistoricalRecord,
        profile: Profile,
        dual_draw_mode: DualDrawMode = DualDrawMode.BEST,
    ) -> Verdict:
        """
        Scores one entry against one record.

        Args:
            entry: The entry to check.
            record: The past draw to check against.
            profile: Profile both belong to.
            dual_draw_mode: Draw selection for dual-draw profiles.

        Returns:
            Verdict: Hit count, companion hit, prize tier and prize flag.
        """
        if not _variants_match(entry, record, profile):
            logger.debug(
                f"Entry {entry.id} and record {record.sequence_id} belong to different variants"
            )
            return Verdict(hit_count=0)

        hit_count = self.count_hits(entry, record, profile, dual_draw_mode)

        companion_hit = None
        if (
            profile.has_companion_category
            and entry.companion_value is not None
            and record.companion_value is not None
        ):
            companion_hit = entry.companion_value == record.companion_value

        # a tier may be zero hits (Lotomania), so membership decides the prize
        tier_reached = hit_count in profile.prize_tier_sizes
        return Verdict(
            hit_count=hit_count,
            companion_hit=companion_hit,
            prize_tier=hit_count if tier_reached else 0,
            is_prize=tier_reached or companion_hit is True,
        )

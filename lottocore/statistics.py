"""
Statistics Aggregator for lottocore.

Aggregates an ordered or unordered collection of historical records into:

1. Per-number frequency and recency gap.
2. The distribution of hits a given entry would have scored on past draws.
3. Structural distributions over all drawn numbers: decade buckets and
   quadrants of the betting slip.

It also derives a shape summary (EntryInsight) for a single entry.
All functions are pure and return zeroed results for empty input.
"""
from collections import Counter
from typing import Iterable, List, Optional, Sequence

import numpy as np
from loguru import logger

from lottocore.config import ROW_WIDTH
from lottocore.constraints import is_prime
from lottocore.loader import records_to_frame
from lottocore.models import (
    DistributionStats,
    DualDrawMode,
    Entry,
    EntryInsight,
    HistoricalRecord,
    HitDistributionEntry,
    NumberStat,
)
from lottocore.profiles import Profile
from lottocore.scorer import OutcomeScorer


def longest_sequence(numbers: Iterable[int]) -> int:
    """Length of the longest run of consecutive numbers."""
    ordered = sorted(set(numbers))
    if not ordered:
        return 0
    best = current = 1
    for previous, number in zip(ordered, ordered[1:]):
        current = current + 1 if number == previous + 1 else 1
        best = max(best, current)
    return best


def decade_label(start: int, profile: Profile) -> str:
    return f"{start:02d}-{min(start + 9, profile.max_number):02d}"


class StatisticsAggregator:
    """
    Computes aggregate statistics over historical records for one profile.
    """

    def __init__(self, scorer: Optional[OutcomeScorer] = None):
        self.scorer = scorer or OutcomeScorer()
        logger.debug("StatisticsAggregator initialized.")

    def number_stats(
        self, records: Sequence[HistoricalRecord], profile: Profile
    ) -> List[NumberStat]:
        """
        Frequency and recency gap for every number in the profile range.

        The gap is measured against the highest sequence id in the input:
        0 means the number was drawn in the latest record, -1 means it was
        never drawn.
        """
        numbers = list(profile.number_range())
        if not records:
            return [NumberStat(number=n, frequency=0, recency_gap=-1) for n in numbers]

        frame = records_to_frame(sorted(records, key=lambda r: r.sequence_id))
        frame = frame[frame["number"].between(profile.min_number, profile.max_number)]
        # a number counts once per record, even when a columnar draw repeats it
        frame = frame.drop_duplicates()
        last_sequence_id = max(r.sequence_id for r in records)

        frequency = frame.groupby("number").size()
        last_seen = frame.groupby("number")["sequence_id"].max()

        stats = []
        for n in numbers:
            if n in last_seen.index:
                stats.append(
                    NumberStat(
                        number=n,
                        frequency=int(frequency[n]),
                        recency_gap=int(last_sequence_id - last_seen[n]),
                    )
                )
            else:
                stats.append(NumberStat(number=n, frequency=0, recency_gap=-1))

        logger.info(f"Computed number stats for {profile.name} over {len(records)} records")
        return stats

    def historical_hit_distribution(
        self,
        entry: Entry,
        records: Sequence[HistoricalRecord],
        profile: Profile,
    ) -> List[HitDistributionEntry]:
        """
        How many past draws the entry would have hit N numbers on, for N > 0,
        sorted by hit count descending.
        """
        hit_counts: Counter = Counter()
        for record in records:
            hits = self.scorer.score(entry, record, profile, DualDrawMode.BEST).hit_count
            if hits > 0:
                hit_counts[hits] += 1

        return [
            HitDistributionEntry(hit_count=hits, occurrences=count)
            for hits, count in sorted(hit_counts.items(), reverse=True)
        ]

    def distribution_stats(
        self, records: Sequence[HistoricalRecord], profile: Profile
    ) -> DistributionStats:
        """
        Counts drawn numbers per decade and per slip quadrant.

        Quadrants split the range into a top and bottom half and each row of
        ten into a left and right half: (top-left, top-right, bottom-left,
        bottom-right). Numbers outside the profile range are ignored.
        """
        buckets = {}
        start = (profile.min_number // 10) * 10
        while start <= profile.max_number:
            buckets[decade_label(start, profile)] = 0
            start += 10

        if not records:
            return DistributionStats(decade_buckets=buckets, quadrant_counts=(0, 0, 0, 0))

        frame = records_to_frame(records)
        drawn = frame["number"].to_numpy()
        drawn = drawn[(drawn >= profile.min_number) & (drawn <= profile.max_number)]

        decades, counts = np.unique((drawn // 10) * 10, return_counts=True)
        for decade, count in zip(decades, counts):
            buckets[decade_label(int(decade), profile)] += int(count)

        middle = profile.min_number + (profile.max_number - profile.min_number) // 2
        is_top = drawn <= middle
        is_left = (drawn - profile.min_number) % ROW_WIDTH < ROW_WIDTH // 2
        quadrants = (
            int(np.sum(is_top & is_left)),
            int(np.sum(is_top & ~is_left)),
            int(np.sum(~is_top & is_left)),
            int(np.sum(~is_top & ~is_left)),
        )
        return DistributionStats(decade_buckets=buckets, quadrant_counts=quadrants)

    def analyze_entry(
        self,
        numbers: Sequence[int],
        previous_record: Optional[HistoricalRecord] = None,
        hot_numbers: Iterable[int] = (),
    ) -> EntryInsight:
        """Shape summary of one entry."""
        if not numbers:
            return EntryInsight(
                sum=0,
                even_count=0,
                odd_count=0,
                repeats_from_previous=0,
                hot_numbers_count=0,
            )

        evens = sum(1 for n in numbers if n % 2 == 0)
        repeats = 0
        if previous_record is not None:
            repeats = len(set(numbers) & set(previous_record.all_numbers()))

        return EntryInsight(
            sum=sum(numbers),
            even_count=evens,
            odd_count=len(numbers) - evens,
            repeats_from_previous=repeats,
            hot_numbers_count=len(set(numbers) & set(hot_numbers)),
            average=sum(numbers) / len(numbers),
            longest_sequence=longest_sequence(numbers),
            multiples_of_three=sum(1 for n in numbers if n % 3 == 0),
            prime_count=sum(1 for n in numbers if is_prime(n)),
        )

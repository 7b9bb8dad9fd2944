"""
Constraint Evaluator for lottocore.

Each ConstraintKind is a pure acceptance predicate over a candidate entry.
The evaluator resolves per-constraint thresholds against its defaults,
skips constraints that do not apply to the profile and reports the first
constraint that rejects a candidate.
"""
import math
from typing import Dict, Mapping, Optional, Sequence

from loguru import logger

from lottocore.config import (
    DEFAULT_MAX_PARITY_RATIO,
    DEFAULT_MAX_PRIMES,
    DEFAULT_MIN_PARITY_RATIO,
    DEFAULT_MIN_PRIMES,
    DEFAULT_RECURRENCE_MARGIN,
)
from lottocore.models import ConstraintConfig, ConstraintKind, Entry, HistoricalRecord
from lottocore.profiles import Profile


def is_prime(n: int) -> bool:
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for i in range(3, math.isqrt(n) + 1, 2):
        if n % i == 0:
            return False
    return True


def is_applicable(kind: ConstraintKind, profile: Profile) -> bool:
    """Whether a constraint is meaningful for a profile."""
    if kind is ConstraintKind.PARITY_BALANCE:
        return not profile.is_columnar
    if kind is ConstraintKind.MULTIPLES_OF_THREE:
        return not profile.is_columnar
    if kind is ConstraintKind.PRIME_COUNT:
        return True
    if kind is ConstraintKind.RECURRENCE_FROM_PREVIOUS:
        return True
    if kind is ConstraintKind.ZONE_MIX:
        return profile.grid_side is not None
    raise ValueError(f"Unknown constraint kind: {kind}")


class ConstraintEvaluator:
    """
    Evaluates generation constraints against candidate entries.

    Args:
        defaults: Thresholds used when a per-request ConstraintConfig leaves a
            field unset. Unset fields here fall back to lottocore.config.
    """

    def __init__(self, defaults: Optional[ConstraintConfig] = None):
        self.defaults = defaults or ConstraintConfig()
        logger.debug(f"ConstraintEvaluator initialized with defaults {self.defaults}")

    def evaluate(
        self,
        kind: ConstraintKind,
        entry: Entry,
        profile: Profile,
        previous_record: Optional[HistoricalRecord] = None,
        config: Optional[ConstraintConfig] = None,
    ) -> bool:
        """
        Returns True when the entry passes the constraint. Constraints that
        do not apply to the profile always pass.
        """
        if not is_applicable(kind, profile):
            return True
        config = config or ConstraintConfig()
        numbers = entry.numbers

        if kind is ConstraintKind.PARITY_BALANCE:
            return self._check_parity(numbers, profile, config)
        if kind is ConstraintKind.MULTIPLES_OF_THREE:
            return self._check_multiples_of_three(numbers)
        if kind is ConstraintKind.PRIME_COUNT:
            return self._check_primes(numbers, profile, config)
        if kind is ConstraintKind.RECURRENCE_FROM_PREVIOUS:
            return self._check_recurrence(numbers, profile, previous_record, config)
        if kind is ConstraintKind.ZONE_MIX:
            return self._check_zone_mix(numbers, profile)
        raise ValueError(f"Unknown constraint kind: {kind}")

    def first_failing(
        self,
        entry: Entry,
        constraints: Sequence[ConstraintKind],
        profile: Profile,
        previous_record: Optional[HistoricalRecord] = None,
        configs: Optional[Mapping[ConstraintKind, ConstraintConfig]] = None,
    ) -> Optional[ConstraintKind]:
        """
        Evaluates constraints in the given order and returns the first one
        that rejects the entry, or None if all pass.
        """
        configs = configs or {}
        for kind in constraints:
            if not is_applicable(kind, profile):
                continue
            if not self.evaluate(kind, entry, profile, previous_record, configs.get(kind)):
                return kind
        return None

    def validate(
        self,
        entry: Entry,
        constraints: Sequence[ConstraintKind],
        profile: Profile,
        previous_record: Optional[HistoricalRecord] = None,
        configs: Optional[Mapping[ConstraintKind, ConstraintConfig]] = None,
    ) -> bool:
        return self.first_failing(entry, constraints, profile, previous_record, configs) is None

    def describe_thresholds(
        self, profile: Profile, config: Optional[ConstraintConfig] = None
    ) -> Dict[str, float]:
        """Effective thresholds after applying request config and defaults."""
        config = config or ConstraintConfig()
        return {
            "min_parity_ratio": self._resolve(config.min_parity_ratio, self.defaults.min_parity_ratio, DEFAULT_MIN_PARITY_RATIO),
            "max_parity_ratio": self._resolve(config.max_parity_ratio, self.defaults.max_parity_ratio, DEFAULT_MAX_PARITY_RATIO),
            "min_primes": self._resolve(config.min_primes, self.defaults.min_primes, DEFAULT_MIN_PRIMES),
            "max_primes": self._max_primes(profile, config),
            "max_repeats": self._max_repeats(profile, config),
        }

    @staticmethod
    def _resolve(*candidates):
        for value in candidates:
            if value is not None:
                return value
        return None

    def _check_parity(self, numbers, profile: Profile, config: ConstraintConfig) -> bool:
        """Share of even numbers within [min, max]."""
        evens = sum(1 for n in numbers if n % 2 == 0)
        ratio = evens / profile.entry_size
        low = self._resolve(config.min_parity_ratio, self.defaults.min_parity_ratio, DEFAULT_MIN_PARITY_RATIO)
        high = self._resolve(config.max_parity_ratio, self.defaults.max_parity_ratio, DEFAULT_MAX_PARITY_RATIO)
        return low <= ratio <= high

    @staticmethod
    def _check_multiples_of_three(numbers) -> bool:
        """Needs a genuine mixture: neither none nor all numbers divisible by 3."""
        count = sum(1 for n in numbers if n % 3 == 0)
        return count != 0 and count != len(numbers)

    def _max_primes(self, profile: Profile, config: ConstraintConfig) -> int:
        value = self._resolve(config.max_primes, self.defaults.max_primes, DEFAULT_MAX_PRIMES)
        return profile.entry_size if value is None else value

    def _check_primes(self, numbers, profile: Profile, config: ConstraintConfig) -> bool:
        count = sum(1 for n in numbers if is_prime(n))
        low = self._resolve(config.min_primes, self.defaults.min_primes, DEFAULT_MIN_PRIMES)
        return low <= count <= self._max_primes(profile, config)

    def _max_repeats(self, profile: Profile, config: ConstraintConfig) -> int:
        if config.max_repeats is not None:
            return config.max_repeats
        if self.defaults.max_repeats is not None:
            return self.defaults.max_repeats
        return max(profile.entry_size - DEFAULT_RECURRENCE_MARGIN, 0)

    def _check_recurrence(
        self,
        numbers,
        profile: Profile,
        previous_record: Optional[HistoricalRecord],
        config: ConstraintConfig,
    ) -> bool:
        if previous_record is None:
            return True
        repeats = len(set(numbers) & set(previous_record.all_numbers()))
        return repeats <= self._max_repeats(profile, config)

    @staticmethod
    def _check_zone_mix(numbers, profile: Profile) -> bool:
        """Rejects entries made only of grid-border numbers."""
        return any(not profile.is_frame_number(n) for n in numbers)

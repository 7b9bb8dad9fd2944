"""
Value types shared by the lottocore engines.

Every type here is an immutable value: entries, historical records, requests,
reports, verdicts and statistics. None of them carries behaviour beyond small
derived properties and invariant checks.
"""
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

from lottocore.config import DEFAULT_MAX_ATTEMPTS


class ProfileError(ValueError):
    """A profile violates its construction invariants."""


class GenerationRequestError(ValueError):
    """A generation request is malformed or incompatible with its profile."""


class RecordFormatError(ValueError):
    """A historical record source cannot be parsed."""


class LotteryType(Enum):
    """Supported game variants."""
    LOTOFACIL = "lotofacil"
    MEGA_SENA = "mega_sena"
    QUINA = "quina"
    LOTOMANIA = "lotomania"
    DUPLA_SENA = "dupla_sena"
    TIMEMANIA = "timemania"
    SUPER_SETE = "super_sete"


class DualDrawMode(Enum):
    """Which draw of a dual-draw record an entry is compared against."""
    FIRST = "first"
    SECOND = "second"
    BEST = "best"


class ConstraintKind(Enum):
    """Acceptance filters available to the generation engine."""
    PARITY_BALANCE = "parity_balance"
    MULTIPLES_OF_THREE = "multiples_of_three"
    PRIME_COUNT = "prime_count"
    RECURRENCE_FROM_PREVIOUS = "recurrence_from_previous"
    ZONE_MIX = "zone_mix"


@dataclass(frozen=True)
class ConstraintConfig:
    """
    Per-constraint thresholds. Fields left as None fall back to the
    evaluator defaults.
    """
    min_parity_ratio: Optional[float] = None
    max_parity_ratio: Optional[float] = None
    max_repeats: Optional[int] = None
    min_primes: Optional[int] = None
    max_primes: Optional[int] = None


@dataclass(frozen=True)
class Entry:
    """One playable combination, generated or authored by the user."""
    id: str
    numbers: Tuple[int, ...]
    created_at: datetime
    lottery_type: Optional[LotteryType] = None
    companion_value: Optional[int] = None
    is_pinned: bool = False

    def __post_init__(self):
        object.__setattr__(self, "numbers", tuple(int(n) for n in self.numbers))
        if not self.id:
            raise ValueError("Entry id must not be blank")
        if not self.numbers:
            raise ValueError("Entry must contain at least one number")
        if self.companion_value is not None and self.companion_value <= 0:
            raise ValueError("companion_value must be positive")

    @property
    def key(self) -> Tuple[Tuple[int, ...], Optional[int]]:
        """Identity used for de-duplication inside a batch."""
        return self.numbers, self.companion_value

    def toggle_pin(self) -> "Entry":
        return dataclasses.replace(self, is_pinned=not self.is_pinned)


@dataclass(frozen=True)
class HistoricalRecord:
    """One past draw."""
    sequence_id: int
    draw_numbers: Tuple[int, ...]
    second_draw_numbers: Optional[Tuple[int, ...]] = None
    companion_value: Optional[int] = None
    lottery_type: Optional[LotteryType] = None
    draw_date: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "draw_numbers", tuple(int(n) for n in self.draw_numbers))
        if self.second_draw_numbers is not None:
            object.__setattr__(
                self, "second_draw_numbers", tuple(int(n) for n in self.second_draw_numbers)
            )
        if self.sequence_id <= 0:
            raise ValueError("sequence_id must be positive")
        if not self.draw_numbers:
            raise ValueError("A record must contain at least one drawn number")

    def all_numbers(self) -> Tuple[int, ...]:
        """Numbers of both draws, distinct and sorted, for dual-draw records."""
        if self.second_draw_numbers is None:
            return self.draw_numbers
        return tuple(sorted(set(self.draw_numbers) | set(self.second_draw_numbers)))


@dataclass(frozen=True)
class GenerationRequest:
    quantity: int = 1
    active_constraints: Tuple[ConstraintKind, ...] = ()
    configs: Dict[ConstraintKind, ConstraintConfig] = field(default_factory=dict)
    fixed_numbers: Tuple[int, ...] = ()
    fixed_companion_value: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self):
        object.__setattr__(self, "active_constraints", tuple(self.active_constraints))
        object.__setattr__(self, "fixed_numbers", tuple(self.fixed_numbers))
        object.__setattr__(self, "configs", dict(self.configs))

    @classmethod
    def from_preset(cls, preset, quantity: int = 1, **overrides) -> "GenerationRequest":
        """Builds a request whose constraints and configs come from a preset."""
        return cls(
            quantity=quantity,
            active_constraints=preset.constraints,
            configs=preset.configs,
            **overrides,
        )


@dataclass(frozen=True)
class GenerationReport:
    attempts: int
    generated_count: int
    total_rejected: int
    rejected_per_constraint: Dict[ConstraintKind, int]
    rejected_examples: Dict[ConstraintKind, Tuple[Entry, ...]]
    partial: bool


@dataclass(frozen=True)
class GenerationResult:
    entries: Tuple[Entry, ...]
    report: GenerationReport


@dataclass(frozen=True)
class Verdict:
    """Outcome of scoring one entry against one record."""
    hit_count: int
    companion_hit: Optional[bool] = None
    prize_tier: int = 0
    is_prize: bool = False


@dataclass(frozen=True)
class NumberStat:
    number: int
    frequency: int
    recency_gap: int


@dataclass(frozen=True)
class HitDistributionEntry:
    hit_count: int
    occurrences: int


@dataclass(frozen=True)
class DistributionStats:
    decade_buckets: Dict[str, int]
    # top-left, top-right, bottom-left, bottom-right
    quadrant_counts: Tuple[int, int, int, int]


@dataclass(frozen=True)
class EntryInsight:
    """Shape summary of a single entry."""
    sum: int
    even_count: int
    odd_count: int
    repeats_from_previous: int
    hot_numbers_count: int
    average: float = 0.0
    longest_sequence: int = 0
    multiples_of_three: int = 0
    prime_count: int = 0

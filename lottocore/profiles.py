"""
Game profiles for lottocore.

A Profile is the static shape of a game variant: its number range, how many
numbers an entry holds, the hit counts that pay a prize and the special modes
(columnar selection, dual draw, companion category). Profiles are built once
from the table below and handed to the engines through a ProfileCatalog.
"""
import math
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from lottocore.models import LotteryType, ProfileError


@dataclass(frozen=True)
class Profile:
    """
    Immutable description of a game variant.

    Attributes:
        type: The game variant this profile describes.
        name: Display name.
        min_number: Smallest drawable number.
        max_number: Largest drawable number.
        entry_size: Numbers per entry (columns, for columnar profiles).
        prize_tier_sizes: Hit counts that pay a prize. May contain 0.
        has_dual_draw: Each record carries a second draw.
        has_companion_category: Entries carry a companion value.
        companion_range: Inclusive (start, end) of the companion value.
        is_columnar: One number per column, repetition allowed.
        cost_per_entry: Price of one entry in cents.
        odds_description: Human readable jackpot odds.
    """
    type: LotteryType
    name: str
    min_number: int
    max_number: int
    entry_size: int
    prize_tier_sizes: FrozenSet[int]
    has_dual_draw: bool = False
    has_companion_category: bool = False
    companion_range: Optional[Tuple[int, int]] = None
    is_columnar: bool = False
    cost_per_entry: int = 300
    odds_description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "prize_tier_sizes", frozenset(self.prize_tier_sizes))
        if self.min_number < 0:
            raise ProfileError("min_number must be >= 0")
        if self.max_number <= self.min_number:
            raise ProfileError("max_number must be greater than min_number")
        if self.entry_size <= 0:
            raise ProfileError("entry_size must be positive")
        if not self.is_columnar and self.entry_size > self.range_size:
            raise ProfileError("entry_size must not exceed the size of the number range")
        if not self.prize_tier_sizes:
            raise ProfileError("prize_tier_sizes must not be empty")
        if self.has_companion_category:
            if self.companion_range is None:
                raise ProfileError("companion_range is required when has_companion_category is set")
            start, end = self.companion_range
            if end < start:
                raise ProfileError("companion_range must not be empty")
            if start < 1:
                raise ProfileError("companion values must be positive")

    @property
    def range_size(self) -> int:
        return self.max_number - self.min_number + 1

    def number_range(self) -> range:
        return range(self.min_number, self.max_number + 1)

    def companion_values(self) -> range:
        if self.companion_range is None:
            return range(0)
        start, end = self.companion_range
        return range(start, end + 1)

    def is_valid_numbers(self, numbers: Sequence[int]) -> bool:
        """True when the numbers form a well-formed entry for this profile."""
        if len(numbers) != self.entry_size:
            return False
        if not all(self.min_number <= n <= self.max_number for n in numbers):
            return False
        if self.is_columnar:
            return True
        return len(set(numbers)) == len(numbers)

    @property
    def grid_side(self) -> Optional[int]:
        """Side of the square grid the range forms on a slip, or None."""
        if self.is_columnar:
            return None
        side = math.isqrt(self.range_size)
        if side < 3 or side * side != self.range_size:
            return None
        return side

    def is_frame_number(self, number: int) -> bool:
        """True for numbers on the border of the square grid."""
        side = self.grid_side
        if side is None:
            return False
        row, col = divmod(number - self.min_number, side)
        return row in (0, side - 1) or col in (0, side - 1)


BUILTIN_PROFILES: Tuple[Profile, ...] = (
    Profile(
        type=LotteryType.LOTOFACIL,
        name="Lotofácil",
        min_number=1,
        max_number=25,
        entry_size=15,
        prize_tier_sizes=frozenset({15, 14, 13, 12, 11}),
        cost_per_entry=350,
        odds_description="1 in 3,268,760",
    ),
    Profile(
        type=LotteryType.MEGA_SENA,
        name="Mega-Sena",
        min_number=1,
        max_number=60,
        entry_size=6,
        prize_tier_sizes=frozenset({6, 5, 4}),
        cost_per_entry=600,
        odds_description="1 in 50,063,860",
    ),
    Profile(
        type=LotteryType.QUINA,
        name="Quina",
        min_number=1,
        max_number=80,
        entry_size=5,
        prize_tier_sizes=frozenset({5, 4, 3, 2}),
        cost_per_entry=300,
        odds_description="1 in 24,040,016",
    ),
    Profile(
        type=LotteryType.LOTOMANIA,
        name="Lotomania",
        min_number=0,
        max_number=99,
        entry_size=50,
        # zero hits also pays
        prize_tier_sizes=frozenset({20, 19, 18, 17, 16, 0}),
        cost_per_entry=300,
        odds_description="1 in 11,372,635",
    ),
    Profile(
        type=LotteryType.DUPLA_SENA,
        name="Dupla Sena",
        min_number=1,
        max_number=50,
        entry_size=6,
        prize_tier_sizes=frozenset({6, 5, 4, 3}),
        has_dual_draw=True,
        cost_per_entry=300,
        odds_description="1 in 15,890,700",
    ),
    Profile(
        type=LotteryType.TIMEMANIA,
        name="Timemania",
        min_number=1,
        max_number=80,
        entry_size=10,
        prize_tier_sizes=frozenset({7, 6, 5, 4, 3}),
        has_companion_category=True,
        companion_range=(1, 80),
        cost_per_entry=350,
        odds_description="1 in 26,472,637",
    ),
    Profile(
        type=LotteryType.SUPER_SETE,
        name="Super Sete",
        min_number=0,
        max_number=9,
        entry_size=7,
        prize_tier_sizes=frozenset({7, 6, 5, 4, 3}),
        is_columnar=True,
        cost_per_entry=300,
        odds_description="1 in 10,000,000",
    ),
)


class ProfileCatalog:
    """
    Read-only lookup table of profiles keyed by game variant.

    The catalog is constructed explicitly by the host and passed to whoever
    needs it; there is no module-level instance.
    """

    def __init__(self, profiles: Iterable[Profile] = BUILTIN_PROFILES):
        self._profiles: Dict[LotteryType, Profile] = {}
        for profile in profiles:
            if profile.type in self._profiles:
                raise ProfileError(f"Duplicate profile for {profile.type.value}")
            self._profiles[profile.type] = profile
        logger.info(f"ProfileCatalog initialized with {len(self._profiles)} profiles.")

    def get(self, lottery_type: LotteryType) -> Profile:
        """
        Returns the profile for a game variant.

        Raises:
            KeyError: If the variant is not in the catalog.
        """
        try:
            return self._profiles[lottery_type]
        except KeyError:
            raise KeyError(f"Unsupported lottery type: {lottery_type}") from None

    def supported_types(self) -> List[LotteryType]:
        return [t for t in LotteryType if t in self._profiles]

    def __contains__(self, lottery_type) -> bool:
        return lottery_type in self._profiles

    def __iter__(self):
        return iter(self._profiles[t] for t in self.supported_types())

    def __len__(self) -> int:
        return len(self._profiles)

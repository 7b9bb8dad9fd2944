"""
Default constraint presets.

A preset is plain data: an ordered list of constraints plus their configs,
looked up by game variant.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from lottocore.models import ConstraintConfig, ConstraintKind, LotteryType


@dataclass(frozen=True)
class ConstraintPreset:
    name: str
    constraints: Tuple[ConstraintKind, ...]
    configs: Dict[ConstraintKind, ConstraintConfig] = field(default_factory=dict)
    description: str = ""


PRESETS: Dict[LotteryType, ConstraintPreset] = {
    LotteryType.LOTOFACIL: ConstraintPreset(
        name="Lotofácil",
        constraints=(ConstraintKind.ZONE_MIX, ConstraintKind.PARITY_BALANCE),
        configs={
            ConstraintKind.PARITY_BALANCE: ConstraintConfig(min_parity_ratio=0.3, max_parity_ratio=0.7),
        },
        description="Mixes frame and inner numbers; balanced parity",
    ),
    LotteryType.MEGA_SENA: ConstraintPreset(
        name="Mega-Sena",
        constraints=(ConstraintKind.RECURRENCE_FROM_PREVIOUS, ConstraintKind.PARITY_BALANCE),
        configs={
            ConstraintKind.PARITY_BALANCE: ConstraintConfig(min_parity_ratio=0.2, max_parity_ratio=0.8),
        },
        description="Limits repeats from the last draw; balanced parity",
    ),
    LotteryType.QUINA: ConstraintPreset(
        name="Quina",
        constraints=(ConstraintKind.PARITY_BALANCE, ConstraintKind.MULTIPLES_OF_THREE),
        configs={
            ConstraintKind.PARITY_BALANCE: ConstraintConfig(min_parity_ratio=0.2, max_parity_ratio=0.8),
        },
        description="Balanced parity and a mix of multiples of three",
    ),
    LotteryType.TIMEMANIA: ConstraintPreset(
        name="Timemania",
        constraints=(ConstraintKind.PARITY_BALANCE,),
        configs={
            ConstraintKind.PARITY_BALANCE: ConstraintConfig(min_parity_ratio=0.25, max_parity_ratio=0.75),
        },
        description="Keeps even and odd numbers balanced",
    ),
    LotteryType.SUPER_SETE: ConstraintPreset(
        name="Super Sete",
        constraints=(ConstraintKind.PRIME_COUNT,),
        description="At least one prime digit across the columns",
    ),
}


def preset_for(profile) -> Optional[ConstraintPreset]:
    """Returns the default preset for the profile's game variant, or None."""
    return PRESETS.get(profile.type)

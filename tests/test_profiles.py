"""
Tests for game profiles, the profile catalog and default presets.
"""
import pytest

from lottocore.models import ConstraintKind, LotteryType, ProfileError
from lottocore.presets import preset_for
from lottocore.profiles import BUILTIN_PROFILES, Profile, ProfileCatalog


def _profile(**overrides):
    fields = dict(
        type=LotteryType.QUINA,
        name="Custom",
        min_number=1,
        max_number=80,
        entry_size=5,
        prize_tier_sizes=frozenset({5, 4, 3, 2}),
    )
    fields.update(overrides)
    return Profile(**fields)


class TestProfileInvariants:
    """Construction-time validation of profiles."""

    def test_builtin_profiles_are_valid(self):
        """All built-in profiles construct without errors."""
        assert len(BUILTIN_PROFILES) == 7

    def test_max_must_exceed_min(self):
        """An empty or inverted range is rejected."""
        with pytest.raises(ProfileError):
            _profile(min_number=10, max_number=10)

    def test_entry_size_must_be_positive(self):
        with pytest.raises(ProfileError):
            _profile(entry_size=0)

    def test_entry_size_must_fit_range(self):
        """Non-columnar entries cannot hold more numbers than the range."""
        with pytest.raises(ProfileError):
            _profile(min_number=1, max_number=5, entry_size=6)

    def test_columnar_entry_size_may_exceed_range(self):
        """Columnar profiles draw per column with repetition."""
        profile = _profile(min_number=0, max_number=3, entry_size=7, is_columnar=True)
        assert profile.entry_size == 7

    def test_prize_tiers_required(self):
        with pytest.raises(ProfileError):
            _profile(prize_tier_sizes=frozenset())

    def test_companion_range_required(self):
        """A companion category needs a non-empty range."""
        with pytest.raises(ProfileError):
            _profile(has_companion_category=True)
        with pytest.raises(ProfileError):
            _profile(has_companion_category=True, companion_range=(10, 1))

    def test_companion_values_must_be_positive(self):
        with pytest.raises(ProfileError):
            _profile(has_companion_category=True, companion_range=(0, 3))

    def test_profile_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            _profile(entry_size=-1)


class TestProfilePredicates:
    """Derived properties and validity checks."""

    def test_is_valid_numbers(self, mega_sena):
        assert mega_sena.is_valid_numbers([1, 2, 3, 4, 5, 60])
        assert not mega_sena.is_valid_numbers([1, 2, 3, 4, 5])
        assert not mega_sena.is_valid_numbers([1, 1, 3, 4, 5, 6])
        assert not mega_sena.is_valid_numbers([0, 2, 3, 4, 5, 6])

    def test_columnar_allows_repeats(self, super_sete):
        assert super_sete.is_valid_numbers([1, 1, 1, 1, 1, 1, 1])
        assert not super_sete.is_valid_numbers([1, 1, 1, 1, 1, 1, 10])

    def test_grid_side(self, lotofacil, lotomania, mega_sena, super_sete):
        """Square ranges form a grid; others do not."""
        assert lotofacil.grid_side == 5
        assert lotomania.grid_side == 10
        assert mega_sena.grid_side is None
        assert super_sete.grid_side is None

    def test_lotofacil_frame_numbers(self, lotofacil):
        """The 5x5 border of Lotofácil."""
        frame = {n for n in lotofacil.number_range() if lotofacil.is_frame_number(n)}
        assert frame == {1, 2, 3, 4, 5, 6, 10, 11, 15, 16, 20, 21, 22, 23, 24, 25}

    def test_companion_values(self, timemania, mega_sena):
        assert list(timemania.companion_values()) == list(range(1, 81))
        assert list(mega_sena.companion_values()) == []


class TestProfileCatalog:
    """Lookup table behaviour."""

    def test_get_and_supported_types(self, catalog):
        assert catalog.get(LotteryType.QUINA).entry_size == 5
        assert catalog.supported_types() == list(LotteryType)
        assert len(catalog) == 7
        assert LotteryType.TIMEMANIA in catalog

    def test_unknown_type_raises(self):
        catalog = ProfileCatalog([_profile()])
        with pytest.raises(KeyError):
            catalog.get(LotteryType.MEGA_SENA)

    def test_duplicate_profiles_rejected(self):
        with pytest.raises(ProfileError):
            ProfileCatalog([_profile(), _profile()])


class TestPresets:
    """Default constraint presets."""

    def test_lotofacil_preset(self, lotofacil):
        preset = preset_for(lotofacil)
        assert preset.constraints == (ConstraintKind.ZONE_MIX, ConstraintKind.PARITY_BALANCE)
        parity = preset.configs[ConstraintKind.PARITY_BALANCE]
        assert (parity.min_parity_ratio, parity.max_parity_ratio) == (0.3, 0.7)

    def test_profiles_without_preset(self, lotomania, dupla_sena):
        assert preset_for(lotomania) is None
        assert preset_for(dupla_sena) is None

"""
Hatchery exception classes.

Every error raised by the library derives from HatcheryError so callers can
catch the whole family in one place.
"""

from typing import Optional


class HatcheryError(Exception):
    """Base exception for hatchery errors."""

    def __init__(self, message: str = "Unknown hatchery error"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# Effect errors
# =============================================================================


class InvalidModifierError(HatcheryError):
    """Malformed modifier input (value, duration or stacking policy)."""

    def __init__(self, message: str, stat_key: Optional[str] = None):
        self.stat_key = stat_key
        super().__init__(message)


class UnknownEffectError(HatcheryError):
    """Effect id not present in the effect definitions."""

    def __init__(self, effect_id: str):
        self.effect_id = effect_id
        super().__init__(f"Unknown effect: {effect_id}")


# =============================================================================
# Resolution errors
# =============================================================================


class EmptyPoolError(HatcheryError):
    """Reward pool has nothing that can be drawn."""

    def __init__(self, message: str = "Reward pool is empty"):
        super().__init__(message)


class InvalidRarityTableError(HatcheryError):
    """Malformed rarity probabilities or caps."""

    def __init__(self, message: str, rarity_id: Optional[str] = None):
        self.rarity_id = rarity_id
        super().__init__(message)


class UnknownEggError(HatcheryError):
    """Egg id not present in the egg definitions."""

    def __init__(self, egg_id: str):
        self.egg_id = egg_id
        super().__init__(f"Unknown egg: {egg_id}")

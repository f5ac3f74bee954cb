"""Hatchery game constants."""

from typing import Final, Optional

# =============================================================================
# EFFECTS
# =============================================================================
# Sentinel duration for modifiers that never expire
PERMANENT: Final[Optional[float]] = None

# Source id prefix for permanent effects (game passes, VIP)
PERMANENT_PREFIX: Final[str] = "permanent_"

# Reserved subject holding server-wide effects
GLOBAL_SUBJECT: Final[str] = "__global__"

# Stats known to the game. All are additive fractions: 0.5 means "+50%".
LUCK_BOOST: Final[str] = "luckBoost"
RARE_LUCK_BOOST: Final[str] = "rareLuckBoost"
ULTRA_LUCK_BOOST: Final[str] = "ultraLuckBoost"
SPEED_MULTIPLIER: Final[str] = "speedMultiplier"
DAMAGE_BOOST: Final[str] = "damageBoost"
DEFENSE_BOOST: Final[str] = "defenseBoost"

BASE_STATS: Final[tuple[str, ...]] = (
    SPEED_MULTIPLIER,
    LUCK_BOOST,
    RARE_LUCK_BOOST,
    ULTRA_LUCK_BOOST,
    DAMAGE_BOOST,
    DEFENSE_BOOST,
)

# =============================================================================
# HATCHING
# =============================================================================
# Implicit rarity receiving the probability remainder
DEFAULT_COMMON_RARITY: Final[str] = "basic"

# Display rarity for each variant
VARIANT_RARITY: Final[dict[str, str]] = {
    "basic": "common",
    "golden": "epic",
    "rainbow": "mythic",
}

# Power gained per pet level above 1
POWER_PER_LEVEL: Final[float] = 0.1

# =============================================================================
# PREVIEW
# =============================================================================
# Chances below this are shown as "??"
MIN_CHANCE_TO_SHOW: Final[float] = 0.001
HIDDEN_CHANCE_LABEL: Final[str] = "??"
CHANCE_PRECISION: Final[int] = 2

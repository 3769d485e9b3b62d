"""Rules constants shared across the progression engine."""

from __future__ import annotations

# =============================================================================
# Character Level
# =============================================================================

MIN_CHARACTER_LEVEL = 1
"""Minimum character level."""

MAX_CHARACTER_LEVEL = 20
"""Maximum character level."""

MAX_CLASSES = 5
"""Maximum number of distinct classes a character may combine."""

MIN_ABILITY_SCORE = 1
MAX_ABILITY_SCORE = 50
"""Bounds of a base ability score."""

# =============================================================================
# Milestones
# =============================================================================

BONUS_FEAT_LEVELS = frozenset({1, 5, 9, 13, 17})
"""Character levels granting a bonus feat."""

ABILITY_SCORE_IMPROVEMENT_LEVELS = frozenset({4, 8, 12, 16, 20})
"""Character levels granting a +1 ability score improvement."""

# =============================================================================
# Derived Statistics
# =============================================================================

BASE_ARMOR_CLASS = 10
"""Armor class before any armor, shield or dexterity contributions."""

BASE_COMBAT_MANEUVER_DEFENSE = 10
"""Combat maneuver defense before attack bonus and ability modifiers."""

UNLIMITED_SLOTS = -1
"""Spell-slot total sentinel for cantrips/orisons."""

MAX_SPELL_LEVEL = 9
"""Highest spell level any table can reach."""

DEFAULT_SKILL_POINTS_PER_LEVEL = 2
"""Skill points per level assumed when a class level does not declare one."""

HEAVY_LOAD_ARMOR_CHECK_PENALTY = -1
"""Extra armor check penalty while heavily encumbered."""

HEAVY_LOAD_MOVEMENT_REDUCTION = -10
"""Movement change in feet while heavily encumbered."""


__all__ = [
    "MIN_CHARACTER_LEVEL",
    "MAX_CHARACTER_LEVEL",
    "MAX_CLASSES",
    "MIN_ABILITY_SCORE",
    "MAX_ABILITY_SCORE",
    "BONUS_FEAT_LEVELS",
    "ABILITY_SCORE_IMPROVEMENT_LEVELS",
    "BASE_ARMOR_CLASS",
    "BASE_COMBAT_MANEUVER_DEFENSE",
    "UNLIMITED_SLOTS",
    "MAX_SPELL_LEVEL",
    "DEFAULT_SKILL_POINTS_PER_LEVEL",
    "HEAVY_LOAD_ARMOR_CHECK_PENALTY",
    "HEAVY_LOAD_MOVEMENT_REDUCTION",
]

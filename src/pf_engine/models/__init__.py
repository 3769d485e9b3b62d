"""Pydantic V2 schemas for the progression engine.

Submodules:
    enums: Abilities, progression tiers, archetypes, item categories.
    components: Layered ability scores and modifier calculation.
    character: Class levels, equipment, advancement records and the
        CharacterSnapshot consumed by every engine module.

Example:
    >>> from pf_engine.models import AbilityScoreBlock, CharacterClassLevel, CharacterSnapshot
    >>> snapshot = CharacterSnapshot(
    ...     abilities=AbilityScoreBlock(strength=16),
    ...     classes=[CharacterClassLevel(class_id="fighter", level=2, hit_die=10, bab_progression="good")],
    ... )
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from pf_engine.models.enums import (
    Ability,
    BabProgression,
    CasterArchetype,
    EncumbranceTier,
    ItemCategory,
    SaveProgression,
    SaveType,
)

# =============================================================================
# Components
# =============================================================================
from pf_engine.models.components import (
    AbilityScore,
    AbilityScoreBlock,
    calculate_modifier,
    resolve_ability,
)

# =============================================================================
# Character
# =============================================================================
from pf_engine.models.character import (
    AbilityImprovementRecord,
    AdvancementRecord,
    CharacterClassLevel,
    CharacterSnapshot,
    EquippedItem,
    HitPointState,
    SaveProgressions,
    SavingThrows,
    SkillPointState,
)


__all__ = [
    # === Enumerations ===
    "Ability",
    "BabProgression",
    "CasterArchetype",
    "EncumbranceTier",
    "ItemCategory",
    "SaveProgression",
    "SaveType",
    # === Components ===
    "AbilityScore",
    "AbilityScoreBlock",
    "calculate_modifier",
    "resolve_ability",
    # === Character ===
    "AbilityImprovementRecord",
    "AdvancementRecord",
    "CharacterClassLevel",
    "CharacterSnapshot",
    "EquippedItem",
    "HitPointState",
    "SaveProgressions",
    "SavingThrows",
    "SkillPointState",
]

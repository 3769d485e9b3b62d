"""Rules engines for character progression.

Submodules:
    leveling: Experience table, level validation and milestones
    multiclass: Best-of and sum-of aggregation across classes
    advancement: Level-up, multi-level jumps and ability improvements
    spells: Spell slot tables with cast and rest transitions
    equipment: Armor class, weight, encumbrance and weapon damage
    stats: Full derived statistics for a character snapshot

Example:
    >>> from pf_engine.engine import compute_derived_stats, level_up
    >>>
    >>> result = level_up(snapshot, class_id="fighter")
    >>> stats = compute_derived_stats(result.snapshot)
    >>> print(stats.base_attack_bonus.total, stats.hit_points.max)
"""

from __future__ import annotations

# =============================================================================
# Leveling
# =============================================================================
from pf_engine.engine.leveling import (
    EXPERIENCE_TABLE,
    AdvancementOptions,
    FeatMilestones,
    advancement_options,
    experience_for_level,
    experience_progress,
    feats_for_level,
    hit_point_gain,
    level_from_experience,
    next_level_experience,
    skill_point_gain,
    validate_level,
    validate_leveling_request,
)

# =============================================================================
# Multiclass
# =============================================================================
from pf_engine.engine.multiclass import (
    AttackBonusResult,
    HitPointResult,
    MulticlassStats,
    SavingThrowResult,
    SkillPointResult,
    base_attack_bonus,
    base_save_bonus,
    calculate_multiclass_bab,
    calculate_multiclass_hp,
    calculate_multiclass_saves,
    calculate_multiclass_skill_points,
    calculate_total_level,
    recalculate_multiclass_stats,
    validate_multiclass,
)

# =============================================================================
# Advancement
# =============================================================================
from pf_engine.engine.advancement import (
    AdvancementResult,
    apply_ability_score_improvement,
    level_up,
    preview_advancement,
    set_level,
)

# =============================================================================
# Spells
# =============================================================================
from pf_engine.engine.spells import (
    SpellSlotEntry,
    SpellSlotTable,
    calculate_spell_slots,
    cast_spell,
    rest_and_regain_slots,
    spells_known_limit,
)

# =============================================================================
# Equipment
# =============================================================================
from pf_engine.engine.equipment import (
    ArmorClassBreakdown,
    EncumbranceLimits,
    EncumbrancePenalties,
    EquipmentSummary,
    LoadStatus,
    WeaponDamage,
    calculate_ac,
    calculate_total_weight,
    encumbrance_level,
    encumbrance_limits,
    encumbrance_penalties,
    load_status,
    summarize_equipment,
    validate_equipment,
    weapon_damage,
)

# =============================================================================
# Derived Stats
# =============================================================================
from pf_engine.engine.stats import DerivedStats, compute_derived_stats


__all__ = [
    # Leveling
    "EXPERIENCE_TABLE",
    "AdvancementOptions",
    "FeatMilestones",
    "advancement_options",
    "experience_for_level",
    "experience_progress",
    "feats_for_level",
    "hit_point_gain",
    "level_from_experience",
    "next_level_experience",
    "skill_point_gain",
    "validate_level",
    "validate_leveling_request",
    # Multiclass
    "AttackBonusResult",
    "HitPointResult",
    "MulticlassStats",
    "SavingThrowResult",
    "SkillPointResult",
    "base_attack_bonus",
    "base_save_bonus",
    "calculate_multiclass_bab",
    "calculate_multiclass_hp",
    "calculate_multiclass_saves",
    "calculate_multiclass_skill_points",
    "calculate_total_level",
    "recalculate_multiclass_stats",
    "validate_multiclass",
    # Advancement
    "AdvancementResult",
    "apply_ability_score_improvement",
    "level_up",
    "preview_advancement",
    "set_level",
    # Spells
    "SpellSlotEntry",
    "SpellSlotTable",
    "calculate_spell_slots",
    "cast_spell",
    "rest_and_regain_slots",
    "spells_known_limit",
    # Equipment
    "ArmorClassBreakdown",
    "EncumbranceLimits",
    "EncumbrancePenalties",
    "EquipmentSummary",
    "LoadStatus",
    "WeaponDamage",
    "calculate_ac",
    "calculate_total_weight",
    "encumbrance_level",
    "encumbrance_limits",
    "encumbrance_penalties",
    "load_status",
    "summarize_equipment",
    "validate_equipment",
    "weapon_damage",
    # Derived stats
    "DerivedStats",
    "compute_derived_stats",
]

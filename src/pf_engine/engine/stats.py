"""Derived statistics for a character snapshot.

Runs the multiclass aggregator, the equipment engine and the spell slot
calculator over one snapshot and assembles the results into a single
DerivedStats value. This is the engine's main output.

Example:
    >>> stats = compute_derived_stats(snapshot)
    >>> stats.base_attack_bonus.total
    5
    >>> stats.armor_class.total
    16
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from pf_engine.core.constants import BASE_COMBAT_MANEUVER_DEFENSE
from pf_engine.core.exceptions import DomainInvariantError
from pf_engine.core.logging import get_logger
from pf_engine.engine.equipment import (
    ArmorClassBreakdown,
    EncumbrancePenalties,
    calculate_ac,
    calculate_total_weight,
    encumbrance_level,
    encumbrance_penalties,
    validate_equipment,
)
from pf_engine.engine.multiclass import (
    AttackBonusResult,
    recalculate_multiclass_stats,
)
from pf_engine.engine.spells import SpellSlotTable, calculate_spell_slots
from pf_engine.models.character import CharacterSnapshot, SavingThrows
from pf_engine.models.enums import Ability, EncumbranceTier, SaveType
from pf_engine.rules.catalog import RulesCatalog, get_catalog


logger = get_logger(__name__)


class SavingThrowSummary(BaseModel):
    """Saving throws with ability modifiers applied.

    Attributes:
        base: Best per-class values plus flat bonuses.
        total: ``base`` plus the CON/DEX/WIS modifier of each save.
        per_class: Base saves of each class.
    """

    model_config = ConfigDict(frozen=True)

    base: SavingThrows
    total: SavingThrows
    per_class: dict[str, SavingThrows]


class HitPointSummary(BaseModel):
    """Hit points: tracked current value, computed maximum, per-class split."""

    model_config = ConfigDict(frozen=True)

    current: int
    max: int
    per_class: dict[str, int]


class SkillPointSummary(BaseModel):
    """Skill points earned across all levels and how they are spent."""

    model_config = ConfigDict(frozen=True)

    total: int
    remaining: int
    used: int
    per_class: dict[str, int]


class DerivedStats(BaseModel):
    """Every computed statistic of a character."""

    model_config = ConfigDict(frozen=True)

    total_level: int
    base_attack_bonus: AttackBonusResult
    saving_throws: SavingThrowSummary
    hit_points: HitPointSummary
    skill_points: SkillPointSummary
    armor_class: ArmorClassBreakdown
    initiative: int
    combat_maneuver_bonus: int
    combat_maneuver_defense: int
    total_weight: float
    encumbrance: EncumbranceTier
    encumbrance_penalties: EncumbrancePenalties
    spell_slots: dict[str, SpellSlotTable]


def _spell_tables(
    snapshot: CharacterSnapshot,
    catalog: RulesCatalog,
) -> dict[str, SpellSlotTable]:
    """Build a slot table for each casting class, keyed by class id."""
    tables: dict[str, SpellSlotTable] = {}
    for entry in snapshot.classes:
        rules = catalog.get_class(entry.class_id)
        if not rules.is_caster:
            continue
        tables[entry.class_id] = calculate_spell_slots(
            rules.spellcasting,
            entry.level,
            snapshot.abilities.modifier(rules.casting_ability),
            class_id=entry.class_id,
        )
    return tables


def compute_derived_stats(
    snapshot: CharacterSnapshot,
    catalog: RulesCatalog | None = None,
    *,
    save_bonus: Mapping[str, int] | None = None,
) -> DerivedStats:
    """Compute all derived statistics for a character.

    Args:
        snapshot: Character to evaluate.
        catalog: Rules catalog for spellcasting data; defaults to the
            process-wide catalog.
        save_bonus: Optional flat save bonuses, e.g. ``{"will": 2}``.

    Returns:
        DerivedStats for the snapshot.

    Raises:
        ValidationError: If the equipped items are not wearable.
        NotFoundError: If a class is missing from the catalog.
        DomainInvariantError: If more skill points are spent than earned.
    """
    if catalog is None:
        catalog = get_catalog()
    abilities = snapshot.abilities
    modifiers = abilities.modifiers()

    aggregate = recalculate_multiclass_stats(snapshot.classes, abilities, save_bonus)

    base_saves = aggregate.saving_throws.totals
    total_saves = SavingThrows(
        **{save.value: base_saves.get(save) + modifiers[save.key_ability] for save in SaveType}
    )

    skill_total = aggregate.skill_points.total
    if snapshot.skill_points.used > skill_total:
        raise DomainInvariantError(
            "More skill points used than earned",
            invariant="skill_points_used",
            details={"used": snapshot.skill_points.used, "total": skill_total},
        )

    hp_max = aggregate.hit_points.total
    hp_current = snapshot.hit_points.current if snapshot.hit_points.max > 0 else hp_max

    validate_equipment(snapshot.equipment)
    total_weight = calculate_total_weight(snapshot.equipment)
    tier = encumbrance_level(total_weight, abilities.total(Ability.STR))

    bab = aggregate.base_attack_bonus.total
    str_mod = modifiers[Ability.STR]
    dex_mod = modifiers[Ability.DEX]

    stats = DerivedStats(
        total_level=aggregate.total_level,
        base_attack_bonus=aggregate.base_attack_bonus,
        saving_throws=SavingThrowSummary(
            base=base_saves,
            total=total_saves,
            per_class=aggregate.saving_throws.per_class,
        ),
        hit_points=HitPointSummary(
            current=hp_current,
            max=hp_max,
            per_class=aggregate.hit_points.per_class,
        ),
        skill_points=SkillPointSummary(
            total=skill_total,
            remaining=snapshot.skill_points.remaining,
            used=snapshot.skill_points.used,
            per_class=aggregate.skill_points.per_class,
        ),
        armor_class=calculate_ac(snapshot.equipped_items, dex_mod),
        initiative=dex_mod,
        combat_maneuver_bonus=bab + str_mod,
        combat_maneuver_defense=BASE_COMBAT_MANEUVER_DEFENSE + bab + str_mod + dex_mod,
        total_weight=total_weight,
        encumbrance=tier,
        encumbrance_penalties=encumbrance_penalties(tier),
        spell_slots=_spell_tables(snapshot, catalog),
    )

    logger.debug(
        "Derived stats computed",
        total_level=stats.total_level,
        bab=bab,
        max_hp=hp_max,
        armor_class=stats.armor_class.total,
        encumbrance=tier.value,
        casting_classes=sorted(stats.spell_slots),
    )
    return stats


__all__ = [
    "SavingThrowSummary",
    "HitPointSummary",
    "SkillPointSummary",
    "DerivedStats",
    "compute_derived_stats",
]

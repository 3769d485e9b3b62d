"""Multiclass aggregation of per-class statistics.

Combines class levels into character-level totals:

- Base attack bonus: best of the per-class values.
- Saving throws: best per-class value for each save, then flat bonuses.
- Hit points: sum of per-class values, at least 1 per character level.
- Skill points: sum of per-class values.

Every function validates the class list first, so callers get a
ValidationError for an empty, oversized or duplicated list rather than a
meaningless total.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from pf_engine.core.constants import MAX_CLASSES
from pf_engine.core.exceptions import ValidationError
from pf_engine.core.logging import get_logger
from pf_engine.models.character import CharacterClassLevel, SavingThrows
from pf_engine.models.components import AbilityScoreBlock
from pf_engine.models.enums import Ability, BabProgression, SaveProgression, SaveType


logger = get_logger(__name__)


class AttackBonusResult(BaseModel):
    """Aggregate and per-class base attack bonus."""

    model_config = ConfigDict(frozen=True)

    total: int
    per_class: dict[str, int]


class SavingThrowResult(BaseModel):
    """Aggregate and per-class base saving throws."""

    model_config = ConfigDict(frozen=True)

    fortitude: int
    reflex: int
    will: int
    per_class: dict[str, SavingThrows]

    @property
    def totals(self) -> SavingThrows:
        """Aggregate values as a SavingThrows."""
        return SavingThrows(fortitude=self.fortitude, reflex=self.reflex, will=self.will)


class HitPointResult(BaseModel):
    """Aggregate and per-class maximum hit points."""

    model_config = ConfigDict(frozen=True)

    total: int
    per_class: dict[str, int]


class SkillPointResult(BaseModel):
    """Aggregate and per-class skill points."""

    model_config = ConfigDict(frozen=True)

    total: int
    per_class: dict[str, int]


class MulticlassStats(BaseModel):
    """All multiclass aggregates for one character."""

    model_config = ConfigDict(frozen=True)

    total_level: int
    base_attack_bonus: AttackBonusResult
    saving_throws: SavingThrowResult
    hit_points: HitPointResult
    skill_points: SkillPointResult


# =============================================================================
# Per-class Progressions
# =============================================================================


def base_attack_bonus(level: int, progression: BabProgression) -> int:
    """Base attack bonus for one class.

    good: +1 per level; moderate: +3/4 per level; poor: +1/2 per level.
    Fractions are floored with integer arithmetic.

    Example:
        >>> base_attack_bonus(7, BabProgression.MODERATE)
        5
    """
    if progression == BabProgression.GOOD:
        return level
    if progression == BabProgression.MODERATE:
        return (level * 3) // 4
    return level // 2


def base_save_bonus(level: int, progression: SaveProgression) -> int:
    """Base saving throw for one class and save type.

    good: 2 + level/2; poor: level/3 (both floored).
    """
    if progression == SaveProgression.GOOD:
        return 2 + level // 2
    return level // 3


def class_saving_throws(entry: CharacterClassLevel) -> SavingThrows:
    """Base saves of one class, using that class's tier for each save."""
    return SavingThrows(
        **{
            save.value: base_save_bonus(entry.level, entry.saves.for_save(save))
            for save in SaveType
        }
    )


# =============================================================================
# Aggregation
# =============================================================================


def validate_multiclass(classes: Sequence[CharacterClassLevel]) -> None:
    """Check a class list for multiclass legality.

    Raises:
        ValidationError: If the list is empty, has more than five entries,
            or repeats a class identifier.
    """
    if not classes:
        raise ValidationError("At least one class required", field_name="classes")
    if len(classes) > MAX_CLASSES:
        raise ValidationError(
            f"Too many classes (maximum {MAX_CLASSES})",
            field_name="classes",
            invalid_value=len(classes),
        )
    class_ids = [c.class_id for c in classes]
    if len(class_ids) != len(set(class_ids)):
        duplicates = sorted({cid for cid in class_ids if class_ids.count(cid) > 1})
        raise ValidationError(
            "Duplicate class",
            field_name="classes",
            invalid_value=duplicates,
        )


def calculate_total_level(classes: Sequence[CharacterClassLevel]) -> int:
    """Sum of all class levels."""
    return sum(c.level for c in classes)


def calculate_multiclass_bab(classes: Sequence[CharacterClassLevel]) -> AttackBonusResult:
    """Base attack bonus across classes: the best single-class value.

    Example:
        Fighter 5 (good), Rogue 3 (moderate), Wizard 2 (poor) gives
        per-class {5, 2, 1} and a total of 5.
    """
    validate_multiclass(classes)
    per_class = {c.class_id: base_attack_bonus(c.level, c.bab_progression) for c in classes}
    return AttackBonusResult(total=max(per_class.values()), per_class=per_class)


def calculate_multiclass_saves(
    classes: Sequence[CharacterClassLevel],
    save_bonus: Mapping[str, int] | None = None,
) -> SavingThrowResult:
    """Saving throws across classes.

    Each save takes the best per-class value; flat bonuses (feats, items)
    keyed by save name are then added.

    Args:
        classes: Character class levels.
        save_bonus: Optional flat bonuses, e.g. ``{"will": 2}``.

    Raises:
        ValidationError: On an invalid class list or unknown save name.
    """
    validate_multiclass(classes)
    bonus = dict(save_bonus or {})
    unknown = set(bonus) - {s.value for s in SaveType}
    if unknown:
        raise ValidationError(
            "Unknown save type in bonus",
            field_name="save_bonus",
            invalid_value=sorted(unknown),
        )

    per_class = {c.class_id: class_saving_throws(c) for c in classes}
    totals = {
        save.value: max(saves.get(save) for saves in per_class.values()) + bonus.get(save.value, 0)
        for save in SaveType
    }
    return SavingThrowResult(**totals, per_class=per_class)


def calculate_multiclass_hp(
    classes: Sequence[CharacterClassLevel],
    con_modifier: int = 0,
) -> HitPointResult:
    """Maximum hit points across classes.

    Each class contributes level x (hit die + CON modifier); the sum is
    raised to at least 1 per character level.
    """
    validate_multiclass(classes)
    per_class = {c.class_id: c.level * (c.hit_die + con_modifier) for c in classes}
    total_level = calculate_total_level(classes)
    total = max(sum(per_class.values()), total_level)
    return HitPointResult(total=total, per_class=per_class)


def calculate_multiclass_skill_points(
    classes: Sequence[CharacterClassLevel],
    int_modifier: int = 0,
) -> SkillPointResult:
    """Skill points across classes: level x (base + max(0, INT modifier)) each."""
    validate_multiclass(classes)
    int_bonus = max(0, int_modifier)
    per_class = {c.class_id: c.level * (c.skill_points_per_level + int_bonus) for c in classes}
    return SkillPointResult(total=sum(per_class.values()), per_class=per_class)


def recalculate_multiclass_stats(
    classes: Sequence[CharacterClassLevel],
    abilities: AbilityScoreBlock,
    save_bonus: Mapping[str, int] | None = None,
) -> MulticlassStats:
    """Compute every multiclass aggregate in one pass.

    Args:
        classes: Character class levels.
        abilities: Ability scores supplying CON and INT modifiers.
        save_bonus: Optional flat save bonuses.
    """
    validate_multiclass(classes)
    stats = MulticlassStats(
        total_level=calculate_total_level(classes),
        base_attack_bonus=calculate_multiclass_bab(classes),
        saving_throws=calculate_multiclass_saves(classes, save_bonus),
        hit_points=calculate_multiclass_hp(classes, abilities.modifier(Ability.CON)),
        skill_points=calculate_multiclass_skill_points(classes, abilities.modifier(Ability.INT)),
    )
    logger.debug(
        "Multiclass stats recalculated",
        classes=[c.class_id for c in classes],
        total_level=stats.total_level,
        bab=stats.base_attack_bonus.total,
        max_hp=stats.hit_points.total,
    )
    return stats


__all__ = [
    "AttackBonusResult",
    "SavingThrowResult",
    "HitPointResult",
    "SkillPointResult",
    "MulticlassStats",
    "base_attack_bonus",
    "base_save_bonus",
    "class_saving_throws",
    "validate_multiclass",
    "calculate_total_level",
    "calculate_multiclass_bab",
    "calculate_multiclass_saves",
    "calculate_multiclass_hp",
    "calculate_multiclass_skill_points",
    "recalculate_multiclass_stats",
]

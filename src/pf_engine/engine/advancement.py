"""Level advancement engine.

Moves a character forward one level (or several) and applies the
resulting hit point and skill point gains. Each level grants the per-level
gain of every class the character has, summed; the chosen class only
decides which class level is incremented. Character level only ever
increases and stops at 20.

A snapshot whose tracked maximum hit points is 0 has untracked hit points;
the first advancement seeds them from the computed maximum.

Every operation takes a frozen CharacterSnapshot and returns a new one;
the input is never modified. Ability score improvements are a separate,
player-directed step gated on the milestone levels.

Example:
    >>> result = level_up(snapshot, class_id="fighter")
    >>> result.new_level
    3
    >>> result.snapshot.level_history[-1].hit_points_gained
    12
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from pf_engine.core.constants import (
    ABILITY_SCORE_IMPROVEMENT_LEVELS,
    MAX_ABILITY_SCORE,
    MAX_CHARACTER_LEVEL,
)
from pf_engine.core.exceptions import NotFoundError, ValidationError
from pf_engine.core.logging import get_logger
from pf_engine.engine.leveling import (
    AdvancementOptions,
    FeatMilestones,
    advancement_options,
    feats_for_level,
    hit_point_gain,
    skill_point_gain,
    validate_level,
    validate_leveling_request,
)
from pf_engine.engine.multiclass import calculate_multiclass_hp
from pf_engine.models.character import (
    AbilityImprovementRecord,
    AdvancementRecord,
    CharacterClassLevel,
    CharacterSnapshot,
    HitPointState,
    SkillPointState,
)
from pf_engine.models.components import resolve_ability
from pf_engine.models.enums import Ability


logger = get_logger(__name__)

BONUS_FEAT_LABEL = "bonus feat"
ABILITY_IMPROVEMENT_LABEL = "ability score improvement"


class AdvancementResult(BaseModel):
    """Outcome of one or more level-ups.

    Attributes:
        snapshot: The advanced character.
        records: Advancement records appended by this operation, in level order.
        hit_points_gained: Total hit points gained.
        skill_points_gained: Total skill points gained.
        previous_level: Character level before advancing.
        new_level: Character level after advancing.
        milestones: Milestones reached at the new level.
    """

    model_config = ConfigDict(frozen=True)

    snapshot: CharacterSnapshot
    records: tuple[AdvancementRecord, ...]
    hit_points_gained: int
    skill_points_gained: int
    previous_level: int
    new_level: int
    milestones: FeatMilestones


def _resolve_class(snapshot: CharacterSnapshot, class_id: str | None) -> CharacterClassLevel:
    """Pick the class that receives the new level."""
    if class_id is None:
        return snapshot.classes[0]
    entry = snapshot.get_class(class_id)
    if entry is None:
        raise NotFoundError(
            f"Character has no levels in class: {class_id}",
            resource="class",
            key=class_id,
        )
    return entry


def _advance_once(
    snapshot: CharacterSnapshot,
    class_id: str | None,
    now: datetime,
) -> tuple[CharacterSnapshot, AdvancementRecord]:
    """Apply a single level to one class and return the new snapshot and record."""
    current_level = snapshot.total_level
    target_level = current_level + 1
    validate_leveling_request(current_level, target_level)

    advancing = _resolve_class(snapshot, class_id)
    con_modifier = snapshot.abilities.modifier(Ability.CON)
    int_modifier = snapshot.abilities.modifier(Ability.INT)
    hp_gained = sum(hit_point_gain(c.hit_die, con_modifier) for c in snapshot.classes)
    skill_gained = sum(
        skill_point_gain(c.skill_points_per_level, int_modifier) for c in snapshot.classes
    )

    hit_points = snapshot.hit_points
    if hit_points.max == 0:
        # Untracked hit points start from the computed maximum.
        seeded = calculate_multiclass_hp(snapshot.classes, con_modifier).total
        hit_points = HitPointState(current=seeded, max=seeded)

    milestones = feats_for_level(target_level)
    record = AdvancementRecord(
        level=target_level,
        timestamp=now,
        hit_points_gained=hp_gained,
        skill_points_gained=skill_gained,
        feats_gained=(BONUS_FEAT_LABEL,) if milestones.bonus_feat else (),
        abilities_gained=(
            (ABILITY_IMPROVEMENT_LABEL,) if milestones.ability_score_improvement else ()
        ),
    )

    classes = tuple(
        entry.model_copy(update={"level": entry.level + 1})
        if entry.class_id == advancing.class_id
        else entry
        for entry in snapshot.classes
    )
    updated = snapshot.model_copy(
        update={
            "classes": classes,
            "hit_points": HitPointState(
                current=hit_points.current + hp_gained,
                max=hit_points.max + hp_gained,
            ),
            "skill_points": SkillPointState(
                remaining=snapshot.skill_points.remaining + skill_gained,
                used=snapshot.skill_points.used,
            ),
            "level_history": (*snapshot.level_history, record),
        }
    )
    return updated, record


def _build_result(
    original: CharacterSnapshot,
    updated: CharacterSnapshot,
    records: list[AdvancementRecord],
) -> AdvancementResult:
    return AdvancementResult(
        snapshot=updated,
        records=tuple(records),
        hit_points_gained=sum(r.hit_points_gained for r in records),
        skill_points_gained=sum(r.skill_points_gained for r in records),
        previous_level=original.total_level,
        new_level=updated.total_level,
        milestones=feats_for_level(updated.total_level),
    )


def level_up(
    snapshot: CharacterSnapshot,
    *,
    class_id: str | None = None,
    now: datetime | None = None,
) -> AdvancementResult:
    """Advance a character by one level.

    Hit points gained are max(1, hit die + CON modifier) summed over all of
    the character's classes; skill points likewise.

    Args:
        snapshot: Character to advance.
        class_id: Class receiving the level; defaults to the first listed class.
        now: Timestamp for the advancement record; defaults to the current UTC time.

    Returns:
        AdvancementResult with the updated snapshot and a single record.

    Raises:
        ValidationError: If the character is already level 20.
        NotFoundError: If the character has no levels in ``class_id``.
    """
    timestamp = now or datetime.now(UTC)
    updated, record = _advance_once(snapshot, class_id, timestamp)
    result = _build_result(snapshot, updated, [record])

    logger.info(
        "Character leveled up",
        previous_level=result.previous_level,
        new_level=result.new_level,
        class_id=class_id or snapshot.classes[0].class_id,
        hit_points_gained=result.hit_points_gained,
        skill_points_gained=result.skill_points_gained,
    )
    return result


def set_level(
    snapshot: CharacterSnapshot,
    target_level: int,
    *,
    class_id: str | None = None,
    now: datetime | None = None,
) -> AdvancementResult:
    """Advance a character to a target level, one level at a time.

    Each intervening level gets its own gain calculation and its own
    advancement record, so a jump from 3 to 6 appends three records.

    Args:
        snapshot: Character to advance.
        target_level: Level to reach.
        class_id: Class receiving every new level; defaults to the first listed class.
        now: Timestamp shared by every record; defaults to the current UTC time.

    Raises:
        ValidationError: If the target is invalid, not above the current
            level, or above 20.
        NotFoundError: If the character has no levels in ``class_id``.
    """
    validate_level(target_level)
    validate_leveling_request(snapshot.total_level, target_level)
    timestamp = now or datetime.now(UTC)

    current = snapshot
    records: list[AdvancementRecord] = []
    for _ in range(target_level - snapshot.total_level):
        current, record = _advance_once(current, class_id, timestamp)
        records.append(record)

    result = _build_result(snapshot, current, records)
    logger.info(
        "Character level set",
        previous_level=result.previous_level,
        new_level=result.new_level,
        levels_gained=len(records),
        hit_points_gained=result.hit_points_gained,
        skill_points_gained=result.skill_points_gained,
    )
    return result


def apply_ability_score_improvement(
    snapshot: CharacterSnapshot,
    level: int,
    ability: Ability | str,
    *,
    now: datetime | None = None,
) -> CharacterSnapshot:
    """Raise one ability's base score by 1 at a milestone level.

    Args:
        snapshot: Character to improve.
        level: Milestone level the improvement belongs to (4, 8, 12, 16 or 20).
        ability: Ability to raise, as an Ability or its name/abbreviation.
        now: Timestamp for the improvement record.

    Returns:
        A new snapshot with the raised score and an appended improvement record.

    Raises:
        ValidationError: If ``level`` is not a milestone level or the
            ability name is not recognized.
    """
    if level not in ABILITY_SCORE_IMPROVEMENT_LEVELS:
        raise ValidationError(
            f"Ability score improvements are only available at levels "
            f"{', '.join(str(lvl) for lvl in sorted(ABILITY_SCORE_IMPROVEMENT_LEVELS))}",
            field_name="level",
            invalid_value=level,
        )
    resolved = resolve_ability(ability)

    abilities = snapshot.abilities
    new_base = abilities.get(resolved).base + 1
    if new_base > MAX_ABILITY_SCORE:
        raise ValidationError(
            f"Ability score cannot exceed {MAX_ABILITY_SCORE}",
            field_name="ability",
            invalid_value=resolved.value,
        )
    record = AbilityImprovementRecord(
        level=level,
        ability=resolved,
        applied_at=now or datetime.now(UTC),
    )
    updated = snapshot.model_copy(
        update={
            "abilities": abilities.with_base(resolved, new_base),
            "ability_improvements": (*snapshot.ability_improvements, record),
        }
    )
    logger.info(
        "Ability score improved",
        ability=resolved.value,
        level=level,
        new_base=new_base,
    )
    return updated


def preview_advancement(snapshot: CharacterSnapshot) -> AdvancementOptions:
    """Describe what the character's next level would grant.

    Raises:
        ValidationError: If the character is already level 20.
    """
    current_level = snapshot.total_level
    if current_level >= MAX_CHARACTER_LEVEL:
        raise ValidationError(
            f"Maximum level exceeded ({MAX_CHARACTER_LEVEL})",
            field_name="level",
            invalid_value=current_level + 1,
        )
    return advancement_options(current_level + 1)


__all__ = [
    "AdvancementResult",
    "BONUS_FEAT_LABEL",
    "ABILITY_IMPROVEMENT_LABEL",
    "level_up",
    "set_level",
    "apply_ability_score_improvement",
    "preview_advancement",
]

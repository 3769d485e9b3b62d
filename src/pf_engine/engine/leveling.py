"""Experience and leveling rules.

Level/experience conversion against the fixed medium-track table, level
validation, milestone detection and the per-level hit point and skill point
gain formulas used by the advancement engine.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pf_engine.core.constants import (
    ABILITY_SCORE_IMPROVEMENT_LEVELS,
    BONUS_FEAT_LEVELS,
    MAX_CHARACTER_LEVEL,
    MIN_CHARACTER_LEVEL,
)
from pf_engine.core.exceptions import ValidationError


# =============================================================================
# Experience Table (medium advancement track)
# =============================================================================

EXPERIENCE_TABLE: dict[int, int] = {
    1: 0,
    2: 1000,
    3: 3000,
    4: 6000,
    5: 10000,
    6: 15000,
    7: 21000,
    8: 28000,
    9: 36000,
    10: 45000,
    11: 55000,
    12: 66000,
    13: 78000,
    14: 91000,
    15: 105000,
    16: 120000,
    17: 136000,
    18: 153000,
    19: 171000,
    20: 190000,
}


class FeatMilestones(BaseModel):
    """Milestones reached at a character level."""

    model_config = ConfigDict(frozen=True)

    bonus_feat: bool
    ability_score_improvement: bool


class AdvancementOptions(BaseModel):
    """What the next level offers, for presenting a level-up choice."""

    model_config = ConfigDict(frozen=True)

    level: int
    bonus_feat: bool
    ability_score_improvement: bool
    experience_required: int


def validate_level(level: int) -> None:
    """Check that a level is an integer between 1 and 20.

    Raises:
        ValidationError: If the level is not an int or is out of range.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValidationError("Level must be an integer", field_name="level", invalid_value=level)
    if not MIN_CHARACTER_LEVEL <= level <= MAX_CHARACTER_LEVEL:
        raise ValidationError(
            f"Level must be between {MIN_CHARACTER_LEVEL} and {MAX_CHARACTER_LEVEL}",
            field_name="level",
            invalid_value=level,
        )


def experience_for_level(level: int) -> int:
    """Get the experience threshold for a level.

    Args:
        level: Character level (1-20).

    Returns:
        Experience needed to reach the level; level 1 is 0.

    Raises:
        ValidationError: If the level is out of range.
    """
    validate_level(level)
    return EXPERIENCE_TABLE[level]


def level_from_experience(experience: int) -> int:
    """Get the highest level whose threshold is at most ``experience``.

    Returns at least 1, even for negative experience.
    """
    for level in range(MAX_CHARACTER_LEVEL, MIN_CHARACTER_LEVEL - 1, -1):
        if experience >= EXPERIENCE_TABLE[level]:
            return level
    return MIN_CHARACTER_LEVEL


def next_level_experience(current_level: int) -> int:
    """Get the threshold of the level after ``current_level``.

    At level 20 this is the level 20 threshold itself.
    """
    validate_level(current_level)
    return EXPERIENCE_TABLE[min(current_level + 1, MAX_CHARACTER_LEVEL)]


def experience_progress(experience: int, current_level: int) -> int:
    """Get progress toward the next level as a whole percentage (0-100).

    A level 20 character is always at 100.
    """
    validate_level(current_level)
    if current_level == MAX_CHARACTER_LEVEL:
        return 100
    current_threshold = EXPERIENCE_TABLE[current_level]
    required = EXPERIENCE_TABLE[current_level + 1] - current_threshold
    progress = (experience - current_threshold) * 100 // required
    return max(0, min(100, progress))


def validate_leveling_request(current_level: int, target_level: int) -> None:
    """Check that a character may advance from one level to another.

    Raises:
        ValidationError: If the target equals the current level, is lower,
            or exceeds the maximum level.
    """
    if target_level == current_level:
        raise ValidationError(
            f"Character is already at that level ({current_level})",
            field_name="target_level",
            invalid_value=target_level,
        )
    if target_level < current_level:
        raise ValidationError(
            "Cannot decrease level",
            field_name="target_level",
            invalid_value=target_level,
        )
    if target_level > MAX_CHARACTER_LEVEL:
        raise ValidationError(
            f"Maximum level exceeded ({MAX_CHARACTER_LEVEL})",
            field_name="target_level",
            invalid_value=target_level,
        )


def feats_for_level(level: int) -> FeatMilestones:
    """Get the milestones granted at a character level.

    Bonus feats arrive at 1, 5, 9, 13 and 17; ability score
    improvements at 4, 8, 12, 16 and 20.
    """
    return FeatMilestones(
        bonus_feat=level in BONUS_FEAT_LEVELS,
        ability_score_improvement=level in ABILITY_SCORE_IMPROVEMENT_LEVELS,
    )


def advancement_options(next_level: int) -> AdvancementOptions:
    """Describe what reaching ``next_level`` grants.

    Raises:
        ValidationError: If the level is out of range.
    """
    milestones = feats_for_level(next_level)
    return AdvancementOptions(
        level=next_level,
        bonus_feat=milestones.bonus_feat,
        ability_score_improvement=milestones.ability_score_improvement,
        experience_required=experience_for_level(next_level),
    )


def hit_point_gain(hit_die: int, con_modifier: int) -> int:
    """Hit points gained for one level: hit die + CON modifier, minimum 1."""
    return max(1, hit_die + con_modifier)


def skill_point_gain(base_per_level: int, int_modifier: int) -> int:
    """Skill points gained for one level; a negative INT modifier counts as 0."""
    return base_per_level + max(0, int_modifier)


__all__ = [
    "EXPERIENCE_TABLE",
    "FeatMilestones",
    "AdvancementOptions",
    "validate_level",
    "experience_for_level",
    "level_from_experience",
    "next_level_experience",
    "experience_progress",
    "validate_leveling_request",
    "feats_for_level",
    "advancement_options",
    "hit_point_gain",
    "skill_point_gain",
]

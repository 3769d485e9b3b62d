"""Pydantic V2 schemas for the character snapshot.

The snapshot is the single input shape the engine consumes: ability scores,
ordered class levels, carried equipment and progression state. It is
validated once at construction, so engine code can rely on its invariants
(1-5 distinct classes, total level 1-20) without re-checking them.

All models are frozen. Operations that "change" a character return a new
snapshot built with ``model_copy``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pf_engine.core.constants import (
    DEFAULT_SKILL_POINTS_PER_LEVEL,
    MAX_CHARACTER_LEVEL,
    MAX_CLASSES,
    MIN_CHARACTER_LEVEL,
)
from pf_engine.models.components import AbilityScoreBlock
from pf_engine.models.enums import (
    Ability,
    BabProgression,
    ItemCategory,
    SaveProgression,
    SaveType,
)


class SaveProgressions(BaseModel):
    """Progression tier of each saving throw for one class."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fortitude: SaveProgression = SaveProgression.POOR
    reflex: SaveProgression = SaveProgression.POOR
    will: SaveProgression = SaveProgression.POOR

    def for_save(self, save: SaveType) -> SaveProgression:
        """Get the tier for one save type."""
        return getattr(self, save.value)


class SavingThrows(BaseModel):
    """Fortitude, reflex and will values."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    fortitude: int = 0
    reflex: int = 0
    will: int = 0

    def get(self, save: SaveType) -> int:
        """Get the value for one save type."""
        return getattr(self, save.value)


class CharacterClassLevel(BaseModel):
    """Levels taken in one class.

    Attributes:
        class_id: Catalog identifier (e.g. 'fighter').
        level: Levels taken in this class (1-20).
        hit_die: Faces of the class hit die (d10 -> 10).
        bab_progression: Base attack bonus tier.
        saves: Saving throw tier per save type.
        skill_points_per_level: Base skill points gained per level.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    class_id: str = Field(min_length=1, max_length=50, description="Class identifier")
    level: Annotated[
        int, Field(ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL, description="Class level")
    ]
    hit_die: Annotated[int, Field(ge=4, le=12, description="Hit die faces")]
    bab_progression: BabProgression
    saves: SaveProgressions = Field(default_factory=SaveProgressions)
    skill_points_per_level: Annotated[int, Field(ge=0)] = DEFAULT_SKILL_POINTS_PER_LEVEL


class EquippedItem(BaseModel):
    """An item carried by the character.

    Only items with ``equipped`` set contribute to armor class; every item
    counts toward carried weight.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    item_id: str = Field(min_length=1, description="Item identifier")
    name: str = ""
    category: ItemCategory
    weight: Annotated[float, Field(ge=0, description="Weight of one unit in pounds")] = 0.0
    quantity: Annotated[int, Field(ge=0)] = 1
    equipped: bool = False
    armor_bonus: Annotated[int, Field(ge=0)] = 0
    max_dex_bonus: int | None = Field(default=None, description="Dexterity cap, if any")
    armor_check_penalty: Annotated[int, Field(le=0)] = 0
    damage: str | None = Field(default=None, description="Weapon damage dice, e.g. '1d8'")


class HitPointState(BaseModel):
    """Tracked hit points."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    current: int = 0
    max: Annotated[int, Field(ge=0)] = 0


class SkillPointState(BaseModel):
    """Tracked skill points."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    remaining: Annotated[int, Field(ge=0)] = 0
    used: Annotated[int, Field(ge=0)] = 0


class AdvancementRecord(BaseModel):
    """Immutable log entry appended for each level gained."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Annotated[int, Field(ge=MIN_CHARACTER_LEVEL, le=MAX_CHARACTER_LEVEL)]
    timestamp: datetime
    hit_points_gained: int
    skill_points_gained: int
    feats_gained: tuple[str, ...] = ()
    abilities_gained: tuple[str, ...] = ()


class AbilityImprovementRecord(BaseModel):
    """Log entry for an applied ability score improvement."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: int
    ability: Ability
    applied_at: datetime


class CharacterSnapshot(BaseModel):
    """Everything the engine needs to know about one character.

    Example:
        >>> snapshot = CharacterSnapshot(
        ...     abilities=AbilityScoreBlock(strength=16, constitution=14),
        ...     classes=[CharacterClassLevel(
        ...         class_id="fighter", level=1, hit_die=10, bab_progression="good",
        ...     )],
        ... )
        >>> snapshot.total_level
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    abilities: AbilityScoreBlock = Field(default_factory=AbilityScoreBlock)
    classes: tuple[CharacterClassLevel, ...] = Field(min_length=1, max_length=MAX_CLASSES)
    equipment: tuple[EquippedItem, ...] = ()
    experience: Annotated[int, Field(ge=0)] = 0
    hit_points: HitPointState = Field(default_factory=HitPointState)
    skill_points: SkillPointState = Field(default_factory=SkillPointState)
    level_history: tuple[AdvancementRecord, ...] = ()
    ability_improvements: tuple[AbilityImprovementRecord, ...] = ()

    @model_validator(mode="after")
    def validate_class_levels(self) -> CharacterSnapshot:
        """Reject duplicate classes and out-of-range total levels."""
        class_ids = [c.class_id for c in self.classes]
        if len(class_ids) != len(set(class_ids)):
            msg = f"duplicate class in {class_ids}"
            raise ValueError(msg)
        if not MIN_CHARACTER_LEVEL <= self.total_level <= MAX_CHARACTER_LEVEL:
            msg = (
                f"total level must be between {MIN_CHARACTER_LEVEL} and "
                f"{MAX_CHARACTER_LEVEL}, got {self.total_level}"
            )
            raise ValueError(msg)
        return self

    @property
    def total_level(self) -> int:
        """Sum of all class levels."""
        return sum(c.level for c in self.classes)

    def get_class(self, class_id: str) -> CharacterClassLevel | None:
        """Find a class entry by identifier."""
        for entry in self.classes:
            if entry.class_id == class_id:
                return entry
        return None

    @property
    def equipped_items(self) -> list[EquippedItem]:
        """Items currently worn or wielded."""
        return [item for item in self.equipment if item.equipped]


__all__ = [
    "SaveProgressions",
    "SavingThrows",
    "CharacterClassLevel",
    "EquippedItem",
    "HitPointState",
    "SkillPointState",
    "AdvancementRecord",
    "AbilityImprovementRecord",
    "CharacterSnapshot",
]

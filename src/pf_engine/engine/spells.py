"""Spell slot calculator.

Builds per-spell-level slot tables for a casting class and handles the
cast and rest transitions. Each archetype differs in the highest spell
level it reaches and in its base slots per spell level; all of them share
the same ability-driven bonus slot formula.

Level 0 (cantrips and orisons) is always unlimited, stored as a total of
-1. Casting a level 0 spell is recorded in ``used`` but never exhausts
the entry.

Example:
    >>> table = calculate_spell_slots(CasterArchetype.PREPARED_FULL, 5, 3)
    >>> [(e.level, e.total) for e in table.entries]
    [(0, -1), (1, 2), (2, 2), (3, 2)]
    >>> table = cast_spell(table, 1)
    >>> table.remaining(1)
    1
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pf_engine.core.constants import MAX_SPELL_LEVEL, UNLIMITED_SLOTS
from pf_engine.core.exceptions import NotFoundError, ValidationError
from pf_engine.core.logging import get_logger
from pf_engine.models.enums import CasterArchetype


logger = get_logger(__name__)

# Delayed casters gain spells late and stop at 4th-level spells.
DELAYED_CASTER_MIN_LEVEL = 4
DELAYED_CASTER_MAX_SPELL_LEVEL = 4

SPONTANEOUS_SPELLS_KNOWN: tuple[int, ...] = (
    4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9, 10, 10, 11, 11, 12, 12, 13, 13, 13,
)  # fmt: skip
"""Spells known by caster level 1-20 for spontaneous casters."""


class SpellSlotEntry(BaseModel):
    """Slots for one spell level.

    Attributes:
        level: Spell level (0-9).
        used: Slots spent since the last rest.
        total: Slots per day, or -1 for unlimited.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: Annotated[int, Field(ge=0, le=MAX_SPELL_LEVEL)]
    used: Annotated[int, Field(ge=0)] = 0
    total: Annotated[int, Field(ge=UNLIMITED_SLOTS)]

    @property
    def is_unlimited(self) -> bool:
        return self.total == UNLIMITED_SLOTS

    @property
    def remaining(self) -> int:
        """Slots left today; -1 when unlimited."""
        if self.is_unlimited:
            return UNLIMITED_SLOTS
        return max(0, self.total - self.used)


class SpellSlotTable(BaseModel):
    """Spell slots of one casting class, ordered by spell level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    class_id: str | None = None
    archetype: CasterArchetype
    caster_level: Annotated[int, Field(ge=1)]
    ability_modifier: int
    entries: tuple[SpellSlotEntry, ...] = ()

    def entry(self, level: int) -> SpellSlotEntry:
        """Get the entry for a spell level.

        Raises:
            NotFoundError: If the table has no entry for ``level``.
        """
        for slot in self.entries:
            if slot.level == level:
                return slot
        raise NotFoundError(
            "No slots available",
            resource="spell_level",
            key=level,
            details={"class_id": self.class_id},
        )

    def remaining(self, level: int) -> int:
        """Slots left at a spell level; -1 when unlimited."""
        return self.entry(level).remaining

    @property
    def max_spell_level(self) -> int | None:
        """Highest spell level in the table, or None when empty."""
        if not self.entries:
            return None
        return self.entries[-1].level


# =============================================================================
# Slot Formulas
# =============================================================================


def bonus_slots(ability_modifier: int, spell_level: int) -> int:
    """Bonus slots from a high casting ability at one spell level."""
    return max(0, (ability_modifier - (spell_level - 1)) // 4 + 1)


def _ceil_half(value: int) -> int:
    return -(-value // 2)


def max_spell_level(archetype: CasterArchetype, caster_level: int) -> int:
    """Highest spell level an archetype can cast at a caster level.

    Returns -1 for a delayed caster below caster level 4, meaning no table
    at all.
    """
    if archetype == CasterArchetype.PREPARED_DIVINE:
        return min(_ceil_half(caster_level + 1), MAX_SPELL_LEVEL)
    if archetype == CasterArchetype.DELAYED:
        if caster_level < DELAYED_CASTER_MIN_LEVEL:
            return -1
        return min((caster_level - 1) // 4, DELAYED_CASTER_MAX_SPELL_LEVEL)
    return min(_ceil_half(caster_level), MAX_SPELL_LEVEL)


def base_slots(archetype: CasterArchetype, caster_level: int, spell_level: int) -> int:
    """Base slots per day at one spell level, before bonus slots."""
    if archetype == CasterArchetype.PREPARED_DIVINE:
        return 1 + caster_level // (spell_level + 1)
    if archetype == CasterArchetype.SPONTANEOUS:
        return 2
    if archetype == CasterArchetype.DELAYED:
        return 1 + max(0, (caster_level - 3 - spell_level) // 4)
    return 1


def calculate_spell_slots(
    archetype: CasterArchetype | str,
    caster_level: int,
    ability_modifier: int,
    *,
    class_id: str | None = None,
) -> SpellSlotTable:
    """Build a fresh spell slot table with nothing used.

    Args:
        archetype: Caster archetype of the class.
        caster_level: Effective caster level (1-20).
        ability_modifier: Modifier of the casting ability.
        class_id: Optional class identifier carried on the table.

    Returns:
        SpellSlotTable ordered by spell level. Empty for a delayed caster
        below caster level 4.

    Raises:
        ValidationError: If the archetype is unknown or the caster level is
            below 1.
    """
    try:
        archetype = CasterArchetype(archetype)
    except ValueError as exc:
        raise ValidationError(
            f"Unknown caster archetype: {archetype}",
            field_name="archetype",
            invalid_value=archetype,
        ) from exc
    if caster_level < 1:
        raise ValidationError(
            "Caster level must be at least 1",
            field_name="caster_level",
            invalid_value=caster_level,
        )

    top = max_spell_level(archetype, caster_level)
    entries: list[SpellSlotEntry] = []
    for spell_level in range(top + 1):
        if spell_level == 0:
            total = UNLIMITED_SLOTS
        else:
            total = base_slots(archetype, caster_level, spell_level) + bonus_slots(
                ability_modifier, spell_level
            )
        entries.append(SpellSlotEntry(level=spell_level, total=total))

    logger.debug(
        "Spell slots calculated",
        class_id=class_id,
        archetype=archetype.value,
        caster_level=caster_level,
        ability_modifier=ability_modifier,
        max_spell_level=top if top >= 0 else None,
    )
    return SpellSlotTable(
        class_id=class_id,
        archetype=archetype,
        caster_level=caster_level,
        ability_modifier=ability_modifier,
        entries=tuple(entries),
    )


# =============================================================================
# State Transitions
# =============================================================================


def cast_spell(table: SpellSlotTable, level: int) -> SpellSlotTable:
    """Spend one slot at a spell level.

    Args:
        table: Current slot table.
        level: Spell level being cast.

    Returns:
        A new table with that entry's ``used`` incremented.

    Raises:
        NotFoundError: If the table has no entry for ``level``.
        ValidationError: If a limited entry is already exhausted.
    """
    slot = table.entry(level)
    if not slot.is_unlimited and slot.used >= slot.total:
        raise ValidationError(
            "No slots available",
            field_name="level",
            invalid_value=level,
            details={"used": slot.used, "total": slot.total},
        )

    spent = slot.model_copy(update={"used": slot.used + 1})
    entries = tuple(spent if e.level == level else e for e in table.entries)
    logger.debug("Spell slot used", class_id=table.class_id, level=level, used=spent.used)
    return table.model_copy(update={"entries": entries})


def rest_and_regain_slots(table: SpellSlotTable) -> SpellSlotTable:
    """Reset every entry's ``used`` to 0, leaving totals unchanged."""
    entries = tuple(e.model_copy(update={"used": 0}) for e in table.entries)
    logger.debug("Spell slots regained", class_id=table.class_id)
    return table.model_copy(update={"entries": entries})


def spells_known_limit(archetype: CasterArchetype | str, caster_level: int) -> int:
    """Maximum spells known for an archetype at a caster level.

    Prepared arcane casters know one spell per caster level, spontaneous
    casters follow a fixed table, and the remaining archetypes prepare from
    their whole list (-1, unlimited).
    """
    archetype = CasterArchetype(archetype)
    if archetype == CasterArchetype.PREPARED_FULL:
        return caster_level
    if archetype == CasterArchetype.SPONTANEOUS:
        index = max(1, min(caster_level, len(SPONTANEOUS_SPELLS_KNOWN))) - 1
        return SPONTANEOUS_SPELLS_KNOWN[index]
    return UNLIMITED_SLOTS


__all__ = [
    "DELAYED_CASTER_MIN_LEVEL",
    "DELAYED_CASTER_MAX_SPELL_LEVEL",
    "SPONTANEOUS_SPELLS_KNOWN",
    "SpellSlotEntry",
    "SpellSlotTable",
    "bonus_slots",
    "max_spell_level",
    "base_slots",
    "calculate_spell_slots",
    "cast_spell",
    "rest_and_regain_slots",
    "spells_known_limit",
]

"""Enumeration types for the progression engine.

Abilities, progression tiers, save types, spellcasting archetypes, item
categories and encumbrance tiers. These are the vocabulary shared by the
catalog, the character snapshot and every engine module.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six ability scores."""

    STR = "strength"
    DEX = "dexterity"
    CON = "constitution"
    INT = "intelligence"
    WIS = "wisdom"
    CHA = "charisma"

    @property
    def abbreviation(self) -> str:
        """Get the lowercase three-letter abbreviation (e.g. 'str')."""
        return self.name.lower()

    @classmethod
    def parse(cls, value: str | Ability) -> Ability:
        """Resolve an ability from its full name or abbreviation.

        Args:
            value: 'strength', 'STR', 'str' or an Ability member.

        Returns:
            The matching Ability.

        Raises:
            ValueError: If the name matches no ability.
        """
        if isinstance(value, Ability):
            return value
        key = str(value).strip().lower()
        for ability in cls:
            if key in (ability.value, ability.abbreviation):
                return ability
        msg = f"Unknown ability: {value!r}"
        raise ValueError(msg)


class BabProgression(StrEnum):
    """Base attack bonus progression tiers, best first."""

    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


class SaveType(StrEnum):
    """The three saving throws."""

    FORTITUDE = "fortitude"
    REFLEX = "reflex"
    WILL = "will"

    @property
    def key_ability(self) -> Ability:
        """Ability whose modifier is added to this save."""
        return {
            SaveType.FORTITUDE: Ability.CON,
            SaveType.REFLEX: Ability.DEX,
            SaveType.WILL: Ability.WIS,
        }[self]


class SaveProgression(StrEnum):
    """Saving throw progression tiers."""

    GOOD = "good"
    POOR = "poor"


class CasterArchetype(StrEnum):
    """Spellcasting archetypes selecting a slot formula.

    PREPARED_FULL: wizard-like arcane preparation.
    PREPARED_DIVINE: cleric/druid-like divine preparation.
    SPONTANEOUS: sorcerer-like spontaneous casting.
    DELAYED: paladin/ranger-like casting from 4th level.
    """

    PREPARED_FULL = "prepared-full"
    PREPARED_DIVINE = "prepared-divine"
    SPONTANEOUS = "spontaneous"
    DELAYED = "delayed"


class ItemCategory(StrEnum):
    """Equipment categories."""

    ARMOR = "armor"
    SHIELD = "shield"
    WEAPON = "weapon"
    GEAR = "gear"


class EncumbranceTier(StrEnum):
    """Carried-load tiers, lightest first."""

    UNENCUMBERED = "unencumbered"
    LIGHTLY_ENCUMBERED = "lightly-encumbered"
    HEAVILY_ENCUMBERED = "heavily-encumbered"


__all__ = [
    "Ability",
    "BabProgression",
    "SaveType",
    "SaveProgression",
    "CasterArchetype",
    "ItemCategory",
    "EncumbranceTier",
]

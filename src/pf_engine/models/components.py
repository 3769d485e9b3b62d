"""Ability score components.

An ability score is layered: a base value plus racial, item and enhancement
contributions. The total and its modifier are always derived, never stored,
so they cannot drift from their inputs.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from pf_engine.core.constants import MAX_ABILITY_SCORE, MIN_ABILITY_SCORE
from pf_engine.core.exceptions import ValidationError
from pf_engine.models.enums import Ability


def calculate_modifier(score: int) -> int:
    """Calculate the ability modifier from an ability score.

    The modifier is calculated as: (score - 10) // 2

    Args:
        score: The ability score total.

    Returns:
        The ability modifier.

    Example:
        >>> calculate_modifier(10)
        0
        >>> calculate_modifier(18)
        4
        >>> calculate_modifier(7)
        -2
    """
    return (score - 10) // 2


def resolve_ability(value: str | Ability) -> Ability:
    """Resolve an ability name, raising the engine's ValidationError.

    Args:
        value: Full name, abbreviation or Ability member.

    Returns:
        The matching Ability.

    Raises:
        ValidationError: If the name matches no ability.
    """
    try:
        return Ability.parse(value)
    except ValueError as exc:
        raise ValidationError(
            "Invalid ability",
            field_name="ability",
            invalid_value=value,
        ) from exc


class AbilityScore(BaseModel):
    """One ability score with its modifier contributions.

    Attributes:
        base: Rolled or bought score.
        racial: Racial adjustment.
        items: Bonus from worn items.
        enhancement: Enhancement bonus.

    Example:
        >>> score = AbilityScore(base=14, racial=2)
        >>> score.total, score.modifier
        (16, 3)
    """

    # Dumped totals and modifiers are derived; ignore them when reloading.
    model_config = ConfigDict(frozen=True, extra="ignore")

    base: Annotated[
        int, Field(ge=MIN_ABILITY_SCORE, le=MAX_ABILITY_SCORE, description="Base score")
    ] = 10
    racial: int = Field(default=0, description="Racial adjustment")
    items: int = Field(default=0, description="Item bonus")
    enhancement: int = Field(default=0, description="Enhancement bonus")

    @computed_field(description="base + racial + items + enhancement")
    @property
    def total(self) -> int:
        """Sum of base score and all contributions."""
        return self.base + self.racial + self.items + self.enhancement

    @computed_field(description="(total - 10) // 2")
    @property
    def modifier(self) -> int:
        """Modifier derived from the total."""
        return calculate_modifier(self.total)


class AbilityScoreBlock(BaseModel):
    """The six ability scores of a character.

    Plain integers are accepted and treated as base scores, so
    ``AbilityScoreBlock(strength=16)`` works alongside fully layered input.

    Example:
        >>> block = AbilityScoreBlock(strength=16, dexterity=AbilityScore(base=12, racial=2))
        >>> block.modifier(Ability.DEX)
        2
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: AbilityScore = Field(default_factory=AbilityScore)
    dexterity: AbilityScore = Field(default_factory=AbilityScore)
    constitution: AbilityScore = Field(default_factory=AbilityScore)
    intelligence: AbilityScore = Field(default_factory=AbilityScore)
    wisdom: AbilityScore = Field(default_factory=AbilityScore)
    charisma: AbilityScore = Field(default_factory=AbilityScore)

    @field_validator(
        "strength", "dexterity", "constitution", "intelligence", "wisdom", "charisma",
        mode="before",
    )
    @classmethod
    def coerce_plain_score(cls, value: Any) -> Any:
        """Treat a bare integer as a base score."""
        if isinstance(value, int) and not isinstance(value, bool):
            return AbilityScore(base=value)
        return value

    def get(self, ability: str | Ability) -> AbilityScore:
        """Get the layered score for an ability.

        Raises:
            ValidationError: If the ability name is invalid.
        """
        return getattr(self, resolve_ability(ability).value)

    def total(self, ability: str | Ability) -> int:
        """Get the total score for an ability."""
        return self.get(ability).total

    def modifier(self, ability: str | Ability) -> int:
        """Get the modifier for an ability."""
        return self.get(ability).modifier

    def modifiers(self) -> dict[Ability, int]:
        """Get all six modifiers keyed by ability."""
        return {ability: self.modifier(ability) for ability in Ability}

    def with_base(self, ability: str | Ability, base: int) -> AbilityScoreBlock:
        """Return a copy with one ability's base score replaced.

        The total is recomputed from the new base and the unchanged
        contributions.
        """
        resolved = resolve_ability(ability)
        current = self.get(resolved)
        updated = AbilityScore(
            base=base,
            racial=current.racial,
            items=current.items,
            enhancement=current.enhancement,
        )
        return self.model_copy(update={resolved.value: updated})


__all__ = [
    "AbilityScore",
    "AbilityScoreBlock",
    "calculate_modifier",
    "resolve_ability",
]

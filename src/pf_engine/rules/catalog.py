"""Rules catalog: read-only per-class rules data.

The catalog maps a class identifier to its hit die, attack-bonus tier, save
tiers, skill points per level and spellcasting archetype. It is immutable
once built and safe to share across concurrent computations.

The built-in core catalog covers the eleven core-rulebook classes. A JSON
file with the same shape can replace it through
``PF_ENGINE_RULES_CATALOG_PATH``.

Example:
    >>> catalog = core_catalog()
    >>> catalog.get_class("rogue").skill_points_per_level
    8
    >>> catalog.class_level("wizard", 3).hit_die
    6
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from pf_engine.core.config import get_settings
from pf_engine.core.exceptions import CatalogError, NotFoundError
from pf_engine.core.logging import get_logger
from pf_engine.models.character import CharacterClassLevel, SaveProgressions
from pf_engine.models.enums import Ability, BabProgression, CasterArchetype, SaveProgression


logger = get_logger(__name__)


class ClassRules(BaseModel):
    """Rules data for one class.

    Attributes:
        class_id: Catalog key (lowercase, e.g. 'fighter').
        name: Display name.
        hit_die: Hit die faces.
        bab_progression: Base attack bonus tier.
        saves: Saving throw tiers.
        skill_points_per_level: Base skill points per level.
        spellcasting: Caster archetype, or None for non-casters.
        casting_ability: Ability driving bonus spell slots.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    class_id: str = Field(min_length=1, max_length=50)
    name: str = Field(min_length=1, max_length=100)
    hit_die: Annotated[int, Field(ge=4, le=12)]
    bab_progression: BabProgression
    saves: SaveProgressions = Field(default_factory=SaveProgressions)
    skill_points_per_level: Annotated[int, Field(ge=0)] = 2
    spellcasting: CasterArchetype | None = None
    casting_ability: Ability | None = None

    @model_validator(mode="after")
    def validate_casting_ability(self) -> ClassRules:
        """A casting class must name its casting ability."""
        if self.spellcasting is not None and self.casting_ability is None:
            msg = f"class {self.class_id!r} casts spells but has no casting_ability"
            raise ValueError(msg)
        return self

    @property
    def is_caster(self) -> bool:
        """Whether this class has a spell-slot table."""
        return self.spellcasting is not None


class CatalogDocument(BaseModel):
    """On-disk shape of a JSON rules catalog."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    classes: list[ClassRules] = Field(min_length=1)


class RulesCatalog:
    """Immutable lookup of class rules keyed by class identifier.

    Identifiers are matched case-insensitively.
    """

    def __init__(self, classes: Mapping[str, ClassRules] | list[ClassRules]) -> None:
        """Build the catalog.

        Args:
            classes: Class rules, as a list or keyed mapping.

        Raises:
            CatalogError: If two entries share a class identifier.
        """
        entries = list(classes.values()) if isinstance(classes, Mapping) else list(classes)
        table: dict[str, ClassRules] = {}
        for rules in entries:
            key = rules.class_id.lower()
            if key in table:
                raise CatalogError(
                    f"Duplicate class in rules catalog: {rules.class_id}",
                    details={"class_id": rules.class_id},
                )
            table[key] = rules
        self._classes: Mapping[str, ClassRules] = MappingProxyType(table)

    def __contains__(self, class_id: object) -> bool:
        return isinstance(class_id, str) and class_id.lower() in self._classes

    def __iter__(self) -> Iterator[ClassRules]:
        return iter(self._classes.values())

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return f"RulesCatalog(classes={sorted(self._classes)!r})"

    def class_ids(self) -> list[str]:
        """Get all class identifiers, sorted."""
        return sorted(self._classes)

    def get_class(self, class_id: str) -> ClassRules:
        """Look up the rules for a class.

        Args:
            class_id: Class identifier.

        Returns:
            The class rules.

        Raises:
            NotFoundError: If the class is not in the catalog.
        """
        rules = self._classes.get(class_id.lower())
        if rules is None:
            raise NotFoundError(
                f"Unknown class: {class_id}",
                resource="class",
                key=class_id,
            )
        return rules

    def class_level(self, class_id: str, level: int) -> CharacterClassLevel:
        """Build a class-level entry from catalog data.

        Args:
            class_id: Class identifier.
            level: Levels taken in the class.

        Returns:
            A CharacterClassLevel carrying the catalog's hit die and tiers.

        Raises:
            NotFoundError: If the class is not in the catalog.
        """
        rules = self.get_class(class_id)
        return CharacterClassLevel(
            class_id=rules.class_id,
            level=level,
            hit_die=rules.hit_die,
            bab_progression=rules.bab_progression,
            saves=rules.saves,
            skill_points_per_level=rules.skill_points_per_level,
        )


# =============================================================================
# Core Rulebook Classes
# =============================================================================

_GOOD = SaveProgression.GOOD
_POOR = SaveProgression.POOR

CORE_CLASSES: tuple[ClassRules, ...] = (
    ClassRules(
        class_id="barbarian",
        name="Barbarian",
        hit_die=12,
        bab_progression=BabProgression.GOOD,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_POOR, will=_POOR),
        skill_points_per_level=4,
    ),
    ClassRules(
        class_id="bard",
        name="Bard",
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(fortitude=_POOR, reflex=_GOOD, will=_GOOD),
        skill_points_per_level=6,
        spellcasting=CasterArchetype.SPONTANEOUS,
        casting_ability=Ability.CHA,
    ),
    ClassRules(
        class_id="cleric",
        name="Cleric",
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_POOR, will=_GOOD),
        skill_points_per_level=2,
        spellcasting=CasterArchetype.PREPARED_DIVINE,
        casting_ability=Ability.WIS,
    ),
    ClassRules(
        class_id="druid",
        name="Druid",
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_POOR, will=_GOOD),
        skill_points_per_level=4,
        spellcasting=CasterArchetype.PREPARED_DIVINE,
        casting_ability=Ability.WIS,
    ),
    ClassRules(
        class_id="fighter",
        name="Fighter",
        hit_die=10,
        bab_progression=BabProgression.GOOD,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_POOR, will=_POOR),
        skill_points_per_level=2,
    ),
    ClassRules(
        class_id="monk",
        name="Monk",
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_GOOD, will=_GOOD),
        skill_points_per_level=4,
    ),
    ClassRules(
        class_id="paladin",
        name="Paladin",
        hit_die=10,
        bab_progression=BabProgression.GOOD,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_POOR, will=_GOOD),
        skill_points_per_level=2,
        spellcasting=CasterArchetype.DELAYED,
        casting_ability=Ability.CHA,
    ),
    ClassRules(
        class_id="ranger",
        name="Ranger",
        hit_die=10,
        bab_progression=BabProgression.GOOD,
        saves=SaveProgressions(fortitude=_GOOD, reflex=_GOOD, will=_POOR),
        skill_points_per_level=6,
        spellcasting=CasterArchetype.DELAYED,
        casting_ability=Ability.WIS,
    ),
    ClassRules(
        class_id="rogue",
        name="Rogue",
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(fortitude=_POOR, reflex=_GOOD, will=_POOR),
        skill_points_per_level=8,
    ),
    ClassRules(
        class_id="sorcerer",
        name="Sorcerer",
        hit_die=6,
        bab_progression=BabProgression.POOR,
        saves=SaveProgressions(fortitude=_POOR, reflex=_POOR, will=_GOOD),
        skill_points_per_level=2,
        spellcasting=CasterArchetype.SPONTANEOUS,
        casting_ability=Ability.CHA,
    ),
    ClassRules(
        class_id="wizard",
        name="Wizard",
        hit_die=6,
        bab_progression=BabProgression.POOR,
        saves=SaveProgressions(fortitude=_POOR, reflex=_POOR, will=_GOOD),
        skill_points_per_level=2,
        spellcasting=CasterArchetype.PREPARED_FULL,
        casting_ability=Ability.INT,
    ),
)


def core_catalog() -> RulesCatalog:
    """Build a catalog of the core-rulebook classes."""
    return RulesCatalog(list(CORE_CLASSES))


def load_catalog(path: Path | str) -> RulesCatalog:
    """Load a rules catalog from a JSON file.

    The file holds ``{"classes": [ ...ClassRules... ]}``.

    Args:
        path: Path to the JSON catalog.

    Returns:
        The loaded catalog.

    Raises:
        CatalogError: If the file cannot be read or fails validation.
    """
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(
            f"Cannot read rules catalog: {exc}",
            source_file=str(source),
        ) from exc

    try:
        document = CatalogDocument.model_validate_json(raw)
    except PydanticValidationError as exc:
        raise CatalogError(
            f"Invalid rules catalog: {exc.error_count()} validation error(s)",
            source_file=str(source),
            details={"errors": [e["msg"] for e in exc.errors()]},
        ) from exc

    catalog = RulesCatalog(document.classes)
    logger.info("Rules catalog loaded", source_file=str(source), classes=len(catalog))
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> RulesCatalog:
    """Get the process-wide rules catalog.

    Uses the configured catalog file when one is set, otherwise the
    built-in core classes.

    Raises:
        CatalogError: If the configured file is unreadable or invalid.
    """
    catalog_path = get_settings().rules.catalog_path
    if catalog_path is not None:
        return load_catalog(catalog_path)
    return core_catalog()


def clear_catalog_cache() -> None:
    """Clear the catalog cache, forcing a reload on next access."""
    get_catalog.cache_clear()


__all__ = [
    "ClassRules",
    "CatalogDocument",
    "RulesCatalog",
    "CORE_CLASSES",
    "core_catalog",
    "load_catalog",
    "get_catalog",
    "clear_catalog_cache",
]

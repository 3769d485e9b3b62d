"""Tests for the rules catalog."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from pf_engine.core.exceptions import CatalogError, NotFoundError
from pf_engine.models.enums import Ability, BabProgression, CasterArchetype, SaveProgression
from pf_engine.rules.catalog import (
    CORE_CLASSES,
    ClassRules,
    RulesCatalog,
    core_catalog,
    get_catalog,
    load_catalog,
)


def _write_catalog(path: Path, classes: list[dict]) -> Path:
    path.write_text(json.dumps({"classes": classes}), encoding="utf-8")
    return path


ALCHEMIST = {
    "class_id": "alchemist",
    "name": "Alchemist",
    "hit_die": 8,
    "bab_progression": "moderate",
    "saves": {"fortitude": "good", "reflex": "good", "will": "poor"},
    "skill_points_per_level": 4,
    "spellcasting": "delayed",
    "casting_ability": "intelligence",
}


class TestClassRules:
    """Tests for ClassRules validation."""

    def test_caster_requires_casting_ability(self) -> None:
        """Test that a casting class must name its ability."""
        with pytest.raises(PydanticValidationError, match="casting_ability"):
            ClassRules(
                class_id="witch",
                name="Witch",
                hit_die=6,
                bab_progression="poor",
                spellcasting="prepared-full",
            )

    def test_non_caster(self) -> None:
        """Test that non-casters report is_caster False."""
        rules = ClassRules(class_id="brawler", name="Brawler", hit_die=10, bab_progression="good")
        assert rules.is_caster is False


class TestCoreCatalog:
    """Tests for the built-in core classes."""

    def test_has_eleven_classes(self, catalog: RulesCatalog) -> None:
        """Test that every core class is present."""
        assert len(catalog) == len(CORE_CLASSES) == 11
        assert catalog.class_ids()[0] == "barbarian"

    @pytest.mark.parametrize(
        ("class_id", "hit_die", "bab", "skills"),
        [
            ("barbarian", 12, BabProgression.GOOD, 4),
            ("cleric", 8, BabProgression.MODERATE, 2),
            ("fighter", 10, BabProgression.GOOD, 2),
            ("rogue", 8, BabProgression.MODERATE, 8),
            ("wizard", 6, BabProgression.POOR, 2),
        ],
    )
    def test_class_data(
        self,
        catalog: RulesCatalog,
        class_id: str,
        hit_die: int,
        bab: BabProgression,
        skills: int,
    ) -> None:
        """Test hit die, attack tier and skill points of core classes."""
        rules = catalog.get_class(class_id)
        assert rules.hit_die == hit_die
        assert rules.bab_progression is bab
        assert rules.skill_points_per_level == skills

    @pytest.mark.parametrize(
        ("class_id", "archetype", "ability"),
        [
            ("wizard", CasterArchetype.PREPARED_FULL, Ability.INT),
            ("cleric", CasterArchetype.PREPARED_DIVINE, Ability.WIS),
            ("sorcerer", CasterArchetype.SPONTANEOUS, Ability.CHA),
            ("paladin", CasterArchetype.DELAYED, Ability.CHA),
            ("fighter", None, None),
        ],
    )
    def test_spellcasting(
        self,
        catalog: RulesCatalog,
        class_id: str,
        archetype: CasterArchetype | None,
        ability: Ability | None,
    ) -> None:
        """Test the archetype and casting ability of core classes."""
        rules = catalog.get_class(class_id)
        assert rules.spellcasting == archetype
        assert rules.casting_ability == ability

    def test_case_insensitive_lookup(self, catalog: RulesCatalog) -> None:
        """Test that identifiers match regardless of case."""
        assert catalog.get_class("Fighter").class_id == "fighter"
        assert "WIZARD" in catalog
        assert 42 not in catalog

    def test_unknown_class(self, catalog: RulesCatalog) -> None:
        """Test that unknown classes raise NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            catalog.get_class("alchemist")

        assert exc_info.value.details == {"resource": "class", "key": "alchemist"}

    def test_class_level(self, catalog: RulesCatalog) -> None:
        """Test building a class-level entry from catalog data."""
        entry = catalog.class_level("monk", 4)

        assert entry.level == 4
        assert entry.hit_die == 8
        assert entry.saves.will == SaveProgression.GOOD
        assert entry.skill_points_per_level == 4

    def test_duplicates_rejected(self) -> None:
        """Test that a catalog cannot contain one class twice."""
        with pytest.raises(CatalogError, match="Duplicate class"):
            RulesCatalog([CORE_CLASSES[0], CORE_CLASSES[0]])

    def test_mapping_input(self) -> None:
        """Test that a keyed mapping is accepted."""
        catalog = RulesCatalog({rules.class_id: rules for rules in CORE_CLASSES[:2]})
        assert catalog.class_ids() == ["barbarian", "bard"]

    def test_iteration(self, catalog: RulesCatalog) -> None:
        """Test that iteration yields class rules."""
        assert {rules.class_id for rules in catalog} == set(catalog.class_ids())


class TestLoadCatalog:
    """Tests for loading catalogs from JSON files."""

    def test_load_valid_file(self, tmp_path: Path) -> None:
        """Test loading a well-formed catalog."""
        path = _write_catalog(tmp_path / "classes.json", [ALCHEMIST])

        catalog = load_catalog(path)

        assert catalog.class_ids() == ["alchemist"]
        assert catalog.get_class("alchemist").casting_ability is Ability.INT

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that an unreadable file raises CatalogError."""
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(tmp_path / "missing.json")

        assert exc_info.value.details["source_file"].endswith("missing.json")

    def test_invalid_document(self, tmp_path: Path) -> None:
        """Test that schema violations raise CatalogError."""
        broken = {**ALCHEMIST, "hit_die": 40}
        path = _write_catalog(tmp_path / "classes.json", [broken])

        with pytest.raises(CatalogError, match="Invalid rules catalog"):
            load_catalog(path)

    def test_malformed_json(self, tmp_path: Path) -> None:
        """Test that malformed JSON raises CatalogError."""
        path = tmp_path / "classes.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError):
            load_catalog(path)


class TestGetCatalog:
    """Tests for the process-wide catalog."""

    def test_defaults_to_core(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the core catalog is used without configuration."""
        monkeypatch.chdir(tmp_path)

        assert get_catalog().class_ids() == core_catalog().class_ids()

    def test_cached(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the catalog is built once."""
        monkeypatch.chdir(tmp_path)

        assert get_catalog() is get_catalog()

    def test_configured_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the configured catalog file replaces the core classes."""
        path = _write_catalog(tmp_path / "classes.json", [ALCHEMIST])
        monkeypatch.setenv("PF_ENGINE_RULES_CATALOG_PATH", str(path))
        monkeypatch.chdir(tmp_path)

        assert get_catalog().class_ids() == ["alchemist"]

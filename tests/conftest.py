"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the progression engine test suite.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest

from pf_engine.models import (
    AbilityScoreBlock,
    BabProgression,
    CharacterClassLevel,
    CharacterSnapshot,
    EquippedItem,
    ItemCategory,
    SaveProgression,
    SaveProgressions,
)
from pf_engine.rules import RulesCatalog, core_catalog


if TYPE_CHECKING:
    from collections.abc import Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_cached_state() -> Generator[None, None, None]:
    """Reset the settings and catalog caches before and after each test."""
    from pf_engine.core.config import clear_settings_cache
    from pf_engine.rules.catalog import clear_catalog_cache

    clear_settings_cache()
    clear_catalog_cache()
    yield
    clear_settings_cache()
    clear_catalog_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "PF_ENGINE_DEBUG": "true",
        "PF_ENGINE_LOG_LEVEL": "DEBUG",
        "PF_ENGINE_JSON_LOGS": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed timestamp for advancement records."""
    return datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def sample_abilities() -> AbilityScoreBlock:
    """Provide a fighter-leaning ability block.

    Modifiers: STR +3, DEX +2, CON +2, INT 0, WIS +1, CHA -1.
    """
    return AbilityScoreBlock(
        strength=16,
        dexterity=14,
        constitution=15,
        intelligence=10,
        wisdom=12,
        charisma=8,
    )


@pytest.fixture
def catalog() -> RulesCatalog:
    """Provide the built-in core catalog."""
    return core_catalog()


@pytest.fixture
def fighter_level() -> CharacterClassLevel:
    """Fighter 5: d10, good BAB, good fortitude."""
    return CharacterClassLevel(
        class_id="fighter",
        level=5,
        hit_die=10,
        bab_progression=BabProgression.GOOD,
        saves=SaveProgressions(fortitude=SaveProgression.GOOD),
        skill_points_per_level=2,
    )


@pytest.fixture
def rogue_level() -> CharacterClassLevel:
    """Rogue 3: d8, moderate BAB, good reflex."""
    return CharacterClassLevel(
        class_id="rogue",
        level=3,
        hit_die=8,
        bab_progression=BabProgression.MODERATE,
        saves=SaveProgressions(reflex=SaveProgression.GOOD),
        skill_points_per_level=8,
    )


@pytest.fixture
def wizard_level() -> CharacterClassLevel:
    """Wizard 2: d6, poor BAB, good will."""
    return CharacterClassLevel(
        class_id="wizard",
        level=2,
        hit_die=6,
        bab_progression=BabProgression.POOR,
        saves=SaveProgressions(will=SaveProgression.GOOD),
        skill_points_per_level=2,
    )


@pytest.fixture
def multiclass_levels(
    fighter_level: CharacterClassLevel,
    rogue_level: CharacterClassLevel,
    wizard_level: CharacterClassLevel,
) -> list[CharacterClassLevel]:
    """Fighter 5 / Rogue 3 / Wizard 2."""
    return [fighter_level, rogue_level, wizard_level]


@pytest.fixture
def chain_mail() -> EquippedItem:
    """Equipped medium armor: +6, max dex 2, penalty -5."""
    return EquippedItem(
        item_id="chainmail",
        name="Chainmail",
        category=ItemCategory.ARMOR,
        weight=40,
        equipped=True,
        armor_bonus=6,
        max_dex_bonus=2,
        armor_check_penalty=-5,
    )


@pytest.fixture
def heavy_shield() -> EquippedItem:
    """Equipped heavy steel shield: +2, penalty -2."""
    return EquippedItem(
        item_id="heavy-steel-shield",
        name="Heavy Steel Shield",
        category=ItemCategory.SHIELD,
        weight=15,
        equipped=True,
        armor_bonus=2,
        armor_check_penalty=-2,
    )


@pytest.fixture
def longsword() -> EquippedItem:
    """Equipped longsword dealing 1d8."""
    return EquippedItem(
        item_id="longsword",
        name="Longsword",
        category=ItemCategory.WEAPON,
        weight=4,
        equipped=True,
        damage="1d8",
    )


@pytest.fixture
def sample_snapshot(
    sample_abilities: AbilityScoreBlock,
    multiclass_levels: list[CharacterClassLevel],
    chain_mail: EquippedItem,
    heavy_shield: EquippedItem,
    longsword: EquippedItem,
) -> CharacterSnapshot:
    """A level 10 Fighter/Rogue/Wizard carrying armor, shield and sword."""
    return CharacterSnapshot(
        abilities=sample_abilities,
        classes=multiclass_levels,
        equipment=[chain_mail, heavy_shield, longsword],
        experience=45000,
    )


@pytest.fixture
def fighter_snapshot(
    sample_abilities: AbilityScoreBlock,
    catalog: RulesCatalog,
) -> CharacterSnapshot:
    """A level 1 fighter from the core catalog with 12 hit points."""
    return CharacterSnapshot(
        abilities=sample_abilities,
        classes=[catalog.class_level("fighter", 1)],
        hit_points={"current": 12, "max": 12},
        skill_points={"remaining": 2, "used": 0},
    )

"""Integration tests for character progression.

Tests the complete flow: build from the catalog, level up, improve
abilities, multiclass, cast and rest, and read the derived statistics.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from pf_engine.core.exceptions import NotFoundError, ValidationError
from pf_engine.engine import (
    apply_ability_score_improvement,
    cast_spell,
    compute_derived_stats,
    level_up,
    preview_advancement,
    rest_and_regain_slots,
    set_level,
)
from pf_engine.engine.advancement import ABILITY_IMPROVEMENT_LABEL
from pf_engine.models import Ability, CharacterSnapshot
from pf_engine.rules import RulesCatalog


class TestFighterProgression:
    """Test a single-class fighter from level 1 to 4."""

    def test_level_one_to_four(
        self,
        fighter_snapshot: CharacterSnapshot,
        catalog: RulesCatalog,
        fixed_now: datetime,
    ) -> None:
        """Level up, jump to 4, improve strength, then derive stats."""
        second = level_up(fighter_snapshot, now=fixed_now).snapshot
        assert second.total_level == 2
        assert second.hit_points.max == 24
        assert second.skill_points.remaining == 4

        result = set_level(second, 4, now=fixed_now)
        fourth = result.snapshot
        assert [r.level for r in result.records] == [3, 4]
        assert len(fourth.level_history) == 3
        assert fourth.level_history[-1].abilities_gained == (ABILITY_IMPROVEMENT_LABEL,)
        assert fourth.hit_points.max == 48

        improved = apply_ability_score_improvement(fourth, 4, "STR", now=fixed_now)
        assert improved.abilities.total(Ability.STR) == 17
        assert fighter_snapshot.abilities.total(Ability.STR) == 16

        stats = compute_derived_stats(improved, catalog)
        assert stats.base_attack_bonus.total == 4
        assert stats.saving_throws.total.fortitude == 2 + 2 + 2
        assert stats.hit_points.max == 48
        assert stats.hit_points.current == 48
        assert stats.skill_points.total == 8
        assert stats.skill_points.remaining == 8
        assert stats.spell_slots == {}

    def test_preview_next_level(self, fighter_snapshot: CharacterSnapshot) -> None:
        """Level 2 offers no milestones; level 5 offers a bonus feat."""
        assert preview_advancement(fighter_snapshot).bonus_feat is False

        fourth = set_level(fighter_snapshot, 4).snapshot
        options = preview_advancement(fourth)
        assert options.level == 5
        assert options.bonus_feat is True

    def test_level_twenty_is_final(
        self, fighter_snapshot: CharacterSnapshot, catalog: RulesCatalog
    ) -> None:
        """A level 20 character cannot advance further."""
        capstone = set_level(fighter_snapshot, 20).snapshot

        assert capstone.total_level == 20
        assert len(capstone.level_history) == 19
        assert compute_derived_stats(capstone, catalog).base_attack_bonus.total == 20
        with pytest.raises(ValidationError):
            level_up(capstone)
        with pytest.raises(ValidationError):
            preview_advancement(capstone)


class TestMulticlassCaster:
    """Test a fighter who takes wizard levels and casts spells."""

    @pytest.fixture
    def fighter_wizard(
        self, fighter_snapshot: CharacterSnapshot, catalog: RulesCatalog
    ) -> CharacterSnapshot:
        """Fighter 1 / Wizard 1."""
        return CharacterSnapshot(
            abilities=fighter_snapshot.abilities,
            classes=[catalog.class_level("fighter", 1), catalog.class_level("wizard", 1)],
            hit_points={"current": 20, "max": 20},
        )

    def test_level_into_unknown_class(self, fighter_snapshot: CharacterSnapshot) -> None:
        """Advancing a class the character does not have is reported."""
        with pytest.raises(NotFoundError):
            level_up(fighter_snapshot, class_id="wizard")

    def test_wizard_level_and_spells(
        self, fighter_wizard: CharacterSnapshot, catalog: RulesCatalog
    ) -> None:
        """Take a second wizard level, then cast until the slots run out."""
        result = level_up(fighter_wizard, class_id="wizard")
        snapshot = result.snapshot
        assert snapshot.get_class("wizard").level == 2
        assert snapshot.get_class("fighter").level == 1
        assert result.hit_points_gained == (10 + 2) + (6 + 2)

        stats = compute_derived_stats(snapshot, catalog)
        assert stats.base_attack_bonus.per_class == {"fighter": 1, "wizard": 1}
        table = stats.spell_slots["wizard"]
        assert table.remaining(1) == 2

        table = cast_spell(cast_spell(table, 1), 1)
        assert table.remaining(1) == 0
        with pytest.raises(ValidationError, match="No slots available"):
            cast_spell(table, 1)

        table = cast_spell(table, 0)
        assert table.remaining(0) == -1

        rested = rest_and_regain_slots(table)
        assert rested.remaining(1) == 2
        assert all(entry.used == 0 for entry in rested.entries)

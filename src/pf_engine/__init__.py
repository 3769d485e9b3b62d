"""pf_engine - Pathfinder character progression engine.

Computes combat statistics, resource pools and load state from a typed
character snapshot and a read-only rules catalog. Every operation is a
pure function over frozen pydantic models.

Example:
    >>> from pf_engine import CharacterSnapshot, AbilityScoreBlock, core_catalog
    >>> from pf_engine import compute_derived_stats, level_up
    >>>
    >>> catalog = core_catalog()
    >>> hero = CharacterSnapshot(
    ...     abilities=AbilityScoreBlock(strength=16, constitution=14),
    ...     classes=[catalog.class_level("fighter", 1)],
    ... )
    >>> hero = level_up(hero, class_id="fighter").snapshot
    >>> compute_derived_stats(hero, catalog).base_attack_bonus.total
    2

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas for abilities, classes, items and snapshots.
    rules: The rules catalog of per-class data.
    engine: Leveling, multiclass, advancement, spells, equipment and stats.
"""

from __future__ import annotations

# Core
from pf_engine.core.config import Settings, get_settings
from pf_engine.core.exceptions import (
    DomainInvariantError,
    NotFoundError,
    PfEngineError,
    ValidationError,
)
from pf_engine.core.logging import configure_logging, get_logger

# Models
from pf_engine.models import (
    Ability,
    AbilityScoreBlock,
    CharacterClassLevel,
    CharacterSnapshot,
    EquippedItem,
)

# Rules
from pf_engine.rules import RulesCatalog, core_catalog, get_catalog

# Engine
from pf_engine.engine import (
    DerivedStats,
    calculate_spell_slots,
    compute_derived_stats,
    level_up,
    set_level,
)


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "PfEngineError",
    "ValidationError",
    "NotFoundError",
    "DomainInvariantError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Ability",
    "AbilityScoreBlock",
    "CharacterClassLevel",
    "CharacterSnapshot",
    "EquippedItem",
    # Rules
    "RulesCatalog",
    "core_catalog",
    "get_catalog",
    # Engine
    "DerivedStats",
    "calculate_spell_slots",
    "compute_derived_stats",
    "level_up",
    "set_level",
]

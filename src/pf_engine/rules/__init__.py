"""Read-only rules data consumed by the engine."""

from __future__ import annotations

from pf_engine.rules.catalog import (
    CORE_CLASSES,
    ClassRules,
    RulesCatalog,
    clear_catalog_cache,
    core_catalog,
    get_catalog,
    load_catalog,
)


__all__ = [
    "CORE_CLASSES",
    "ClassRules",
    "RulesCatalog",
    "clear_catalog_cache",
    "core_catalog",
    "get_catalog",
    "load_catalog",
]

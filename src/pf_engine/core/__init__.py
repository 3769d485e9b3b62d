"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        PfEngineError: Base exception for all engine errors.
        ValidationError: Rules constraint violations.
        NotFoundError: Catalog or slot-table lookup misses.
        DomainInvariantError: Broken invariants (caller contract violations).
        ConfigurationError: Configuration-related errors.
        CatalogError: Unreadable or invalid rules catalogs.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
"""

from __future__ import annotations

from pf_engine.core.config import (
    RulesSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from pf_engine.core.exceptions import (
    CatalogError,
    ConfigurationError,
    DomainInvariantError,
    NotFoundError,
    PfEngineError,
    ValidationError,
)
from pf_engine.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Exceptions
    "PfEngineError",
    "ValidationError",
    "NotFoundError",
    "DomainInvariantError",
    "ConfigurationError",
    "CatalogError",
    # Configuration
    "Settings",
    "RulesSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
]

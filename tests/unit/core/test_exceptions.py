"""Tests for the exception hierarchy."""

from __future__ import annotations

import pytest

from pf_engine.core.exceptions import (
    CatalogError,
    ConfigurationError,
    DomainInvariantError,
    NotFoundError,
    PfEngineError,
    ValidationError,
)


class TestPfEngineError:
    """Tests for the base PfEngineError exception."""

    def test_basic_message(self) -> None:
        """Test exception with basic message."""
        exc = PfEngineError("Test error message")
        assert exc.message == "Test error message"
        assert exc.details == {}
        assert str(exc) == "Test error message"

    def test_with_details(self) -> None:
        """Test exception with additional details."""
        exc = PfEngineError("Test error", details={"key": "value", "count": 42})
        assert exc.details == {"key": "value", "count": 42}
        assert "key='value'" in str(exc)
        assert "count=42" in str(exc)

    def test_repr(self) -> None:
        """Test exception repr output."""
        repr_str = repr(PfEngineError("Test", details={"x": 1}))
        assert "PfEngineError" in repr_str
        assert "Test" in repr_str
        assert "x" in repr_str


class TestRulesExceptions:
    """Tests for rules computation exceptions."""

    def test_validation_error_with_field(self) -> None:
        """Test ValidationError carries field and value."""
        exc = ValidationError("Level must be between 1 and 20", field_name="level", invalid_value=21)
        assert exc.details["field_name"] == "level"
        assert exc.details["invalid_value"] == 21

    def test_validation_error_zero_value_kept(self) -> None:
        """Test that a falsy invalid value is still recorded."""
        exc = ValidationError("bad", field_name="level", invalid_value=0)
        assert exc.details["invalid_value"] == 0

    def test_not_found_error(self) -> None:
        """Test NotFoundError carries resource and key."""
        exc = NotFoundError("Unknown class: alchemist", resource="class", key="alchemist")
        assert exc.details == {"resource": "class", "key": "alchemist"}

    def test_domain_invariant_error(self) -> None:
        """Test DomainInvariantError names the invariant."""
        exc = DomainInvariantError("broken", invariant="skill_points_used")
        assert exc.details["invariant"] == "skill_points_used"

    @pytest.mark.parametrize(
        "exc",
        [
            ValidationError("x"),
            NotFoundError("x"),
            DomainInvariantError("x"),
            ConfigurationError("x"),
        ],
    )
    def test_inheritance(self, exc: PfEngineError) -> None:
        """Test every engine exception derives from PfEngineError."""
        assert isinstance(exc, PfEngineError)
        assert isinstance(exc, Exception)


class TestConfigurationExceptions:
    """Tests for configuration exceptions."""

    def test_configuration_error_with_key(self) -> None:
        """Test ConfigurationError with config key."""
        exc = ConfigurationError("Invalid", config_key="log_level")
        assert exc.details["config_key"] == "log_level"

    def test_catalog_error(self) -> None:
        """Test CatalogError records the source file and catalog key."""
        exc = CatalogError("Unreadable", source_file="classes.json")
        assert isinstance(exc, ConfigurationError)
        assert exc.details["source_file"] == "classes.json"
        assert exc.details["config_key"] == "catalog_path"

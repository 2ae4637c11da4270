"""Unit tests for domain enums."""

from wirebox_di.domain.enums import BindingKind, Lifetime, ParameterKind


class TestLifetime:
    """Test cases for the Lifetime enum."""

    def test_lifetime_values(self):
        """Test that lifetimes have the expected string values."""
        assert Lifetime.TRANSIENT.value == "transient"
        assert Lifetime.SHARED.value == "shared"

    def test_lifetime_string_representation(self):
        """Test that str() returns the value."""
        assert str(Lifetime.SHARED) == "shared"

    def test_lifetime_is_string_enum(self):
        """Test that lifetimes compare equal to their values."""
        assert Lifetime.TRANSIENT == "transient"
        assert Lifetime("shared") is Lifetime.SHARED


class TestBindingKind:
    """Test cases for the BindingKind enum."""

    def test_binding_kinds(self):
        """Test the three binding kinds."""
        assert {kind.value for kind in BindingKind} == {"instance", "factory", "implicit"}

    def test_binding_kind_string_representation(self):
        """Test that str() returns the value."""
        assert str(BindingKind.FACTORY) == "factory"


class TestParameterKind:
    """Test cases for the ParameterKind enum."""

    def test_parameter_kinds_cover_python_calling_conventions(self):
        """Test that every Python parameter kind has a counterpart."""
        assert len(ParameterKind) == 5
        assert str(ParameterKind.VAR_POSITIONAL) == "var_positional"

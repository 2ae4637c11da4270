"""Unit tests for identifier helpers."""

import collections

import pytest

from wirebox_di.domain.identifiers import describe, identify


def module_function():
    pass


class Service:
    def method(self):
        pass

    @classmethod
    def build(cls):
        return cls()

    def __call__(self):
        pass


class TestIdentify:
    """Test cases for identify()."""

    def test_string_is_returned_unchanged(self):
        """Test that string identifiers are not normalized."""
        assert identify("db") == "db"
        assert identify("Some.Name") == "Some.Name"

    def test_class_maps_to_module_and_qualified_name(self):
        """Test that classes map to module.QualifiedName."""
        assert identify(collections.OrderedDict) == "collections.OrderedDict"
        assert identify(Service) == f"{__name__}.Service"

    def test_local_class_keeps_qualified_name(self):
        """Test that local classes include their qualified name."""

        class Local:
            pass

        assert identify(Local) == f"{__name__}.{Local.__qualname__}"

    def test_other_values_are_rejected(self):
        """Test that non-string, non-class keys raise TypeError."""
        with pytest.raises(TypeError):
            identify(42)


class TestDescribe:
    """Test cases for describe()."""

    def test_function(self):
        """Test that functions are named module.qualname."""
        assert describe(module_function) == f"{__name__}.module_function"

    def test_bound_method(self):
        """Test that bound methods are named Class::method."""
        assert describe(Service().method) == f"{__name__}.Service::method"

    def test_class_method(self):
        """Test that class methods are named after their class."""
        assert describe(Service.build) == f"{__name__}.Service::build"

    def test_callable_object(self):
        """Test that callable objects are named Class::__call__."""
        assert describe(Service()) == f"{__name__}.Service::__call__"

    def test_class(self):
        """Test that classes are named by identifier."""
        assert describe(Service) == f"{__name__}.Service"

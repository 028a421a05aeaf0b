"""Tests for the concrete conversion strategies."""

import enum
from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal

import pytest

from bean_bind import (
    NOT_CONVERTED,
    ConstructorStrategy,
    ConversionError,
    ConversionRegistry,
    FactoryMethodStrategy,
    ParseStrategy,
    RegistryStrategy,
    ValueOfStrategy,
)


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class Version:
    def __init__(self, major, minor):
        self.major = major
        self.minor = minor

    def __eq__(self, other):
        return isinstance(other, Version) and (other.major, other.minor) == (self.major, self.minor)

    @staticmethod
    def value_of(text: str) -> "Version":
        major, minor = text.split(".")
        return Version(int(major), int(minor))

    @classmethod
    def parse(cls, text: str) -> "Version":
        return cls(0, 0)


class Celsius:
    def __init__(self, degrees):
        self.degrees = degrees

    @classmethod
    def from_value(cls, value):
        return "not a Celsius"

    @classmethod
    def from_string(cls, text: str) -> "Celsius":
        return cls(float(text.rstrip("C")))


class Misdeclared:
    @staticmethod
    def parse(text: str) -> str:
        raise AssertionError("declared to return another type")

    def from_string(self, text):
        raise AssertionError("instance method is not a factory")


class Shape(ABC):
    @abstractmethod
    def area(self): ...


class TestRegistryStrategy:
    """Explicit converters."""

    def test_uses_exact_pair(self):
        registry = ConversionRegistry({(str, int): lambda s: 42})
        strategy = RegistryStrategy(registry)

        assert strategy.convert("fish", int) == 42
        assert strategy.convert(b"fish", int) is NOT_CONVERTED

    def test_fault_is_wrapped(self):
        registry = ConversionRegistry({(str, int): int})
        with pytest.raises(ConversionError) as exc_info:
            RegistryStrategy(registry).convert("fish", int)

        assert exc_info.value.value_type is str
        assert exc_info.value.param_type is int
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_sees_later_registrations(self):
        registry = ConversionRegistry()
        strategy = RegistryStrategy(registry)
        registry.register(str, float, float)

        assert strategy.convert("1.5", float) == 1.5


class TestValueOfStrategy:
    """value_of-style factories and enum names."""

    def test_enum_by_name(self):
        assert ValueOfStrategy().convert("GREEN", Color) is Color.GREEN

    def test_static_factory(self):
        assert ValueOfStrategy().convert("1.2", Version) == Version(1, 2)

    def test_factory_fault(self):
        with pytest.raises(ConversionError) as exc_info:
            ValueOfStrategy().convert("garbage", Version)
        assert exc_info.value.strategy == "value_of"

    def test_annotation_mismatch_skips(self):
        """value_of(text: str) is not called with an int."""
        assert ValueOfStrategy().convert(12, Version) is NOT_CONVERTED

    def test_wrong_runtime_result_skips(self):
        assert ValueOfStrategy().convert("20C", Celsius) is NOT_CONVERTED

    def test_non_class_target(self):
        assert ValueOfStrategy().convert("x", int | str) is NOT_CONVERTED


class TestParseStrategy:
    """parse-style factories."""

    def test_classmethod_parse(self):
        assert ParseStrategy().convert("1.2", Version) == Version(0, 0)

    def test_from_string(self):
        result = ParseStrategy().convert("20C", Celsius)
        assert isinstance(result, Celsius)
        assert result.degrees == 20.0

    def test_builtin_fromisoformat(self):
        assert ParseStrategy().convert("2024-01-31T10:30:00", datetime) == datetime(2024, 1, 31, 10, 30)
        assert ParseStrategy().convert("2024-01-31", date) == date(2024, 1, 31)

    def test_skips_misdeclared_candidates(self):
        assert ParseStrategy().convert("x", Misdeclared) is NOT_CONVERTED

    def test_custom_names(self):
        strategy = FactoryMethodStrategy("custom", ("value_of",))
        assert strategy.name == "custom"
        assert strategy.convert("3.4", Version) == Version(3, 4)


class TestConstructorStrategy:
    """Single-argument construction."""

    def test_builtin_constructor(self):
        assert ConstructorStrategy().convert("1.50", Decimal) == Decimal("1.50")
        assert ConstructorStrategy().convert(3, str) == "3"

    def test_type_error_is_mismatch(self):
        assert ConstructorStrategy().convert(object(), int) is NOT_CONVERTED

    def test_value_error_is_fault(self):
        with pytest.raises(ConversionError) as exc_info:
            ConstructorStrategy().convert("abc", int)
        assert exc_info.value.strategy == "constructor"

    def test_arity_mismatch_skips(self):
        assert ConstructorStrategy().convert("1", Version) is NOT_CONVERTED

    def test_python_constructor(self):
        result = ConstructorStrategy().convert(21, Celsius)
        assert isinstance(result, Celsius)
        assert result.degrees == 21

    def test_abstract_target_skipped(self):
        assert ConstructorStrategy().convert("x", Shape) is NOT_CONVERTED

    def test_type_target_skipped(self):
        assert ConstructorStrategy().convert("int", type) is NOT_CONVERTED

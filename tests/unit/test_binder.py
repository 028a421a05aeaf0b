"""Tests for PropertyBinder and setter discovery."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import pytest

from bean_bind import (
    BeanFactory,
    ConversionChain,
    ConversionError,
    InvalidArgumentError,
    PropertyBinder,
    SetterInvocationError,
    UnconvertibleValueError,
    UnknownPropertyError,
    build_default_binder,
    discover_setters,
)
from bean_bind.introspection import UNDECLARED


class SimpleBean:
    def __init__(self):
        self.name = None

    def getName(self):
        return self.name

    def setName(self, name: str) -> None:
        self.name = name


class NumberBean:
    def __init__(self):
        self.count = 0

    def setCount(self, count: int) -> None:
        self.count = count


class Mixed:
    """Members that do and do not qualify as setters."""

    def __init__(self):
        self.calls = []

    def setLoose(self, value):
        self.calls.append(("loose", value))

    def setOptional(self, value: Optional[int]) -> None:
        self.calls.append(("optional", value))

    def setReturns(self, value: int) -> int:
        return value

    def setTwo(self, a, b):
        pass

    def setNothing(self):
        pass

    @staticmethod
    def setStatic(value):
        pass

    @classmethod
    def setClass(cls, value):
        pass

    def update(self, value):
        pass


class Snake:
    def __init__(self):
        self.user_name = None

    def set_user_name(self, value: str) -> None:
        self.user_name = value


class WithProperty:
    def __init__(self):
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    @size.setter
    def size(self, value: int) -> None:
        self._size = value

    @property
    def frozen(self) -> int:
        return 1


class Exploding:
    def setValue(self, value: str) -> None:
        raise RuntimeError("boom")


class Level:
    """Factory-constructible type whose construction can fault."""

    def __init__(self, raw: str):
        if raw == "bad":
            raise ValueError("bad level")
        self.raw = raw

    def __eq__(self, other):
        return isinstance(other, Level) and other.raw == self.raw


class Opaque:
    def __init__(self, a, b):
        pass


class Holder:
    def __init__(self):
        self.level = None
        self.opaque = None

    def setLevel(self, level: Level) -> None:
        self.level = level

    def setOpaque(self, opaque: Opaque) -> None:
        self.opaque = opaque


class PersonContract(ABC):
    @abstractmethod
    def getAge(self) -> int: ...

    @abstractmethod
    def setAge(self, age: int) -> None: ...


class TestDiscoverSetters:
    """Setter discovery rules."""

    def test_qualifying_setters(self):
        setters = discover_setters(Mixed)
        assert set(setters) == {"setLoose", "setOptional"}

    def test_descriptor_fields(self):
        setters = discover_setters(Mixed)

        assert setters["setLoose"].parameter_name == "value"
        assert setters["setLoose"].parameter_type is UNDECLARED
        assert setters["setOptional"].parameter_type == Optional[int]

    def test_property_setter(self):
        setters = discover_setters(WithProperty)
        assert "setSize" in setters
        assert "setFrozen" not in setters

    def test_non_qualifying_members_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="bean_bind.binder"):
            discover_setters(Mixed)

        assert "is static: setStatic" in caplog.text
        assert "not void return: setReturns" in caplog.text
        assert "exactly one parameter: setTwo" in caplog.text
        assert 'does not start with "set": update' in caplog.text

    def test_injected_logger(self, caplog):
        custom = logging.getLogger("tests.binder.custom")
        with caplog.at_level(logging.DEBUG, logger="tests.binder.custom"):
            discover_setters(Mixed, logger=custom)

        assert any(r.name == "tests.binder.custom" for r in caplog.records)


class TestBind:
    """Direct binding without conversion."""

    def test_simple(self, binder):
        bean = SimpleBean()
        binder.bind(bean, {"name": "fred"})
        assert bean.getName() == "fred"

    def test_unannotated_setter_takes_anything(self, binder):
        target = Mixed()
        binder.bind(target, {"loose": [1, 2]})
        assert target.calls == [("loose", [1, 2])]

    def test_optional_accepts_none(self, binder):
        target = Mixed()
        binder.bind(target, {"optional": None})
        assert target.calls == [("optional", None)]

    def test_snake_case_setter(self, binder):
        target = Snake()
        binder.bind(target, {"user_name": "alice"})
        assert target.user_name == "alice"

    def test_property_setter(self, binder):
        target = WithProperty()
        binder.bind(target, {"size": "7"})
        assert target.size == 7

    def test_iteration_order_is_preserved(self, binder):
        target = Mixed()
        binder.bind(target, {"loose": "a", "optional": 2})
        assert target.calls == [("loose", "a"), ("optional", 2)]

    def test_input_not_mutated(self, binder):
        properties = {"count": "42"}
        binder.bind(NumberBean(), properties)
        assert properties == {"count": "42"}

    def test_exact_match_skips_conversion(self):
        class Recording(ConversionChain):
            def convert(self, value, param_type, property_name=None):
                raise AssertionError("conversion chain consulted")

        bean = NumberBean()
        PropertyBinder(chain=Recording()).bind(bean, {"count": 5})
        assert bean.count == 5

    def test_bind_into_synthetic_bean(self, binder):
        person = BeanFactory().create_bean(PersonContract)
        binder.bind(person, {"age": "33"})
        assert person.getAge() == 33


class TestUnusedPolicy:
    """errorOnUnused on/off."""

    def test_unused_error(self):
        binder = build_default_binder(error_on_unused=True)
        with pytest.raises(UnknownPropertyError) as exc_info:
            binder.bind(SimpleBean(), {"name": "fred", "llamo": "federico"})
        assert exc_info.value.property_name == "llamo"

    def test_unused_error_is_default(self, binder):
        with pytest.raises(UnknownPropertyError):
            binder.bind(SimpleBean(), {"extra": "x"})

    def test_ignore_unused(self, lenient_binder, caplog):
        bean = SimpleBean()
        with caplog.at_level(logging.WARNING, logger="bean_bind.binder"):
            lenient_binder.bind(bean, {"name": "fred", "llamo": "federico"})

        assert bean.getName() == "fred"
        assert 'Could not find setter for property "llamo"' in caplog.text

    def test_not_transactional(self, binder):
        bean = SimpleBean()
        with pytest.raises(UnknownPropertyError):
            binder.bind(bean, {"name": "fred", "extra": "x"})
        assert bean.getName() == "fred"


class TestArguments:
    """InvalidArgumentError preconditions."""

    def test_none_target(self, binder):
        with pytest.raises(InvalidArgumentError):
            binder.bind(None, {})

    def test_none_properties(self, binder):
        with pytest.raises(InvalidArgumentError):
            binder.bind(SimpleBean(), None)

    def test_non_mapping_properties(self, binder):
        with pytest.raises(InvalidArgumentError):
            binder.bind(SimpleBean(), [("name", "fred")])

    def test_empty_property_name(self, binder):
        with pytest.raises(InvalidArgumentError):
            binder.bind(SimpleBean(), {"": "x"})

    def test_empty_mapping_is_noop(self, binder):
        bean = SimpleBean()
        binder.bind(bean, {})
        assert bean.getName() is None


class TestConversionFailures:
    """Conversion and invocation errors."""

    def test_default_type_convert(self, binder):
        bean = NumberBean()
        binder.bind(bean, {"count": "42"})
        assert bean.count == 42

    def test_explicit_type_convert(self):
        bean = NumberBean()
        binder = build_default_binder(converters={(str, int): lambda s: 42})
        binder.bind(bean, {"count": "fish"})
        assert bean.count == 42

    def test_faulting_converter(self):
        binder = build_default_binder(converters={(str, int): lambda s: int(s)})
        with pytest.raises(ConversionError) as exc_info:
            binder.bind(NumberBean(), {"count": "fish"})

        assert exc_info.value.property_name == "count"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_setter_fault(self, binder):
        with pytest.raises(SetterInvocationError) as exc_info:
            binder.bind(Exploding(), {"value": "x"})

        assert exc_info.value.setter_name == "setValue"
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_constructor_conversion(self, binder):
        target = Holder()
        binder.bind(target, {"level": "high"})
        assert target.level == Level("high")

    def test_constructor_fault(self, binder):
        with pytest.raises(ConversionError):
            binder.bind(Holder(), {"level": "bad"})

    def test_unconvertible(self, binder):
        with pytest.raises(UnconvertibleValueError) as exc_info:
            binder.bind(Holder(), {"opaque": "x"})

        error = exc_info.value
        assert error.value_type is str
        assert error.param_type is Opaque
        assert error.property_name == "opaque"

    def test_unconvertible_without_chain(self):
        with pytest.raises(UnconvertibleValueError):
            PropertyBinder().bind(NumberBean(), {"count": "42"})

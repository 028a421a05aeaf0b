"""pytest configuration and shared fixtures."""

import pytest

from bean_bind import BeanFactory, ConversionRegistry, build_default_binder, build_default_registry


class Counter:
    """Plain target with Java-bean style accessors."""

    def __init__(self):
        self._count = 0
        self._name = None

    def getCount(self) -> int:
        return self._count

    def setCount(self, count: int) -> None:
        self._count = count

    def getName(self) -> str:
        return self._name

    def setName(self, name: str) -> None:
        self._name = name


@pytest.fixture
def counter():
    """Fresh Counter target."""
    return Counter()


@pytest.fixture
def binder():
    """Binder with the built-in converters; unknown properties are fatal."""
    return build_default_binder()


@pytest.fixture
def lenient_binder():
    """Binder that skips unknown properties."""
    return build_default_binder(error_on_unused=False)


@pytest.fixture
def empty_registry():
    """Registry without any converter."""
    return ConversionRegistry()


@pytest.fixture
def default_registry():
    """Registry holding the built-in converters."""
    return build_default_registry()


@pytest.fixture
def factory():
    """Bean factory with default settings."""
    return BeanFactory()

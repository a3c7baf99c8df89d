"""Shared fixtures and fixture classes for the theory_command test suite."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest
from theory_command.models import (
    InvocationMetadata,
    MethodDescriptor,
    ParameterDescriptor,
)

# ---------------------------------------------------------------------------
# Instrumentation
# ---------------------------------------------------------------------------


@dataclass
class CallCounter:
    """Per-test record of fixture lifecycle events.

    Attributes:
        constructed: Number of fixture constructions.
        invoked: Number of test-body calls.
        released: Number of ``close()`` calls.
        events: Ordered event names, for checking call order.
    """

    constructed: int = 0
    invoked: int = 0
    released: int = 0
    events: list[str] = field(default_factory=list)

    def record(self, event: str) -> None:
        """Count *event* and append it to ``events``."""
        setattr(self, event, getattr(self, event) + 1)
        self.events.append(event)


# ---------------------------------------------------------------------------
# Fixture classes that theory methods run against
# ---------------------------------------------------------------------------


class DummyWithAttributes:
    """Methods paired with metadata in ``make_dummy_method``."""

    def theory_method(self, x: int, y: float) -> None:
        pass

    def timeout_method(self) -> None:
        pass

    def string_method(self, s: str) -> None:
        pass


class InstrumentedSpy:
    """Counts its own construction and test-body calls."""

    def __init__(self, counter: CallCounter) -> None:
        self.counter = counter
        counter.record("constructed")

    def passed_test(self) -> None:
        self.counter.record("invoked")


class ReleasableSpy:
    """Releasable fixture whose body and release both succeed."""

    def __init__(self, counter: CallCounter) -> None:
        self.counter = counter
        counter.record("constructed")

    def close(self) -> None:
        self.counter.record("released")

    def passed_test(self) -> None:
        self.counter.record("invoked")


class ReleasableSpyWithReleaseThrow(ReleasableSpy):
    """Releasable fixture whose release raises."""

    def close(self) -> None:
        super().close()
        msg = "Release failed"
        raise RuntimeError(msg)


class ReleasableSpyWithTestThrow(ReleasableSpy):
    """Releasable fixture whose test body raises."""

    def failed_test(self) -> None:
        self.counter.record("invoked")
        msg = "Test body failed"
        raise RuntimeError(msg)


class ReleasableSpyWithBothThrow(ReleasableSpyWithTestThrow):
    """Releasable fixture whose body and release both raise."""

    def close(self) -> None:
        super().close()
        msg = "Release failed"
        raise OSError(msg)


class ParameterSpy:
    """Two-parameter theory target that does nothing."""

    def method(self, x: int, y: str) -> None:
        pass


class SpyWithDataPassed:
    """Records the values its theory method received."""

    def __init__(self) -> None:
        self.received: tuple[Any, ...] | None = None

    def record(self, x: int, y: float, z: str) -> None:
        self.received = (x, y, z)


class ExampleFixture:
    """A passing and a throwing zero-argument theory."""

    def passing_method(self) -> None:
        pass

    def throws_exception(self) -> None:
        msg = "boom"
        raise ValueError(msg)


# ---------------------------------------------------------------------------
# Factory functions (plain functions, importable from conftest)
# ---------------------------------------------------------------------------


def make_parameter(**overrides: Any) -> ParameterDescriptor:
    """Build a valid ParameterDescriptor with sensible defaults.

    Args:
        **overrides: Field values to override.

    Returns:
        A fully constructed ParameterDescriptor instance.
    """
    defaults: dict[str, Any] = {"name": "x", "type_name": "int"}
    defaults.update(overrides)
    return ParameterDescriptor(**defaults)


def make_method(**overrides: Any) -> MethodDescriptor:
    """Build a valid MethodDescriptor with sensible defaults.

    The default target ignores its arguments.

    Args:
        **overrides: Field values to override.

    Returns:
        A fully constructed MethodDescriptor instance.
    """
    defaults: dict[str, Any] = {
        "type_name": "Fixture",
        "method_name": "Method",
        "parameters": (
            ParameterDescriptor(name="x", type_name="int"),
            ParameterDescriptor(name="y", type_name="str"),
        ),
        "target": lambda fixture, *values: None,
    }
    defaults.update(overrides)
    return MethodDescriptor(**defaults)


def make_dummy_method(name: str) -> MethodDescriptor:
    """Describe a ``DummyWithAttributes`` method with its metadata attached.

    Args:
        name: One of ``theory_method``, ``timeout_method``, ``string_method``.

    Returns:
        The descriptor for that method.
    """
    metadata = {
        "theory_method": InvocationMetadata(display_name="My display name"),
        "timeout_method": InvocationMetadata(timeout=153),
        "string_method": InvocationMetadata(),
    }[name]
    return MethodDescriptor.from_method(DummyWithAttributes, name, metadata)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def counter() -> CallCounter:
    """Return a fresh CallCounter for the current test."""
    return CallCounter()

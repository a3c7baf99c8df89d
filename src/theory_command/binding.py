"""Positional binding of theory argument values to declared parameters.

Provides ``bind_arguments`` which pairs supplied values with a method's
declared parameters in declaration order and classifies the result, and
``ArityError`` which is raised when an incomplete binding is used for
invocation.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import StrEnum
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from theory_command.models import ParameterDescriptor

logger = logging.getLogger(__name__)


class BindingStatus(StrEnum):
    """Classification of supplied values against declared parameters."""

    BOUND = "bound"
    TOO_FEW = "too_few"
    TOO_MANY = "too_many"


class ArityKind(StrEnum):
    """Which side of the count mismatch an ``ArityError`` reports."""

    TOO_FEW = "too few values"
    TOO_MANY = "too many values"


class ArityError(TypeError):
    """Supplied value count does not match the declared parameter count.

    Attributes:
        kind: Whether too few or too many values were supplied.
        expected: Number of declared parameters.
        actual: Number of supplied values.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ArityKind,
        expected: int,
        actual: int,
    ) -> None:
        """Initialize with a message and the counts that disagreed.

        Args:
            message: Human-readable error description.
            kind: Whether too few or too many values were supplied.
            expected: Number of declared parameters.
            actual: Number of supplied values.
        """
        super().__init__(message)
        self.kind = kind
        self.expected = expected
        self.actual = actual


class ArgumentBinding(BaseModel):
    """Supplied values paired positionally with declared parameters.

    A binding is always constructible, whatever the counts, so display
    formatting can use it. Only ``require_complete`` enforces arity.

    Attributes:
        parameters: Declared parameters in declaration order.
        values: Supplied values in supply order.
    """

    model_config = ConfigDict(frozen=True)

    parameters: tuple[ParameterDescriptor, ...]
    values: tuple[Any, ...]

    @property
    def status(self) -> BindingStatus:
        """Classify the binding by comparing the two counts."""
        supplied, declared = len(self.values), len(self.parameters)
        if supplied < declared:
            return BindingStatus.TOO_FEW
        if supplied > declared:
            return BindingStatus.TOO_MANY
        return BindingStatus.BOUND

    @property
    def missing(self) -> tuple[ParameterDescriptor, ...]:
        """Declared parameters that received no value."""
        return self.parameters[len(self.values) :]

    @property
    def excess(self) -> tuple[Any, ...]:
        """Supplied values beyond the last declared parameter."""
        return self.values[len(self.parameters) :]

    def pairs(self) -> Iterator[tuple[ParameterDescriptor, Any]]:
        """Yield ``(parameter, value)`` for each parameter that has a value."""
        yield from zip(self.parameters, self.values, strict=False)

    def require_complete(self) -> tuple[Any, ...]:
        """Return the values for invocation, enforcing exact arity.

        Returns:
            The supplied values, one per declared parameter, in order.

        Raises:
            ArityError: If the binding is not ``BindingStatus.BOUND``.
        """
        status = self.status
        if status is BindingStatus.BOUND:
            return self.values

        expected, actual = len(self.parameters), len(self.values)
        if status is BindingStatus.TOO_FEW:
            kind = ArityKind.TOO_FEW
            names = ", ".join(p.name for p in self.missing)
            msg = f"Expected {expected} parameter value(s), got {actual}; missing: {names}"
        else:
            kind = ArityKind.TOO_MANY
            msg = (
                f"Expected {expected} parameter value(s), got {actual}; "
                f"{len(self.excess)} value(s) left over"
            )
        raise ArityError(msg, kind=kind, expected=expected, actual=actual)


def bind_arguments(
    parameters: Sequence[ParameterDescriptor],
    arguments: Sequence[Any] | None,
) -> ArgumentBinding:
    """Pair *arguments* with *parameters* by position.

    No value is coerced; each is passed through as supplied. ``None`` for
    *arguments* is treated as an empty list.

    Args:
        parameters: Declared parameters in declaration order.
        arguments: Supplied values, or ``None``.

    Returns:
        An ``ArgumentBinding``; inspect ``status`` or call
        ``require_complete`` before invoking.
    """
    binding = ArgumentBinding(
        parameters=tuple(parameters),
        values=tuple(arguments) if arguments is not None else (),
    )
    logger.debug(
        "Bound %d value(s) to %d parameter(s): status=%s",
        len(binding.values),
        len(binding.parameters),
        binding.status,
    )
    return binding

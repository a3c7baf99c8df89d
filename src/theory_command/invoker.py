"""Single-row theory invocation against a caller-supplied fixture.

``TheoryInvoker`` binds one row of argument values to a theory method,
calls it on a fixture the caller constructed, releases the fixture when it
supports release, and returns a ``PassedResult`` or ``FailedResult``.

Failure policy:
    - Arity mismatches raise ``ArityError`` before anything is invoked.
    - Exceptions from the method body propagate unchanged (after release).
    - A release failure after a successful call becomes a ``FailedResult``.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import time
from typing import Any, Protocol, runtime_checkable

from theory_command.binding import ArgumentBinding, ArityError, bind_arguments
from theory_command.display import format_display_name
from theory_command.models import (
    ExecutionResult,
    FailedResult,
    FailureCause,
    InvokerConfig,
    MethodDescriptor,
    PassedResult,
    StartRecord,
)
from theory_command.reporting import build_start_record, start_record_to_xml

logger = logging.getLogger(__name__)


@runtime_checkable
class Releasable(Protocol):
    """A fixture that holds resources to release after each invocation."""

    def close(self) -> None:  # noqa: D102
        ...


def _release(fixture: object) -> BaseException | None:
    """Call ``close()`` on *fixture* if it is ``Releasable``.

    Returns:
        The exception raised by ``close()``, or ``None``.
    """
    if not isinstance(fixture, Releasable):
        return None
    try:
        fixture.close()
    except Exception as exc:
        return exc
    return None


class TheoryInvoker:
    """Runs one theory row: a method descriptor plus its argument values.

    The display name is computed once at construction and is available
    whether or not the row can be bound. The invoker holds no mutable
    state, so separate invokers can run concurrently as long as each gets
    its own fixture.

    Attributes:
        method: The theory method descriptor.
        arguments: The supplied argument values.
        display_name: Formatted invocation name.
    """

    def __init__(
        self,
        method: MethodDescriptor,
        arguments: Sequence[Any] | None = None,
        *,
        config: InvokerConfig | None = None,
    ) -> None:
        """Bind *arguments* to *method* and compute the display name.

        Args:
            method: The theory method descriptor.
            arguments: Argument values for this row, or ``None`` for none.
            config: Invoker configuration; defaults to ``InvokerConfig()``.
        """
        resolved = config if config is not None else InvokerConfig()
        self._method = method
        self._binding: ArgumentBinding = bind_arguments(method.parameters, arguments)
        self._display_name = format_display_name(
            method, self._binding.values, resolved.max_string_length
        )

    @property
    def method(self) -> MethodDescriptor:
        return self._method

    @property
    def arguments(self) -> tuple[Any, ...]:
        return self._binding.values

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def type_name(self) -> str:
        return self._method.type_name

    @property
    def method_name(self) -> str:
        return self._method.method_name

    @property
    def timeout(self) -> int | None:
        """Advisory timeout in milliseconds; not enforced by the invoker."""
        return self._method.metadata.timeout

    def execute(self, fixture: object) -> ExecutionResult:
        """Invoke the theory method on *fixture* with the bound values.

        If *fixture* is ``Releasable`` its ``close()`` runs exactly once
        after the call attempt, before this method returns or re-raises.

        Args:
            fixture: The test-subject instance, built by the caller.

        Returns:
            ``PassedResult`` when the call and release succeed;
            ``FailedResult`` when the call succeeds but release fails.

        Raises:
            ArityError: If the supplied values do not match the declared
                parameters. Nothing is invoked or released.
            Exception: Whatever the method body raised, unchanged.
        """
        try:
            values = self._binding.require_complete()
        except ArityError as exc:
            logger.info("Theory not invoked: %s (%s)", self._display_name, exc)
            raise
        logger.debug("Theory start: %s", self._display_name)

        start = time.monotonic()
        try:
            self._method.target(fixture, *values)
        except BaseException:
            release_error = _release(fixture)
            if release_error is not None:
                logger.warning(
                    "Release of %s failed after test body failure: %s: %s",
                    type(fixture).__name__,
                    type(release_error).__name__,
                    release_error,
                )
            raise

        release_error = _release(fixture)
        duration = time.monotonic() - start

        if release_error is not None:
            logger.warning(
                "Theory failed on release: %s (%s: %s)",
                self._display_name,
                type(release_error).__name__,
                release_error,
            )
            return FailedResult(
                display_name=self._display_name,
                type_name=self.type_name,
                method_name=self.method_name,
                duration_seconds=duration,
                cause=FailureCause.from_exception(release_error),
            )

        logger.info("Theory passed: %s (%.3fs)", self._display_name, duration)
        return PassedResult(
            display_name=self._display_name,
            type_name=self.type_name,
            method_name=self.method_name,
            duration_seconds=duration,
        )

    def to_start_record(self) -> StartRecord:
        """Snapshot this invocation's identity for start-of-test reporting."""
        return build_start_record(self._display_name, self.type_name, self.method_name)

    def to_start_xml(self) -> str:
        """Render this invocation's ``<start />`` record as XML."""
        return start_record_to_xml(self.to_start_record())

"""Core data models for theory invocation.

Defines the method and parameter descriptors, per-method invocation
metadata, execution results, the start-of-test record, and the invoker
configuration. Every other module (binding, display, invoker, reporting,
config) builds on these types.
"""

from __future__ import annotations

from collections.abc import Callable
import inspect
import traceback
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

# ---------------------------------------------------------------------------
# Method identity
# ---------------------------------------------------------------------------


class ParameterDescriptor(BaseModel):
    """A single declared parameter of a theory method.

    Used for display and arity checks only; the type tag is never used to
    coerce values.

    Attributes:
        name: Parameter name as declared.
        type_name: Semantic type tag (e.g. ``"int"``, ``"str"``).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str = "object"

    @field_validator("name")
    @classmethod
    def _name_must_be_nonempty(cls, v: str) -> str:
        """Validate that the parameter name is not empty."""
        if not v:
            msg = "Parameter name must not be empty"
            raise ValueError(msg)
        return v


class InvocationMetadata(BaseModel):
    """Declarative per-method overrides attached by a test author.

    Attributes:
        display_name: Replaces ``Type.Method`` in the display name when set.
        timeout: Advisory timeout in milliseconds for an outer scheduler.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str | None = None
    timeout: int | None = None

    @field_validator("timeout")
    @classmethod
    def _timeout_must_be_positive(cls, v: int | None) -> int | None:
        """Validate that a given timeout is >= 1."""
        if v is not None and v < 1:
            msg = "Timeout must be >= 1 millisecond"
            raise ValueError(msg)
        return v


_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def _annotation_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "object"
    if isinstance(annotation, str):
        return annotation
    return getattr(annotation, "__name__", str(annotation))


class MethodDescriptor(BaseModel):
    """Identity and invocable target of a theory method.

    ``target`` is called as ``target(fixture, *values)``; the binder and
    invoker never look the method up by name.

    Attributes:
        type_name: Name of the declaring fixture type.
        method_name: Name of the method.
        parameters: Declared parameters in declaration order.
        metadata: Display name and timeout overrides.
        target: Callable taking the fixture followed by positional values.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    type_name: str
    method_name: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    metadata: InvocationMetadata = InvocationMetadata()
    target: Callable[..., Any]

    @property
    def qualified_name(self) -> str:
        """Return ``"{type_name}.{method_name}"``."""
        return f"{self.type_name}.{self.method_name}"

    @classmethod
    def from_method(
        cls,
        owner: type,
        name: str,
        metadata: InvocationMetadata | None = None,
    ) -> MethodDescriptor:
        """Build a descriptor from an instance method defined on *owner*.

        Parameter names and annotation names are read from the method
        signature, skipping the leading ``self``. The function itself
        becomes the target, so ``target(fixture, *values)`` behaves like
        ``fixture.name(*values)``.

        Args:
            owner: The fixture class declaring the method.
            name: The method name.
            metadata: Optional display name / timeout overrides.

        Returns:
            A new ``MethodDescriptor``.

        Raises:
            ValueError: If *name* is a static or class method, or declares
                keyword-only or variadic parameters.
        """
        raw = inspect.getattr_static(owner, name)
        if isinstance(raw, (staticmethod, classmethod)):
            msg = f"{owner.__qualname__}.{name} must be an instance method"
            raise ValueError(msg)

        signature = inspect.signature(raw)
        declared = list(signature.parameters.values())[1:]
        for param in declared:
            if param.kind not in _POSITIONAL_KINDS:
                msg = (
                    f"{owner.__qualname__}.{name} parameter {param.name!r} "
                    "cannot be bound positionally"
                )
                raise ValueError(msg)

        return cls(
            type_name=owner.__qualname__,
            method_name=name,
            parameters=tuple(
                ParameterDescriptor(
                    name=param.name, type_name=_annotation_name(param.annotation)
                )
                for param in declared
            ),
            metadata=metadata if metadata is not None else InvocationMetadata(),
            target=raw,
        )


# ---------------------------------------------------------------------------
# Execution results
# ---------------------------------------------------------------------------


class FailureCause(BaseModel):
    """Snapshot of the exception behind a failed result.

    Attributes:
        exception_type: Fully qualified exception class name.
        message: ``str()`` of the exception.
        stack_trace: Formatted traceback, if one was attached.
    """

    model_config = ConfigDict(frozen=True)

    exception_type: str
    message: str
    stack_trace: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> FailureCause:
        """Capture type, message, and traceback of *exc*."""
        exc_type = type(exc)
        module = exc_type.__module__
        qualname = exc_type.__qualname__
        stack = None
        if exc.__traceback__ is not None:
            stack = "".join(traceback.format_tb(exc.__traceback__))
        return cls(
            exception_type=qualname if module == "builtins" else f"{module}.{qualname}",
            message=str(exc),
            stack_trace=stack,
        )


class MethodResult(BaseModel):
    """Fields shared by every execution result.

    Attributes:
        display_name: Display name of the invocation.
        type_name: Declaring type of the method.
        method_name: Name of the method.
        duration_seconds: Wall-clock time of invocation plus release.
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    type_name: str
    method_name: str
    duration_seconds: float


class PassedResult(MethodResult):
    """The method call and fixture release both succeeded."""

    outcome: Literal["pass"] = "pass"


class FailedResult(MethodResult):
    """The method call succeeded but releasing the fixture failed.

    Attributes:
        cause: The release failure.
    """

    outcome: Literal["fail"] = "fail"
    cause: FailureCause


ExecutionResult = PassedResult | FailedResult


class StartRecord(BaseModel):
    """Identity of an invocation before its outcome is known.

    Attributes:
        name: Display name.
        type_name: Declaring type name.
        method_name: Method name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type_name: str
    method_name: str


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class InvokerConfig(BaseModel):
    """Runtime configuration for theory invocation and its logging.

    Attributes:
        log_level: Logging level name for the ``theory_command`` logger.
        log_file: Optional log file path.
        max_string_length: String values longer than this are truncated in
            display names.
    """

    model_config = ConfigDict(frozen=True)

    log_level: str = "INFO"
    log_file: str | None = None
    max_string_length: int = 50

    @field_validator("max_string_length")
    @classmethod
    def _must_be_positive(cls, v: int) -> int:
        """Validate that max_string_length is >= 1."""
        if v < 1:
            msg = "Value must be >= 1"
            raise ValueError(msg)
        return v

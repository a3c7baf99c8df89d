"""Data-driven theory invocation: bind one row of values, run, report."""

from theory_command.binding import ArityError, ArityKind, BindingStatus, bind_arguments
from theory_command.display import format_display_name, format_value
from theory_command.invoker import Releasable, TheoryInvoker
from theory_command.models import (
    ExecutionResult,
    FailedResult,
    InvocationMetadata,
    MethodDescriptor,
    ParameterDescriptor,
    PassedResult,
    StartRecord,
)

__all__ = [
    "ArityError",
    "ArityKind",
    "BindingStatus",
    "ExecutionResult",
    "FailedResult",
    "InvocationMetadata",
    "MethodDescriptor",
    "ParameterDescriptor",
    "PassedResult",
    "Releasable",
    "StartRecord",
    "TheoryInvoker",
    "bind_arguments",
    "format_display_name",
    "format_value",
]

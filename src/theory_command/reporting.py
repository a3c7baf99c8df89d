"""XML rendering of start-of-test and result records.

``start_record_to_xml`` renders the ``<start />`` element emitted before a
theory runs; ``result_to_xml`` renders the ``<test />`` element for a
finished one. Attribute and text escaping is delegated to
``xml.etree.ElementTree``. Display names arrive with NUL already written as
the two characters ``\\0`` and pass through untouched.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from theory_command.models import ExecutionResult, FailedResult, StartRecord

_RESULT_LABELS: dict[str, str] = {"pass": "Pass", "fail": "Fail"}


def build_start_record(display_name: str, type_name: str, method_name: str) -> StartRecord:
    """Snapshot an invocation's identity for start-of-test reporting.

    Args:
        display_name: The formatted display name.
        type_name: Declaring type of the method.
        method_name: Name of the method.

    Returns:
        A frozen ``StartRecord``.
    """
    return StartRecord(name=display_name, type_name=type_name, method_name=method_name)


def start_record_to_xml(record: StartRecord) -> str:
    """Render *record* as ``<start name=".." type=".." method=".." />``.

    Args:
        record: The start record to render.

    Returns:
        The element as a unicode string.
    """
    element = ET.Element(
        "start",
        {
            "name": record.name,
            "type": record.type_name,
            "method": record.method_name,
        },
    )
    return ET.tostring(element, encoding="unicode")


def result_to_xml(result: ExecutionResult) -> str:
    """Render a finished invocation as a ``<test />`` element.

    ``time`` is the duration in seconds with three decimals. A
    ``FailedResult`` carries a ``<failure>`` child with the exception type,
    message, and stack trace.

    Args:
        result: The passed or failed result.

    Returns:
        The element as a unicode string.
    """
    element = ET.Element(
        "test",
        {
            "name": result.display_name,
            "type": result.type_name,
            "method": result.method_name,
            "result": _RESULT_LABELS[result.outcome],
            "time": f"{result.duration_seconds:.3f}",
        },
    )
    if isinstance(result, FailedResult):
        failure = ET.SubElement(
            element, "failure", {"exception-type": result.cause.exception_type}
        )
        ET.SubElement(failure, "message").text = result.cause.message
        ET.SubElement(failure, "stack-trace").text = result.cause.stack_trace or ""
    return ET.tostring(element, encoding="unicode")

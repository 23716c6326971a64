"""Parse the analyzer's ``-output=json`` document into a snapshot.

The analyzer writes a protobuf ``CapabilityInfoList`` in its canonical JSON
mapping. Only the fields capdiff consumes are read and the rest are
ignored. Protobuf JSON spells field names in lowerCamelCase but parsers must
also accept the original snake_case names, so both are looked up. 64-bit
integers (``line``, ``column``) are encoded as JSON strings.
"""

from __future__ import annotations

import json
from typing import Any

from capdiff.core.snapshot.capabilities import Capability
from capdiff.core.snapshot.models import (
    CapabilityRecord,
    CapabilitySnapshot,
    Function,
    Site,
)
from capdiff.exceptions import AnalysisError


def _field(obj: dict[str, Any], camel: str, snake: str | None = None) -> Any:
    if camel in obj:
        return obj[camel]
    if snake is not None:
        return obj.get(snake)
    return None


def _expect_object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise AnalysisError(f"expected a JSON object for {what}, got {type(value).__name__}")
    return value


def _as_str(value: Any, what: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise AnalysisError(f"expected a string for {what}, got {value!r}")
    return value


def _as_int(value: Any, what: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool):
        raise AnalysisError(f"expected an integer for {what}, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise AnalysisError(f"expected an integer for {what}, got {value!r}")


def _parse_site(value: Any) -> Site | None:
    if value is None:
        return None
    obj = _expect_object(value, "site")
    return Site(
        filename=_as_str(obj.get("filename"), "site.filename"),
        line=_as_int(obj.get("line"), "site.line"),
        column=_as_int(obj.get("column"), "site.column"),
    )


def _parse_function(value: Any) -> Function:
    obj = _expect_object(value, "path entry")
    return Function(
        name=_as_str(obj.get("name"), "function.name"),
        site=_parse_site(obj.get("site")),
        package=_as_str(obj.get("package"), "function.package"),
    )


def parse_capability_info(value: Any) -> CapabilityRecord:
    """Convert one ``CapabilityInfo`` JSON object into a record.

    Raises:
        AnalysisError: If a consumed field has the wrong type or the
            capability is not a valid enum value.
    """
    obj = _expect_object(value, "capabilityInfo entry")
    raw_capability = obj.get("capability")
    if raw_capability is None:
        # Absent and null both mean the enum default.
        raw_capability = Capability.UNSPECIFIED
    try:
        capability = Capability.parse(raw_capability)
    except ValueError as exc:
        raise AnalysisError(str(exc)) from exc

    path = _field(obj, "path") or []
    if not isinstance(path, list):
        raise AnalysisError(f"expected a list for path, got {type(path).__name__}")

    return CapabilityRecord(
        capability=capability,
        package_dir=_as_str(_field(obj, "packageDir", "package_dir"), "packageDir"),
        package_name=_as_str(_field(obj, "packageName", "package_name"), "packageName"),
        capability_type=_as_str(
            _field(obj, "capabilityType", "capability_type"), "capabilityType"
        ),
        path=tuple(_parse_function(f) for f in path),
        dep_path=_as_str(_field(obj, "depPath", "dep_path"), "depPath"),
    )


def parse_snapshot(text: str | bytes) -> CapabilitySnapshot:
    """Parse the analyzer's JSON output into a ``CapabilitySnapshot``.

    Args:
        text: The analyzer's standard output.

    Returns:
        A snapshot holding every ``capabilityInfo`` entry, later entries
        replacing earlier ones with the same key.

    Raises:
        AnalysisError: If the output is empty, is not JSON, or does not have
            the expected shape.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    if not text.strip():
        raise AnalysisError("couldn't parse analyzer output: empty output")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise AnalysisError(f"couldn't parse analyzer output: {exc}") from exc

    obj = _expect_object(data, "CapabilityInfoList")
    infos = _field(obj, "capabilityInfo", "capability_info") or []
    if not isinstance(infos, list):
        raise AnalysisError(
            f"expected a list for capabilityInfo, got {type(infos).__name__}"
        )
    return CapabilitySnapshot.from_records(parse_capability_info(i) for i in infos)

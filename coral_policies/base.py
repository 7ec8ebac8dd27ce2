"""
Base utilities for coral policies.

This module provides shared helpers and the OperationReport dataclass
used across all policy-driven pipeline operations.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any, List
import json


def coerce_int(value: Any, default: int = 0) -> int:
    """Coerce a value to int (rounding floats), with fallback to default."""
    if value is None:
        return default
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return default


def alias_fields(d: Dict[str, Any], aliases: Dict[str, str]) -> Dict[str, Any]:
    """
    Apply field aliases to a dictionary.

    This allows the camelCase parameter names used by slider presets to be
    mapped to canonical snake_case names.

    Parameters
    ----------
    d : dict
        Input dictionary
    aliases : dict
        Mapping of alias_name -> canonical_name

    Returns
    -------
    dict
        Dictionary with aliases applied
    """
    result = d.copy()
    for alias_name, canonical_name in aliases.items():
        if alias_name in result and canonical_name not in result:
            result[canonical_name] = result.pop(alias_name)
    return result


def drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    """Remove keys whose value is None so dataclass defaults apply."""
    return {k: v for k, v in d.items() if v is not None}


@dataclass
class OperationReport:
    """
    Standard report structure for all pipeline operations.

    Every operation returns a report with requested vs effective policy,
    warnings, and operation-specific metrics.

    The "requested vs effective" pattern allows tracking of runtime
    adjustments (e.g. resolution clamping).
    """
    operation: str = "unknown"
    success: bool = True
    requested_policy: Dict[str, Any] = field(default_factory=dict)
    effective_policy: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=_json_default)

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def add_error(self, message: str) -> None:
        """Add an error message and mark as failed."""
        self.errors.append(message)
        self.success = False

    def merge(self, other: "OperationReport", prefix: Optional[str] = None) -> None:
        """Merge another report into this one."""
        self.warnings.extend(other.warnings)
        self.errors.extend(other.errors)
        if not other.success:
            self.success = False
        if prefix is None:
            self.metrics.update(other.metrics)
        else:
            self.metrics[prefix] = dict(other.metrics)


def _json_default(value: Any) -> Any:
    # numpy scalars and arrays end up in metrics
    if hasattr(value, "tolist"):
        return value.tolist()
    return str(value)


__all__ = [
    "OperationReport",
    "coerce_int",
    "alias_fields",
    "drop_none",
]

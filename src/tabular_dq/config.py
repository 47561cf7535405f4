"""Reporter configuration and check files.

A structured-log reporter needs two things: the logging channel to write to
and the severity to write at. `ReporterConfig` bundles them; the defaults
below apply when nothing is configured.

YAML format (all keys optional):

    logger: dq.audit     # logging channel name
    level: WARNING       # level name or number

Check files describe a Check in YAML; see `load_check`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, Union

import pandas as pd
import yaml

from tabular_dq.constraints import ALL_CONSTRAINT_TYPES, Constraint
from tabular_dq.core.check import Check
from tabular_dq.core.dataset import Dataset
from tabular_dq.core.enums import CacheMethod

logger = logging.getLogger(__name__)

# ============================================================================
# DEFAULTS
# ============================================================================

DEFAULT_LOGGER_NAME = "tabular_dq.reporters.log_reporter"
DEFAULT_LOG_LEVEL = logging.INFO

_LEVEL_NAMES = {
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


@dataclass(frozen=True)
class ReporterConfig:
    """Where and at which severity a reporter emits.

    Attributes:
        channel: Logger receiving one line per constraint result.
        severity: Numeric logging level used for every line.
    """

    channel: logging.Logger
    severity: int = DEFAULT_LOG_LEVEL

    @classmethod
    def default(cls) -> "ReporterConfig":
        return cls(channel=logging.getLogger(DEFAULT_LOGGER_NAME), severity=DEFAULT_LOG_LEVEL)


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================


def parse_log_level(value: Union[int, str]) -> int:
    """Turn a level name or number into a logging level.

    Raises:
        ValueError: If the name is unknown or the number is negative.

    Examples:
        >>> parse_log_level("warning")
        30
        >>> parse_log_level(40)
        40
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid log level: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Invalid log level: {value}. Must be non-negative.")
        return value
    name = str(value).strip().upper()
    if name.isdigit():
        return int(name)
    if name not in _LEVEL_NAMES:
        raise ValueError(
            f"Unknown log level: '{value}'. Valid levels: {', '.join(_LEVEL_NAMES)}"
        )
    return _LEVEL_NAMES[name]


def reporter_config_from_dict(data: dict[str, Any]) -> ReporterConfig:
    """Build a ReporterConfig from a mapping with optional ``logger`` and ``level`` keys."""
    unknown = set(data) - {"logger", "level"}
    if unknown:
        raise ValueError(f"Unknown reporter config keys: {', '.join(sorted(unknown))}")
    channel = logging.getLogger(data.get("logger") or DEFAULT_LOGGER_NAME)
    severity = parse_log_level(data.get("level", DEFAULT_LOG_LEVEL))
    return ReporterConfig(channel=channel, severity=severity)


def _read_yaml_mapping(path: Path, what: str) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"{what.capitalize()} not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {what} {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{what.capitalize()} {path} must be a mapping, got {type(data).__name__}")
    return data


def load_reporter_config(path: Path) -> ReporterConfig:
    """Read a ReporterConfig from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid YAML or holds invalid settings.
    """
    return reporter_config_from_dict(_read_yaml_mapping(path, "reporter config"))


# ============================================================================
# CHECK FILES
# ============================================================================

CHECK_FILE_KEYS = ("name", "id", "cache", "references", "constraints")

# "NeverNull" -> NeverNullConstraint, ...
CONSTRAINT_KINDS: Dict[str, Type[Constraint]] = {
    constraint_type.__name__[: -len("Constraint")]: constraint_type
    for constraint_type in ALL_CONSTRAINT_TYPES
}


def constraint_from_dict(entry: Any, references: Dict[str, Dataset]) -> Constraint:
    """Build one constraint from a single-key mapping ``{kind: {field: value}}``.

    A ``reference`` field names one of ``references``.

    Raises:
        ValueError: If the kind, the reference or the fields are invalid.

    Examples:
        >>> constraint_from_dict({"AnyOf": {"column": "status", "allowed": ["open"]}}, {})
        AnyOfConstraint(column='status', allowed=('open',))
    """
    if not isinstance(entry, dict) or len(entry) != 1:
        raise ValueError(f"Constraint entry must be a single-key mapping, got {entry!r}")
    ((kind, fields),) = entry.items()
    if kind not in CONSTRAINT_KINDS:
        raise ValueError(
            f"Unknown constraint kind: '{kind}'. Valid kinds: {', '.join(sorted(CONSTRAINT_KINDS))}"
        )
    if not isinstance(fields, dict):
        raise ValueError(f"Fields of {kind} must be a mapping, got {fields!r}")

    fields = dict(fields)
    if "reference" in fields:
        reference_name = fields["reference"]
        if reference_name not in references:
            raise ValueError(f"{kind} refers to unknown reference dataset '{reference_name}'")
        fields["reference"] = references[reference_name]
    try:
        return CONSTRAINT_KINDS[kind](**fields)
    except TypeError as e:
        raise ValueError(f"Invalid fields for {kind}: {e}") from e


def load_check(path: Path, data_frame: pd.DataFrame, display_name: Optional[str] = None) -> Check:
    """Read a Check over ``data_frame`` from a YAML check file.

    Reference datasets are CSV files, resolved relative to the check file.
    ``name`` in the file wins over ``display_name``.

    File format:

        name: orders
        cache: MEMORY_ONLY
        references:
          customers: customers.csv
        constraints:
          - NeverNull: {column: id}
          - UniqueKey: {columns: [id]}
          - ForeignKey: {columns: [[customer_id, id]], reference: customers}

    Raises:
        FileNotFoundError: If the check file or a reference file does not exist.
        ValueError: If the file is not valid YAML or holds invalid settings.
    """
    data = _read_yaml_mapping(path, "check file")
    unknown = set(data) - set(CHECK_FILE_KEYS)
    if unknown:
        raise ValueError(f"Unknown check file keys: {', '.join(sorted(unknown))}")

    references: Dict[str, Dataset] = {}
    for reference_name, reference_path in (data.get("references") or {}).items():
        reference_path = path.parent / reference_path
        if not reference_path.exists():
            raise FileNotFoundError(f"Reference dataset not found: {reference_path}")
        references[reference_name] = Dataset(pd.read_csv(reference_path), name=reference_name)
        logger.debug("Loaded reference %s from %s", reference_name, reference_path)

    cache = data.get("cache")
    kwargs: Dict[str, Any] = {}
    if "id" in data:
        kwargs["id"] = str(data["id"])
    return Check(
        data_frame,
        display_name=data.get("name", display_name),
        cache_method=CacheMethod(cache) if cache else None,
        constraints=[constraint_from_dict(entry, references) for entry in data.get("constraints") or []],
        **kwargs,
    )


__all__ = [
    "DEFAULT_LOGGER_NAME",
    "DEFAULT_LOG_LEVEL",
    "ReporterConfig",
    "parse_log_level",
    "reporter_config_from_dict",
    "load_reporter_config",
    "CONSTRAINT_KINDS",
    "constraint_from_dict",
    "load_check",
]

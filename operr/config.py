import logging
import yaml
from copy import deepcopy
from pathlib import Path
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field, ValidationError, field_validator

from .common.kinds import ErrorKind

DEFAULT_WARNING_KINDS = [
    ErrorKind.INVALID_ARGUMENT,
    ErrorKind.INVALID_REQUEST_BODY,
    ErrorKind.INVALID_OPERATION,
    ErrorKind.NOT_FOUND,
    ErrorKind.ALREADY_EXISTS,
    ErrorKind.PERMISSION_DENIED,
    ErrorKind.UNAUTHENTICATED,
    ErrorKind.TOO_MANY,
]

class LoggingConfig(BaseModel):
    level: str = "INFO"
    logs_dir: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, value):
        name = str(value).upper()
        if not isinstance(logging.getLevelName(name), int):
            raise ValueError(f"logging.level must be a logging level name, got {value!r}.")
        return name

class ReportingConfig(BaseModel):
    # Kinds reported at WARNING; everything else is reported at ERROR.
    warning_kinds: List[ErrorKind] = Field(default_factory=lambda: list(DEFAULT_WARNING_KINDS))
    log_origin: bool = True

    @field_validator("warning_kinds", mode="before")
    @classmethod
    def _parse_kind_names(cls, values):
        if values is None:
            return []
        parsed = []
        for value in values:
            if isinstance(value, str):
                try:
                    value = ErrorKind[value.strip().upper()]
                except KeyError:
                    raise ValueError(f"unknown error kind: {value!r}")
            parsed.append(value)
        return parsed

class OpErrConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)


def _load_yaml_mapping(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Error parsing YAML config: {exc}")

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file at {path} must contain a mapping at the top level.")
    return data


def _deep_merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[str] = None) -> OpErrConfig:
    """
    Load the packaged defaults, merge the YAML file at config_path over them
    (if given), validate with Pydantic, and return a typed config object.
    """
    merged_config = _load_yaml_mapping(get_default_config_path())
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found at: {config_path}")
        merged_config = _deep_merge_dicts(merged_config, _load_yaml_mapping(path))

    try:
        return OpErrConfig(**merged_config)
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}")

def get_default_config_path() -> Path:
    """Returns the absolute path to the packaged default config file."""
    return Path(__file__).parent / "default.yaml"

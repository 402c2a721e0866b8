"""Load AppSettings from a YAML file, the environment and CLI overrides.

Precedence (lowest first): model defaults, YAML file, environment variables,
explicit overrides.
"""

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from bookstack_mcp.config.settings import AppSettings
from bookstack_mcp.config_docs import CONFIG_PATH_ENV, ENVIRONMENT_MAPPING
from bookstack_mcp.exceptions import ConfigurationError

SECTIONS = ("bookstack", "security", "throttling", "server")


def _merge(target: Dict[str, Any], source: Mapping[str, Any]) -> None:
    for section, values in source.items():
        if values is None:
            continue
        if section not in SECTIONS:
            raise ConfigurationError(
                f"Unknown configuration section '{section}'",
                details={"allowed_sections": list(SECTIONS)},
            )
        if not isinstance(values, Mapping):
            raise ConfigurationError(f"Configuration section '{section}' must be a mapping")
        bucket = target.setdefault(section, {})
        for key, value in values.items():
            if value is not None:
                bucket[key] = value


def read_config_file(path: str) -> Dict[str, Any]:
    """Parse a YAML configuration file into a nested section dict."""
    config_file = Path(path)
    if not config_file.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")
    try:
        with open(config_file, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Configuration file is not valid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must contain a mapping at the top level")
    return data


def read_environment(environ: Mapping[str, str]) -> Dict[str, Dict[str, str]]:
    """Collect non-empty mapped environment variables into sections."""
    values: Dict[str, Dict[str, str]] = {}
    for env_var, section, field in ENVIRONMENT_MAPPING:
        raw = environ.get(env_var)
        if raw is None or raw == "":
            continue
        values.setdefault(section, {})[field] = raw
    return values


def load_settings(
    config_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> AppSettings:
    """Build the effective settings.

    Args:
        config_path: YAML file; falls back to BOOKSTACK_MCP_CONFIG when None
        environ: Environment to read (defaults to os.environ)
        overrides: Highest-priority values, e.g. from CLI flags; None entries are ignored

    Raises:
        ConfigurationError: file missing/invalid or values fail validation
    """
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}

    path = config_path or env.get(CONFIG_PATH_ENV)
    if path:
        _merge(raw, read_config_file(path))
    _merge(raw, read_environment(env))
    if overrides:
        _merge(raw, overrides)

    try:
        return AppSettings.model_validate(raw)
    except PydanticValidationError as exc:
        errors = [
            {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        fields = ", ".join(e["field"] for e in errors)
        raise ConfigurationError(
            f"Invalid configuration: {fields}", details={"validation_errors": errors}
        ) from exc


def require_upstream(settings: AppSettings) -> None:
    """Fail fast when the BookStack API location is not configured."""
    if not settings.bookstack.base_url:
        raise ConfigurationError(
            "BookStack configuration is required: set BOOKSTACK_BASE_URL or bookstack.base_url"
        )

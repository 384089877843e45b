"""Load generator settings, static schema descriptions and schema containers.

Reads appsettings.json into a GeneratorConfig and resolves the configured
schema identity to a live container instance.
"""

from __future__ import annotations

import importlib.util
import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from .config import GeneratorConfig, SchemaIdentity
from .errors import ConfigurationError, SchemaResolutionError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "appsettings.json"


def _read_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid JSON: {exc}") from exc


def load_config(path: Path | None = None, **overrides: Any) -> GeneratorConfig:
    """Load settings from disk.

    The settings file is optional, like the defaults it backs, but the schema
    identity has no defaults so a run without one fails here.
    """
    config_file = path or Path.cwd() / CONFIG_FILE_NAME
    data: dict[str, Any] = {}
    if config_file.is_file():
        raw = _read_json(config_file)
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{config_file} must contain a JSON object")
        data.update(raw)
    else:
        logger.info("No settings file at %s, using defaults", config_file)
    data.update(overrides)
    return validate_config(data)


def validate_config(data: dict[str, Any]) -> GeneratorConfig:
    """Build a GeneratorConfig, naming every missing or invalid field on failure."""
    try:
        return GeneratorConfig.model_validate(data)
    except ValidationError as exc:
        fields = tuple(
            ".".join(str(part) for part in error["loc"]) for error in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration: {', '.join(fields)}", fields=fields,
        ) from exc


def load_schema_file(path: Path) -> dict[str, Any]:
    """Load a static schema description (entities and accessors) from JSON."""
    if not path.is_file():
        raise SchemaResolutionError(f"Schema file not found: {path}")
    data = _read_json(path)
    if not isinstance(data, dict):
        raise SchemaResolutionError(f"{path} must contain a JSON object")
    return data


def _load_module(identity: SchemaIdentity) -> Any:
    location = Path(identity.module_location)
    if not location.is_file():
        raise SchemaResolutionError(
            f"Schema module not found: {location}", fields=("Schema.ModuleLocation",),
        )
    spec = importlib.util.spec_from_file_location(identity.container_namespace, location)
    if spec is None or spec.loader is None:
        raise SchemaResolutionError(
            f"Cannot load schema module from {location}",
            fields=("Schema.ModuleLocation",),
        )
    if identity.container_namespace in sys.modules:
        raise SchemaResolutionError(
            f"Module name {identity.container_namespace!r} is already loaded",
            fields=("Schema.ContainerNamespace",),
        )
    module = importlib.util.module_from_spec(spec)
    # Annotation lookups resolve names through sys.modules
    sys.modules[identity.container_namespace] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(identity.container_namespace, None)
        raise SchemaResolutionError(
            f"Failed to import schema module {location}: {exc}",
            fields=("Schema.ModuleLocation",),
        ) from exc
    return module


@contextmanager
def open_container(identity: SchemaIdentity) -> Iterator[Any]:
    """Resolve the schema identity to a container instance for the block's duration.

    The container is closed and its module unloaded on every exit path.
    """
    module = _load_module(identity)
    try:
        container_type = getattr(module, identity.schema_name, None)
        if not isinstance(container_type, type):
            raise SchemaResolutionError(
                f"{identity.container_namespace} has no container class "
                f"{identity.schema_name!r}",
                fields=("Schema.SchemaName",),
            )
        try:
            container = container_type(identity.connection_string)
        except (TypeError, ValueError) as exc:
            raise SchemaResolutionError(
                f"{identity.schema_name} rejected the connection string: {exc}",
                fields=("Schema.ConnectionString",),
            ) from exc

        logger.debug("Opened schema container %s", identity.schema_name)
        try:
            yield container
        finally:
            close = getattr(container, "close", None)
            if callable(close):
                close()
            logger.debug("Closed schema container %s", identity.schema_name)
    finally:
        if sys.modules.get(identity.container_namespace) is module:
            del sys.modules[identity.container_namespace]

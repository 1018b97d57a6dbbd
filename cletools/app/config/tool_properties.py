"""Loading of ``sakai.cle.*`` properties that configure the tool registry."""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Dict

from cletools.app.config.settings import Settings
from cletools.app.core.logging import get_logger
from cletools.app.domain.tools.registry import ToolRegistry
from cletools.app.domain.tools.snapshot import ToolRegistrySnapshot

logger = get_logger(__name__)


def _flatten(table: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    # Bare dotted TOML keys parse as nested tables; join them back into property names.
    flat: Dict[str, Any] = {}
    for key, value in table.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat


def load_properties_file(path: str | Path) -> Dict[str, Any]:
    """Read registry properties from a TOML file.

    Property names are best written as quoted keys. Nested tables are flattened
    back to dotted names, but TOML cannot hold a name that is both a value and
    the parent of its ``.lock`` sibling, so those pairs must be quoted.

    A missing file yields no properties so every field takes its default.
    Errors from a malformed file propagate.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.info("No CLE properties file at %s; using defaults", config_path)
        return {}
    return _flatten(tomllib.loads(config_path.read_text(encoding="utf-8")))


def collect_properties(settings: Settings) -> Dict[str, Any]:
    """Properties from the configured file, overlaid with ``CLE_PROPERTIES``."""
    properties = load_properties_file(settings.cle_properties_file)
    properties.update(_flatten(settings.cle_properties))
    return properties


def reload_tool_registry(registry: ToolRegistry, settings: Settings) -> ToolRegistrySnapshot:
    """Rebuild ``registry`` from the current property sources."""
    return registry.load(collect_properties(settings))

"""Loading, strict parsing and lenient coercion of diagram payloads."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError

from .errors import SchemaLoadError, SchemaValidationError
from .models import (
    DIAGRAM_COLLECTIONS,
    DIAGRAM_MODELS,
    DiagramKind,
    DiagramModel,
    unified_diagram_adapter,
)

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_diagram_file(path: str | Path) -> dict:
    """Load a diagram file and return the raw data.

    JSON is read from ``.json`` files, YAML from ``.yaml``/``.yml`` files.
    Any other suffix is tried as JSON first, then YAML.

    Args:
        path: Path to the diagram file.

    Returns:
        The raw diagram data as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return load_yaml(text)
        if path.suffix.lower() == ".json":
            return load_json(text)
        try:
            return load_json(text)
        except SchemaLoadError:
            return load_yaml(text)
    except SchemaLoadError as e:
        raise SchemaLoadError(str(e), str(path)) from e


def load_json(json_string: str) -> dict:
    """Parse a JSON string into a mapping.

    Raises:
        SchemaLoadError: If the text is not JSON or not a JSON object.
    """
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected JSON object at root, got {type(data).__name__}")

    return data


def load_yaml(yaml_string: str) -> dict:
    """Parse a YAML string into a mapping.

    An empty document yields an empty dict.

    Raises:
        SchemaLoadError: If the text is not YAML or not a YAML mapping.
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(f"Expected YAML mapping at root, got {type(data).__name__}")

    return data


def parse_diagram(data: Any) -> DiagramModel:
    """Strictly parse raw data into a typed diagram.

    A payload without a ``type`` field is treated as a legacy class diagram.

    Args:
        data: The raw diagram data.

    Returns:
        The parsed diagram model.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    if isinstance(data, dict) and "type" not in data:
        data = {**data, "type": DiagramKind.CLASS.value}

    try:
        return unified_diagram_adapter.validate_python(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e


def resolve_kind(data: Any) -> DiagramKind:
    """Resolve the diagram kind of a raw payload, defaulting to class."""
    raw_type = data.get("type") if isinstance(data, dict) else None
    if raw_type is None:
        return DiagramKind.CLASS
    try:
        return DiagramKind(raw_type)
    except ValueError:
        logger.warning("Unknown diagram type %r, defaulting to class diagram", raw_type)
        return DiagramKind.CLASS


def coerce_diagram(data: Any) -> DiagramModel:
    """Best-effort conversion of untrusted data into a typed diagram.

    Never raises. Unknown kinds fall back to the class diagram shape,
    collections that are not lists are treated as empty, and individual
    elements that fail validation are dropped.

    Args:
        data: Raw diagram data, or an already parsed diagram model.

    Returns:
        A diagram model containing every element that could be salvaged.
    """
    if isinstance(data, BaseModel) and isinstance(data, tuple(DIAGRAM_MODELS.values())):
        return data

    if not isinstance(data, dict):
        logger.warning("Expected diagram mapping, got %s", type(data).__name__)
        return DIAGRAM_MODELS[DiagramKind.CLASS]()

    kind = resolve_kind(data)
    fields: dict[str, list] = {}

    for wire_name, attr_name, element_model in DIAGRAM_COLLECTIONS[kind]:
        items = data.get(wire_name)
        if items is None:
            continue
        if not isinstance(items, list):
            logger.warning("Ignoring %s: expected list, got %s", wire_name, type(items).__name__)
            continue

        elements = []
        for index, item in enumerate(items):
            try:
                elements.append(element_model.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Dropping %s[%d]: %d validation error(s)", wire_name, index, e.error_count()
                )
        fields[attr_name] = elements

    return DIAGRAM_MODELS[kind](**fields)

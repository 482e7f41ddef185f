"""Extraction of diagram JSON from model responses."""

import json
import re
from typing import Any, Iterator

from ..schema.models import DiagramKind
from .errors import GenerationFailedError

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Return the longest fenced block of the text, or the whole text."""
    matches = CODE_FENCE_PATTERN.findall(text)
    if matches:
        return max(matches, key=len).strip()
    return text.strip()


def iter_json_objects(text: str) -> Iterator[str]:
    """Yield each balanced top-level ``{...}`` span of the text.

    Braces inside JSON strings are ignored.
    """
    start: int | None = None
    depth = 0
    in_string = False
    escaped = False

    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            if depth > 0:
                in_string = True
        elif char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0 and start is not None:
                yield text[start : index + 1]
                start = None


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Find the first JSON object in free-form text."""
    body = strip_code_fences(text)
    try:
        parsed = json.loads(body)
    except ValueError:
        parsed = None
    if isinstance(parsed, dict):
        return parsed

    for candidate in iter_json_objects(body):
        try:
            parsed = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def parse_diagram_response(text: str, kind: DiagramKind | str) -> dict[str, Any]:
    """Parse a model response into raw diagram data.

    The diagram is not validated here; it is stamped with the requested
    kind when the response omits ``type``.

    Args:
        text: The raw response text.
        kind: The diagram kind that was requested.

    Returns:
        The diagram data.

    Raises:
        GenerationFailedError: If the response holds no JSON object.
    """
    diagram = extract_json_object(text)
    if diagram is None:
        raise GenerationFailedError("The response did not contain a JSON diagram")
    diagram.setdefault("type", DiagramKind(kind).value)
    return diagram

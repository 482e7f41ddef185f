"""Diagram generation from natural language prompts."""

from .errors import GenerationError, ApiKeyNotConfiguredError, GenerationFailedError
from .client import DEFAULT_MODEL, GenerationClient, TemplateClient, LLMClient
from .parser import parse_diagram_response, extract_json_object, strip_code_fences
from .prompts import SYSTEM_PROMPT, build_system_prompt, build_generation_prompt
from .templates import detect_template, load_template, template_for

__all__ = [
    "GenerationError",
    "ApiKeyNotConfiguredError",
    "GenerationFailedError",
    "DEFAULT_MODEL",
    "GenerationClient",
    "TemplateClient",
    "LLMClient",
    "parse_diagram_response",
    "extract_json_object",
    "strip_code_fences",
    "SYSTEM_PROMPT",
    "build_system_prompt",
    "build_generation_prompt",
    "detect_template",
    "load_template",
    "template_for",
]

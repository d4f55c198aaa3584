"""Prompt rendering package."""

from finsight.prompts.renderer import (
    Each,
    Section,
    Template,
    Text,
    Value,
    When,
    each,
    format_scalar,
    render_prompt,
    when,
)

__all__ = [
    "Each",
    "Section",
    "Template",
    "Text",
    "Value",
    "When",
    "each",
    "format_scalar",
    "render_prompt",
    "when",
]

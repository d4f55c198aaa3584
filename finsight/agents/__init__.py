"""Model invocation package."""

from finsight.agents.model_adapter import (
    FailureKind,
    ModelInvocationAdapter,
    ModelInvocationError,
    StructuredModelAdapter,
    classify_failure,
    extract_json_object,
    output_format_instruction,
)
from finsight.agents.gemini_adapter import GeminiModelAdapter, map_google_error

__all__ = [
    "FailureKind",
    "GeminiModelAdapter",
    "ModelInvocationAdapter",
    "ModelInvocationError",
    "StructuredModelAdapter",
    "classify_failure",
    "extract_json_object",
    "map_google_error",
    "output_format_instruction",
]

"""
Model Invocation Adapter

DESIGN DECISION: Flows never talk to a model SDK. They hand a rendered
prompt and a reply contract to an adapter and get back either a reply
that satisfies the contract or a ModelInvocationError.

The adapter is the only component that performs network I/O and the
only suspension point of a flow call. It does not retry: every flow
treats a failed call as final for that request.

CONTRACT:
- invoke(prompt, contract) -> contract instance, or None for "no payload"
- Transport failures raise ModelInvocationError with a FailureKind
  when the transport can tell (overload vs. bad credentials)
- A reply that does not decode, or does not satisfy the contract
  (missing required fields, extra fields), raises
  ModelInvocationError(EMPTY_REPLY). Nothing is silently dropped.
"""

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError


ReplyT = TypeVar("ReplyT", bound=BaseModel)


class FailureKind(str, Enum):
    """
    Every way a flow call can end without a model-authored answer.

    Only the adapter-side kinds (overloaded, configuration, unknown,
    empty reply) travel inside ModelInvocationError; the others are
    decided by the flow itself.
    """
    VALIDATION = "validation"
    INSUFFICIENT_INPUT = "insufficient_input"
    SERVICE_OVERLOADED = "service_overloaded"
    CONFIGURATION = "configuration"
    UNKNOWN_INVOCATION = "unknown_invocation"
    EMPTY_REPLY = "empty_reply"
    INVALID_OUTPUT_VALUE = "invalid_output_value"


class ModelInvocationError(Exception):
    """A model call that did not produce an acceptable reply."""

    def __init__(
        self,
        message: str,
        kind: FailureKind = FailureKind.UNKNOWN_INVOCATION,
    ):
        self.kind = kind
        super().__init__(message)


# Message signatures for adapters that can only report opaque error text
_OVERLOAD_SIGNATURES = ("503", "overloaded", "service unavailable")
_CONFIGURATION_SIGNATURES = ("api key not valid",)


def classify_failure(error: BaseException) -> FailureKind:
    """
    Decide which fallback a failed model call gets.

    A structured kind from the adapter wins. Otherwise the error
    message is matched: overload signatures first, then credential
    signatures, and anything else is unknown.
    """
    if isinstance(error, ModelInvocationError) and error.kind != FailureKind.UNKNOWN_INVOCATION:
        return error.kind

    message = str(error).lower()
    if any(signature in message for signature in _OVERLOAD_SIGNATURES):
        return FailureKind.SERVICE_OVERLOADED
    if any(signature in message for signature in _CONFIGURATION_SIGNATURES):
        return FailureKind.CONFIGURATION
    return FailureKind.UNKNOWN_INVOCATION


class ModelInvocationAdapter(ABC):
    """
    Abstract interface for "prompt in, structured reply out".

    Any model backend (Gemini, a test stub, ...) implements this.
    """

    @abstractmethod
    async def invoke(
        self,
        prompt: str,
        contract: type[ReplyT],
    ) -> Optional[ReplyT]:
        """
        Send a prompt and return a reply that satisfies `contract`.

        Returns:
            A validated contract instance, or None if the model
            answered with no payload at all

        Raises:
            ModelInvocationError: If the call or the reply failed
        """
        pass


def extract_json_object(text: str) -> Optional[dict]:
    """
    Pull the outermost JSON object out of a model reply.

    Models sometimes wrap JSON in prose or code fences even when asked
    not to. Returns None if there is no decodable object.
    """
    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(text[start:end])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def output_format_instruction(contract: type[BaseModel]) -> str:
    """The fixed instruction appended to every prompt for a contract."""
    schema = json.dumps(contract.model_json_schema(by_alias=True), sort_keys=True)
    return (
        "\n\nRespond with ONLY a JSON object, no explanation, that satisfies "
        f"this JSON schema:\n{schema}"
    )


class StructuredModelAdapter(ModelInvocationAdapter):
    """
    Shared reply handling for text-generating backends.

    Subclasses only implement `_generate`; this class appends the
    output-format instruction, decodes the reply and validates it.
    """

    @abstractmethod
    async def _generate(self, prompt: str) -> Optional[str]:
        """Send the final prompt text and return the raw reply text."""
        pass

    async def invoke(
        self,
        prompt: str,
        contract: type[ReplyT],
    ) -> Optional[ReplyT]:
        text = await self._generate(prompt + output_format_instruction(contract))

        if text is None or not text.strip():
            return None

        data = extract_json_object(text)
        if data is None:
            raise ModelInvocationError(
                "Model reply contained no decodable JSON object",
                kind=FailureKind.EMPTY_REPLY,
            )

        try:
            return contract.model_validate(data)
        except ValidationError as e:
            raise ModelInvocationError(
                f"Model reply does not satisfy {contract.__name__}: {e.error_count()} issues",
                kind=FailureKind.EMPTY_REPLY,
            ) from e

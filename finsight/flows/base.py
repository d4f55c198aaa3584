"""
Advisory Flow Base

Every flow is the same three-step state machine:

    Precheck -> Invoking -> Resolved

- Precheck: coerce the input and apply the flow's deterministic rules.
  A rule can answer on its own, and then the model is never called.
- Invoking: render the prompt and make exactly one model call.
- Resolved: turn the reply (or the failure) into the flow's output.

DESIGN DECISION: run() never raises. Every path ends in an output of
the flow's contract: the model's answer, a precheck answer, or a
literal fallback. Callers never need a try/except around a flow.

Flows hold no per-call state, so one instance can serve any number of
concurrent calls.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError

from finsight.agents.model_adapter import (
    FailureKind,
    ModelInvocationAdapter,
    classify_failure,
)
from finsight.audit.logger import AuditLogger, create_correlation_id
from finsight.flows.fallbacks import FallbackText
from finsight.models.audit import AuditEvent, AuditEventBuilder
from finsight.prompts.renderer import Template, render_prompt


InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


@dataclass(frozen=True)
class ShortCircuit:
    """A precheck verdict: answer with `output` and skip the model."""

    output: Any
    reason: str
    kind: Optional[FailureKind] = FailureKind.INSUFFICIENT_INPUT


def _summarize_errors(error: ValidationError) -> list[dict]:
    return [
        {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
        for err in error.errors()
    ]


class AdvisoryFlow(ABC, Generic[InputT, OutputT]):
    """
    One advisory operation: typed input in, typed output out.

    Subclasses declare:
        name:        used in every audit event of the flow
        input_model: the input schema
        reply_model: the contract the model's reply must satisfy
        template:    the prompt template
        fallbacks:   the literal texts for each failure category

    and implement `make_output` (wrap a literal text in the output
    contract) and `resolve` (turn an accepted reply into the output).
    """

    name: ClassVar[str]
    input_model: ClassVar[type[BaseModel]]
    reply_model: ClassVar[type[BaseModel]]
    template: ClassVar[Template]
    fallbacks: ClassVar[FallbackText]

    def __init__(
        self,
        adapter: ModelInvocationAdapter,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            adapter: The model invocation adapter (one call per run)
            audit_logger: Audit logger. A local-only one is created if None.
        """
        self._adapter = adapter
        self._audit = audit_logger or AuditLogger()

    # =========================================================================
    # HOOKS
    # =========================================================================

    def parse_input(self, payload: Any) -> InputT:
        """Coerce a payload (model instance, mapping or None) into the input schema."""
        if isinstance(payload, self.input_model):
            return payload
        if payload is None:
            return self.input_model()
        return self.input_model.model_validate(payload)

    def precheck(self, request: InputT) -> Optional[ShortCircuit]:
        """Deterministic rules that answer without the model. None = go on."""
        return None

    def render(self, request: InputT) -> str:
        return render_prompt(self.template, request)

    @abstractmethod
    def make_output(self, text: str) -> OutputT:
        """Wrap a literal text in the flow's output contract."""
        pass

    @abstractmethod
    async def resolve(self, request: InputT, reply: Any, correlation_id: UUID) -> Optional[OutputT]:
        """
        Turn an accepted reply into the output.

        Returns None if the reply carries no usable payload, which
        resolves to the empty-reply fallback.
        """
        pass

    def failure_output(self, kind: FailureKind) -> OutputT:
        return self.make_output(self.fallbacks.for_kind(kind))

    def empty_reply_output(self) -> OutputT:
        return self.failure_output(FailureKind.EMPTY_REPLY)

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    async def run(self, payload: Any = None) -> OutputT:
        """
        Run the flow once.

        Never raises; see the module docstring.
        """
        correlation_id = create_correlation_id()
        await self._log(AuditEventBuilder.flow_started(self.name, correlation_id))

        # --- Precheck ---
        try:
            request = self.parse_input(payload)
        except ValidationError as e:
            await self._log(
                AuditEventBuilder.input_rejected(self.name, _summarize_errors(e), correlation_id)
            )
            return self.failure_output(FailureKind.VALIDATION)

        verdict = self.precheck(request)
        if verdict is not None:
            await self._log(
                AuditEventBuilder.precheck_short_circuit(
                    self.name,
                    verdict.reason,
                    verdict.kind.value if verdict.kind else None,
                    correlation_id,
                )
            )
            return verdict.output

        # --- Invoking ---
        prompt = self.render(request)
        await self._log(AuditEventBuilder.model_invoked(self.name, len(prompt), correlation_id))

        try:
            reply = await self._adapter.invoke(prompt, self.reply_model)
        except Exception as e:
            kind = classify_failure(e)
            if kind == FailureKind.EMPTY_REPLY:
                await self._log(AuditEventBuilder.reply_empty(self.name, correlation_id, str(e)))
                return self.empty_reply_output()
            await self._log(
                AuditEventBuilder.invocation_failed(self.name, kind.value, str(e), correlation_id)
            )
            return self.failure_output(kind)

        # --- Resolved ---
        output = None
        if reply is not None:
            output = await self.resolve(request, reply, correlation_id)

        if output is None:
            await self._log(AuditEventBuilder.reply_empty(self.name, correlation_id))
            return self.empty_reply_output()

        await self._log(AuditEventBuilder.reply_accepted(self.name, correlation_id))
        return output

    async def _log(self, event: AuditEvent) -> None:
        await self._audit.log(event)


class TextAdvisoryFlow(AdvisoryFlow[InputT, OutputT]):
    """
    A flow whose output is a single markdown text field.

    The reply contract is the output contract itself.
    """

    output_field: ClassVar[str]

    def make_output(self, text: str) -> OutputT:
        return self.reply_model(**{self.output_field: text})

    async def resolve(self, request: InputT, reply: Any, correlation_id: UUID) -> Optional[OutputT]:
        if not getattr(reply, self.output_field).strip():
            return None
        return reply

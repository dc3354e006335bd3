"""ChatOrchestrator — a bounded tool-calling loop between the LLM and the router.

One call to :meth:`ChatOrchestrator.run` handles one ``/chat`` request:

1. fetch the router's tool list (an unreachable router degrades to no tools)
2. ask the model for a completion while advertising those tools
3. execute any requested tool calls through the router, in order
4. resubmit the transcript and return the model's final content

The number of tool rounds is capped by ``Settings.max_tool_rounds``; the
last completion never advertises tools.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import litellm

from hotelbridge.chat.models import ChatMessage, ChatReply, ChatRequest, ToolCall
from hotelbridge.chat.router_client import RouterClient
from hotelbridge.chat.transpiler import to_function_schemas
from hotelbridge.protocols.errors import RouterError
from hotelbridge.utils.telemetry import (
    ATTR_FINISH_REASON,
    ATTR_MODEL,
    ATTR_ROUND,
    ATTR_TOOL_COUNT,
    ATTR_TOOL_NAME,
    get_tracer,
    mark_error,
)

if TYPE_CHECKING:
    from hotelbridge.config import Settings

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


def tool_message_payload(result: Any) -> Any:
    """Pick what the model sees from a ``tools/call`` result.

    ``structuredContent`` first, then ``content``, then the raw result.
    """
    if isinstance(result, dict):
        if result.get("structuredContent") is not None:
            return result["structuredContent"]
        if result.get("content") is not None:
            return result["content"]
    return result


class ChatOrchestrator:
    """Runs one chat turn with tool use.

    Usage::

        orchestrator = ChatOrchestrator(Settings.from_env())
        reply = await orchestrator.run(ChatRequest(message="Which currencies for en_DE?"))
    """

    def __init__(self, settings: Settings, router: RouterClient | None = None) -> None:
        self._settings = settings
        self._router = router or RouterClient(settings.router_url, timeout=settings.timeout)

    async def run(self, request: ChatRequest) -> ChatReply:
        tools = await self.load_tools()

        transcript: list[ChatMessage] = [ChatMessage.system(self._settings.system_prompt)]
        transcript.extend(ChatMessage(role=m.role, content=m.content) for m in request.history)
        transcript.append(ChatMessage.user(request.message))

        max_rounds = self._settings.max_tool_rounds
        message = ChatMessage.assistant()
        for round_index in range(max_rounds + 1):
            offered = tools if round_index < max_rounds else []
            message = await self._complete(transcript, offered, round_index)
            if not message.tool_calls or round_index == max_rounds:
                break
            transcript.append(message)
            for call in message.tool_calls:
                transcript.append(await self._run_tool_call(call))

        if message.tool_calls:
            logger.warning("Model still requested tools after %d round(s); returning partial reply", max_rounds)
            reply = message.content or f"(stopped after {max_rounds} tool round(s))"
        else:
            reply = message.content or ""
        return ChatReply(reply=reply, raw=message.to_provider())

    async def load_tools(self) -> list[dict[str, Any]]:
        """Fetch and convert the router's tools; an empty list if the router fails."""
        try:
            raw_tools = await self._router.list_tools()
        except RouterError as exc:
            logger.warning("Tool list unavailable from %s, continuing without tools: %s", self._router.url, exc)
            return []
        return to_function_schemas(raw_tools)

    async def _complete(
        self,
        transcript: list[ChatMessage],
        tools: list[dict[str, Any]],
        round_index: int,
    ) -> ChatMessage:
        with _tracer.start_as_current_span("chat.completion") as span:
            span.set_attribute(ATTR_MODEL, self._settings.llm_model)
            span.set_attribute(ATTR_ROUND, round_index)
            span.set_attribute(ATTR_TOOL_COUNT, len(tools))

            call_kwargs: dict[str, Any] = {
                "model": self._settings.llm_model,
                "messages": [m.to_provider() for m in transcript],
                "temperature": self._temperature(round_index),
                "timeout": self._settings.timeout,
            }
            if self._settings.llm_api_key:
                call_kwargs["api_key"] = self._settings.llm_api_key
            if self._settings.llm_api_base:
                call_kwargs["api_base"] = self._settings.llm_api_base
            if tools:
                call_kwargs["tools"] = tools
                call_kwargs["tool_choice"] = "auto"

            response = await litellm.acompletion(**call_kwargs)  # pyright: ignore[reportUnknownMemberType]

            finish_reason = response.choices[0].finish_reason
            if finish_reason is not None:
                span.set_attribute(ATTR_FINISH_REASON, str(finish_reason))
            return self._parse_response(response)

    def _temperature(self, round_index: int) -> float:
        # Passes that follow tool results run cooler.
        return self._settings.temperature if round_index == 0 else self._settings.followup_temperature

    @staticmethod
    def _parse_response(response: Any) -> ChatMessage:
        """Convert a LiteLLM (OpenAI-shaped) response into a ChatMessage."""
        message = response.choices[0].message

        tool_calls: list[ToolCall] = []
        for tc in message.tool_calls or []:
            fields: dict[str, Any] = {
                "name": tc.function.name,
                "arguments": tc.function.arguments or "{}",
            }
            if isinstance(tc.id, str) and tc.id:
                fields["id"] = tc.id
            tool_calls.append(ToolCall(**fields))

        return ChatMessage.assistant(message.content, tool_calls=tool_calls)

    async def _run_tool_call(self, call: ToolCall) -> ChatMessage:
        with _tracer.start_as_current_span("chat.tool_call") as span:
            span.set_attribute(ATTR_TOOL_NAME, call.name)
            try:
                result = await self._router.call_tool(call.name, call.parsed_arguments())
            except RouterError as exc:
                mark_error(span, exc)
                logger.warning("Tool call %s failed: %s", call.name, exc)
                content = f"Tool error: {exc}"
            else:
                content = json.dumps(tool_message_payload(result), indent=2)
        return ChatMessage.tool(content, tool_call_id=call.id, name=call.name)

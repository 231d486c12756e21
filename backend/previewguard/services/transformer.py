"""Code transformer — the generative service the sanitizer talks to.

The sanitizer only needs one capability: send an instruction plus a user
message, get back text and a completion status. Anything that implements
CodeTransformer can be plugged in (tests use a scripted fake).
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

import structlog
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from previewguard.config import get_settings

logger = structlog.get_logger()


class CompletionStatus(str, Enum):
    """Why the model stopped generating."""

    STOP = "stop"
    LENGTH = "length"          # Cut off by the token limit
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "CompletionStatus":
        """Map a provider finish reason onto a known status."""
        if not raw:
            return cls.UNKNOWN
        normalized = str(raw).lower()
        if normalized in ("max_tokens", "max_output_tokens"):
            return cls.LENGTH
        if normalized in ("end_turn", "stop_sequence", "eos"):
            return cls.STOP
        try:
            return cls(normalized)
        except ValueError:
            return cls.UNKNOWN


class TransformResult(BaseModel):
    """Generated text plus the metadata the sanitizer inspects."""

    text: str
    completion_status: CompletionStatus = CompletionStatus.UNKNOWN
    input_tokens: int = 0
    output_tokens: int = 0


class CodeTransformer(ABC):
    """Abstract generative code-transformation service."""

    @abstractmethod
    async def transform(self, instruction: str, user_message: str) -> TransformResult:
        """Send the instruction and user message, return the generated text."""
        ...


class ChatModelTransformer(CodeTransformer):
    """CodeTransformer backed by an OpenAI-compatible chat completion endpoint."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ):
        settings = get_settings()
        self.model_name = model_name or settings.SANITIZER_MODEL
        self.temperature = settings.SANITIZER_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.SANITIZER_MAX_TOKENS
        self._llm = None

    @property
    def llm(self):
        """Lazy-initialize the LLM client."""
        if self._llm is None:
            self._llm = self._create_llm()
        return self._llm

    def _create_llm(self):
        """Create the chat client.

        Client retries are off: the sanitizer's attempt loop is the only retry layer.
        """
        settings = get_settings()

        return ChatOpenAI(
            model=self.model_name,
            api_key=settings.LLM_API_KEY,
            base_url=settings.LLM_BASE_URL,
            temperature=self.temperature,
            max_tokens=self.max_output_tokens,
            timeout=settings.LLM_TIMEOUT_SECONDS,
            max_retries=0,
        )

    async def transform(self, instruction: str, user_message: str) -> TransformResult:
        messages = [
            SystemMessage(content=instruction),
            HumanMessage(content=user_message),
        ]

        response = await self.llm.ainvoke(messages)

        metadata = getattr(response, "response_metadata", {}) or {}
        usage = getattr(response, "usage_metadata", {}) or {}

        result = TransformResult(
            text=self._content_text(response.content),
            completion_status=CompletionStatus.parse(
                metadata.get("finish_reason") or metadata.get("stop_reason")
            ),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
        )

        logger.info(
            "transform_complete",
            model=self.model_name,
            completion_status=result.completion_status.value,
            input_tokens=result.input_tokens,
            output_tokens=result.output_tokens,
            output_length=len(result.text),
        )
        return result

    @staticmethod
    def _content_text(content) -> str:
        """Flatten string or content-block message content into text."""
        if isinstance(content, str):
            return content
        parts = []
        for block in content or []:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)

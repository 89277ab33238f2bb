# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: OpenAIChat
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Any, List, Optional, Sequence

from openai import OpenAI

from utility.errors import InvalidInputError, ProviderError
from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}

HISTORY_ROLES = ("user", "assistant")


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "prompt_tokens": self.prompt_tokens,
            "completion_tokens": self.completion_tokens,
            "total_tokens": self.total_tokens,
        }


@dataclass(frozen=True)
class GenerationResult:
    text: str
    usage: TokenUsage
    model: Optional[str] = None
    finish_reason: Optional[str] = None


@dataclass
class OpenAIChat:
    """
        Generation gateway over OpenAI chat completions.

        Expected Config fields:
          cfg.openai_api_key: str
          cfg.openai_base_url: str (optional)
          cfg.openai_chat_model: str  (e.g. "gpt-4o-mini")
    """

    cfg: Any
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        self.model = getattr(self.cfg, "openai_chat_model", None)
        if not self.model:
            raise ValueError("Config missing openai_chat_model.")

        if self.client is None:
            if not getattr(self.cfg, "openai_api_key", None):
                raise ValueError("Config is missing openai_api_key")
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=getattr(self.cfg, "openai_base_url", None) or None,
            )

        self.logger.info("OpenAIChat initialised (model=%s)", self.model)

    # Standard chat call
    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.0,
            max_tokens: int = 512,
    ) -> Any:
        if not messages:
            raise InvalidInputError("messages must be non-empty.")

        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        self.logger.debug(
            "Chat request: model=%s temp=%s max_tokens=%s messages=%d",
            self.model, temperature, max_tokens, len(messages)
        )

        try:
            resp = self.client.chat.completions.create(**params)
        except Exception as e:
            self.logger.error("Chat completion failed: %s", e, exc_info=True)
            raise ProviderError(f"Completion failed: {e}") from e

        self.logger.debug("Raw ChatCompletion response: %r", resp)
        return resp

    @staticmethod
    def history_messages(history: Optional[Sequence[Dict[str, Any]]]) -> List[Message]:
        """Keep only finished user/assistant turns with text content."""
        out: List[Message] = []
        for msg in history or []:
            role = msg.get("role") if isinstance(msg, dict) else None
            content = msg.get("content") if isinstance(msg, dict) else None
            if role in HISTORY_ROLES and isinstance(content, str) and content.strip():
                out.append({"role": role, "content": content})
        return out

    def complete(
            self,
            system_prompt: str,
            user_prompt: str,
            *,
            history: Optional[Sequence[Dict[str, Any]]] = None,
            temperature: float = 0.3,
            max_tokens: int = 1500,
    ) -> GenerationResult:
        """
        system prompt -> prior turns -> user prompt, one completion.
        Callers bound `history` themselves; it is forwarded as given.
        """
        if not user_prompt or not user_prompt.strip():
            raise InvalidInputError("user_prompt must not be empty")

        messages: List[Message] = [{"role": "system", "content": system_prompt}]
        messages.extend(self.history_messages(history))
        messages.append({"role": "user", "content": user_prompt})

        resp = self.chat(messages, temperature=temperature, max_tokens=max_tokens)

        try:
            choice = resp.choices[0]
            content = choice.message.content or ""
        except (AttributeError, IndexError, TypeError) as e:
            self.logger.error("Unexpected chat response format: %s", e, exc_info=True)
            raise ProviderError(f"Unexpected chat response format: {e}") from e

        raw_usage = getattr(resp, "usage", None)
        usage = TokenUsage(
            prompt_tokens=int(getattr(raw_usage, "prompt_tokens", 0) or 0),
            completion_tokens=int(getattr(raw_usage, "completion_tokens", 0) or 0),
            total_tokens=int(getattr(raw_usage, "total_tokens", 0) or 0),
        )

        self.logger.info(
            "Chat answer generated (model=%s, total_tokens=%d)",
            getattr(resp, "model", None),
            usage.total_tokens,
        )

        return GenerationResult(
            text=content,
            usage=usage,
            model=getattr(resp, "model", None),
            finish_reason=getattr(choice, "finish_reason", None),
        )

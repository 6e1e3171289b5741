# Wraps the third-party chat-completion service; times each call and surfaces token usage
# app/services/completion_client.py
import threading
import time

from pydantic import BaseModel
from langchain_openai import ChatOpenAI
from langchain_core.messages import HumanMessage, SystemMessage

from app.utils.config import Settings, settings
from app.utils.errors import UnconfiguredServiceError, UpstreamError
from app.utils.logger import logger

SYSTEM_PROMPT = (
    "You are an expert coding mentor and teacher. "
    "Provide helpful, educational, and encouraging responses."
)


class CompletionConfig(BaseModel):
    """Connection and model parameters for the completion service."""
    api_key: str | None = None
    model: str = "gpt-3.5-turbo"
    base_url: str | None = None
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: float | None = None
    max_retries: int = 0

    @classmethod
    def from_settings(cls, config: Settings) -> "CompletionConfig":
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model_name,
            base_url=config.openai_base_url,
            temperature=config.llm_temperature,
            max_tokens=config.llm_max_tokens,
            timeout_seconds=config.llm_timeout_seconds,
            max_retries=config.llm_max_retries,
        )


class CompletionResult(BaseModel):
    content: str
    total_tokens: int | None = None
    response_time_ms: int = 0


def _total_tokens(message) -> int | None:
    """Reads the total token count from an AI message, if the service reported one."""
    usage = getattr(message, "usage_metadata", None) or {}
    if usage.get("total_tokens") is not None:
        return int(usage["total_tokens"])
    token_usage = (getattr(message, "response_metadata", None) or {}).get("token_usage") or {}
    if token_usage.get("total_tokens") is not None:
        return int(token_usage["total_tokens"])
    return None


class CompletionClient:
    def __init__(self, config: CompletionConfig):
        self.config = config
        self._llm = None
        self._init_lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def ensure_configured(self):
        if not self.is_configured:
            raise UnconfiguredServiceError()

    def _get_llm(self):
        """Builds the chat model on first use."""
        with self._init_lock:
            if self._llm is None:
                logger.info(f"Initializing completion client for model '{self.config.model}'")
                self._llm = ChatOpenAI(
                    api_key=self.config.api_key,
                    model=self.config.model,
                    base_url=self.config.base_url,
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                    timeout=self.config.timeout_seconds,
                    max_retries=self.config.max_retries,
                )
            return self._llm

    async def complete(self, prompt: str) -> CompletionResult:
        """
        Sends the prompt with the fixed mentor system prompt and returns the reply
        text, total token usage (if reported) and the wall-clock latency in ms.
        """
        self.ensure_configured()
        llm = self._get_llm()
        messages = [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=prompt)]

        start = time.perf_counter()
        try:
            message = await llm.ainvoke(messages)
        except Exception as e:
            logger.error(f"Completion service error: {e}")
            raise UpstreamError() from e
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        content = message.content if isinstance(message.content, str) else str(message.content)
        result = CompletionResult(
            content=content,
            total_tokens=_total_tokens(message),
            response_time_ms=max(elapsed_ms, 0),
        )
        logger.debug(f"Completion received in {result.response_time_ms}ms, tokens={result.total_tokens}")
        return result


completion_client = CompletionClient(CompletionConfig.from_settings(settings))

def get_completion_client() -> CompletionClient:
    """Dependency returning the process-wide completion client."""
    return completion_client

import asyncio
import logging
from typing import Any, Callable, Optional

from openai import APITimeoutError, AsyncOpenAI

from critic.config import CritiqueConfig

from .exceptions import Misconfigured, UpstreamTimeout
from .prompts import system_prompt_critique

logger = logging.getLogger(__name__)

REQUIRED_HEADERS = ("Detailed Diagnosis", "[Proposed Fix]", "<Test_Validation>")

ClientFactory = Callable[[CritiqueConfig], Any]


def create_openai_client(config: CritiqueConfig) -> AsyncOpenAI:
    """Create an async client for the OpenAI-compatible model endpoint."""
    return AsyncOpenAI(
        api_key=config.api_key.get_secret_value(),
        base_url=config.base_url,
        max_retries=config.max_retries,
        timeout=config.timeout_seconds,
    )


def has_all_headers(text: str) -> bool:
    """True when every required section header occurs somewhere in the text."""
    return all(header in text for header in REQUIRED_HEADERS)


def extract_text(completion: Any) -> str:
    """Content of the first choice, or "" when the response lacks it."""
    choices = getattr(completion, "choices", None)
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else ""


class UpstreamDeadline:
    """Cancels a pending call once its time budget is spent.

    Arm it before the call starts and disarm it when the call settles.
    """

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        self.expired = False
        self._handle: Optional[asyncio.TimerHandle] = None

    def arm(self, call: asyncio.Future) -> None:
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.timeout_ms / 1000, self._fire, call)

    def _fire(self, call: asyncio.Future) -> None:
        self.expired = True
        call.cancel()

    def disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class CompletionInvoker:
    """Issues exactly one chat completion per critique under a hard deadline."""

    def __init__(
        self,
        config: CritiqueConfig,
        client_factory: ClientFactory = create_openai_client,
    ):
        self.config = config
        self.client_factory = client_factory

    @property
    def model(self) -> str:
        return self.config.model

    async def complete(self, prompt: str) -> str:
        """
        Send the prompt and return the generated text.

        Raises:
            Misconfigured: no credential is configured; nothing is sent
            UpstreamTimeout: the call did not settle within the deadline
        """
        if not self.config.has_credential:
            raise Misconfigured()

        # The client owns a connection pool; leaving the block closes it
        async with self.client_factory(self.config) as client:
            call = asyncio.ensure_future(
                client.chat.completions.create(
                    model=self.config.model,
                    temperature=self.config.temperature,
                    max_tokens=self.config.max_tokens,
                    messages=[
                        {"role": "system", "content": system_prompt_critique},
                        {"role": "user", "content": prompt},
                    ],
                )
            )

            deadline = UpstreamDeadline(self.config.timeout_ms)
            deadline.arm(call)
            try:
                completion = await call
            except asyncio.CancelledError:
                if deadline.expired:
                    raise UpstreamTimeout(self.config.timeout_ms) from None
                raise
            except APITimeoutError as e:
                raise UpstreamTimeout(self.config.timeout_ms) from e
            finally:
                deadline.disarm()

        return extract_text(completion)

import logging
from typing import Any, Optional, Tuple

from critic.common.logging_config import generate_request_id, set_request_id

from .dto import CritiqueFailure, CritiqueResult, CritiqueSuccess
from .exceptions import CritiqueException, ServerError, UpstreamTimeout
from .invoker import CompletionInvoker, has_all_headers
from .prompt_builder import build_prompt
from .validation import ensure_json_content_type, parse_json_body, validate_request

logger = logging.getLogger(__name__)


class CritiquePipeline:
    """
    Validator -> prompt builder -> model invoker -> response classifier.

    Stateless apart from its invoker; every call is independent and every
    failure is turned into a CritiqueFailure carrying its HTTP status.
    """

    def __init__(self, invoker: CompletionInvoker):
        self.invoker = invoker

    async def handle_http(
        self, content_type: str, body: bytes, request_id: Optional[str] = None
    ) -> Tuple[int, CritiqueResult]:
        """Run the pipeline on a raw HTTP body, checking the declared content type first."""
        request_id = request_id or generate_request_id()
        set_request_id(request_id)
        try:
            ensure_json_content_type(content_type)
            payload = parse_json_body(body)
        except CritiqueException as e:
            return self._failure(request_id, e)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error while reading critique request body")
            return self._failure(request_id, ServerError())
        return await self.run(payload, request_id=request_id)

    async def run(
        self, payload: Any, request_id: Optional[str] = None
    ) -> Tuple[int, CritiqueResult]:
        """Run the pipeline on an already parsed JSON value."""
        request_id = request_id or generate_request_id()
        set_request_id(request_id)

        try:
            request = validate_request(payload)
            logger.info("Critique requested | id=%s model=%s", request.id, self.invoker.model)

            prompt = build_prompt(request)
            text = await self.invoker.complete(prompt)
        except CritiqueException as e:
            return self._failure(request_id, e)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error while running critique")
            return self._failure(request_id, ServerError())

        result = CritiqueSuccess(
            request_id=request_id,
            id=request.id,
            model=self.invoker.model,
            has_all_headers=has_all_headers(text),
            text=text,
        )
        logger.info(
            "Critique completed | id=%s has_all_headers=%s chars=%d",
            request.id,
            result.has_all_headers,
            len(text),
        )
        return 200, result

    @staticmethod
    def _failure(request_id: str, error: CritiqueException) -> Tuple[int, CritiqueFailure]:
        if isinstance(error, UpstreamTimeout):
            logger.warning("Critique timed out after %dms", error.timeout_ms)
        elif error.status_code >= 500:
            logger.error("Critique failed | %s", error.message)
        else:
            logger.info("Critique rejected | status=%d error=%s", error.status_code, error.message)

        return error.status_code, CritiqueFailure(
            request_id=request_id,
            error=error.public_message,
            details=error.details,
        )

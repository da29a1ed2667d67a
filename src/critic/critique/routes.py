from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .dto import CritiqueResult, dump_result
from .pipeline import CritiquePipeline
from .validation import is_json_content_type

router = APIRouter(prefix="/api", tags=["critique"])

NO_STORE = {"Cache-Control": "no-store"}


def get_critique_pipeline(request: Request) -> CritiquePipeline:
    """Dependency returning the pipeline built at application startup."""
    return request.app.state.critique_pipeline


def critique_response(status_code: int, result: CritiqueResult) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content=dump_result(result), headers=NO_STORE
    )


@router.post(
    "/critique",
    responses={
        400: {"description": "Invalid request body"},
        415: {"description": "Content-Type must be application/json"},
        500: {"description": "Server misconfigured or server error"},
        504: {"description": "Upstream model request timed out"},
    },
)
async def create_critique(
    request: Request,
    pipeline: CritiquePipeline = Depends(get_critique_pipeline),
) -> JSONResponse:
    """
    Request a three-section critique of a buggy solution.

    The body is read raw so that the content type can be checked before
    any parsing happens.
    """
    content_type = request.headers.get("content-type", "")
    body = b""
    if is_json_content_type(content_type):
        body = await request.body()

    status_code, result = await pipeline.handle_http(
        content_type, body, request_id=getattr(request.state, "request_id", None)
    )
    return critique_response(status_code, result)

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from critic.critique.pipeline import CritiquePipeline
from critic.critique.routes import critique_response, get_critique_pipeline

from .dto import Sample, SampleSummary
from .store import DEFAULT_PAGE_SIZE, SampleStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/samples", tags=["samples"])


def get_sample_store(request: Request) -> SampleStore:
    return request.app.state.sample_store


def _get_sample_or_404(store: SampleStore, sample_id: str) -> Sample:
    sample = store.get(sample_id)
    if sample is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No sample found for id: {sample_id}",
        )
    return sample


@router.get("", response_model=List[SampleSummary])
def list_samples(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=200),
    store: SampleStore = Depends(get_sample_store),
) -> List[SampleSummary]:
    """Most recent samples first."""
    return store.list_recent(limit)


@router.get("/{sample_id}", response_model=Sample)
def get_sample(sample_id: str, store: SampleStore = Depends(get_sample_store)) -> Sample:
    return _get_sample_or_404(store, sample_id)


@router.post("/{sample_id}/critique")
async def critique_sample(
    sample_id: str,
    request: Request,
    store: SampleStore = Depends(get_sample_store),
    pipeline: CritiquePipeline = Depends(get_critique_pipeline),
) -> JSONResponse:
    """Run the critique pipeline on a stored sample."""
    sample = _get_sample_or_404(store, sample_id)
    logger.debug("Forwarding sample %s to critique pipeline", sample_id)

    status_code, result = await pipeline.run(
        sample.to_critique_payload(),
        request_id=getattr(request.state, "request_id", None),
    )
    return critique_response(status_code, result)

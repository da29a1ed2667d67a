import platform
import time
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, status
from pydantic import BaseModel, Field

from critic import __version__

router = APIRouter(tags=["healthcheck"], prefix="/health")

# Track application start time for uptime calculation
START_TIME = time.time()


class ComponentHealth(BaseModel):
    """Health status of an individual system component."""

    status: str = Field(..., description="Status of the component (OK, WARNING, ERROR)")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Additional details about component health"
    )


class HealthCheck(BaseModel):
    """Response model for system health information."""

    status: str = Field(..., description="Overall system status")
    version: str = Field(..., description="Application version")
    uptime_seconds: int = Field(..., description="Application uptime in seconds")
    timestamp: datetime = Field(
        default_factory=datetime.now, description="Time when health check was performed"
    )
    components: Dict[str, ComponentHealth] = Field(
        default_factory=dict, description="Status of individual components"
    )


def _model_health(request: Request) -> ComponentHealth:
    config = request.app.state.critique_pipeline.invoker.config
    if not config.has_credential:
        return ComponentHealth(status="WARNING", details={"reason": "HF_TOKEN missing"})
    return ComponentHealth(
        status="OK", details={"model": config.model, "timeout_ms": config.timeout_ms}
    )


@router.get(
    "",
    summary="Perform a Health Check",
    response_description="Return HTTP Status Code 200 (OK) with system health information",
    status_code=status.HTTP_200_OK,
    response_model=HealthCheck,
)
async def get_health(request: Request) -> HealthCheck:
    """
    ## Perform a Health Check

    Reports uptime, version and whether the model endpoint is configured.
    A missing credential shows up as a WARNING component; the service itself
    keeps answering and critique requests fail with a configuration error.
    """
    components = {
        "system": ComponentHealth(
            status="OK",
            details={
                "platform": platform.platform(),
                "python_version": platform.python_version(),
            },
        ),
        "model": _model_health(request),
        "samples": ComponentHealth(
            status="OK", details={"count": len(request.app.state.sample_store)}
        ),
    }

    return HealthCheck(
        status="OK",
        version=__version__,
        uptime_seconds=int(time.time() - START_TIME),
        components=components,
    )


@router.get(
    "/live",
    summary="Liveness Check",
    response_description="Simple liveness check that always returns OK if service is running",
    status_code=status.HTTP_200_OK,
)
async def get_liveness():
    return {"status": "OK"}

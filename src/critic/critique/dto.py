from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BaseDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CritiqueRequest(BaseDTO):
    """A validated critique request. Unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", strict=True)

    id: str = Field(min_length=1)
    prd: str = Field(min_length=1, description="Problem statement")
    buggy_solution_code: str = Field(min_length=1)
    failure_info: Any = Field(default=None, description="Failing tests or trace")
    label: Optional[str] = None
    qwq_critique: Optional[str] = None
    meta: Any = None


class CritiqueSuccess(BaseDTO):
    ok: Literal[True] = True
    request_id: str
    id: str
    model: str
    has_all_headers: bool = Field(alias="hasAllHeaders")
    text: str


class CritiqueFailure(BaseDTO):
    ok: Literal[False] = False
    request_id: str
    error: str
    details: Optional[Any] = None


CritiqueResult = Union[CritiqueSuccess, CritiqueFailure]


def dump_result(result: CritiqueResult) -> dict:
    """Serialize a result into its wire shape, leaving out empty details."""
    data = result.model_dump(mode="json", by_alias=True)
    if data.get("details", False) is None:
        del data["details"]
    return data

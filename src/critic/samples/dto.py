from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class SampleSummary(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    question_id: Optional[str] = None
    label: Optional[str] = None


class Sample(SampleSummary):
    """A stored coding-problem sample as the display layer sees it."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    prd: Optional[str] = None
    buggy_solution_code: Optional[str] = None
    failure_info: Any = None
    meta: Any = None
    created_at: Optional[datetime] = None

    def summary(self) -> SampleSummary:
        return SampleSummary(id=self.id, question_id=self.question_id, label=self.label)

    def to_critique_payload(self) -> dict:
        """Fields forwarded into a critique request; missing optionals are left out."""
        payload = {
            "id": self.id,
            "prd": self.prd,
            "buggy_solution_code": self.buggy_solution_code,
            "failure_info": self.failure_info,
        }
        if self.label is not None:
            payload["label"] = self.label
        if self.meta is not None:
            payload["meta"] = self.meta
        return payload

"""
Deterministic prompt construction for critique requests.

Every untrusted text field is bounded on its own, and the assembled prompt is
bounded once more. Truncation is always visible through a marker that names
the number of dropped characters.
"""

import json
from typing import Any

from .dto import CritiqueRequest
from .prompts import critique_prompt

MAX_PRD_CHARS = 20_000
MAX_CODE_CHARS = 20_000
MAX_FAILURE_INFO_CHARS = 12_000  # serialized
MAX_PROMPT_CHARS = 60_000

TRUNCATION_MARKER = "\n\n...[TRUNCATED {dropped} chars]"


def truncate(text: str, max_chars: int) -> str:
    """Keep the first max_chars characters and append the truncation marker."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER.format(dropped=len(text) - max_chars)


def serialize_failure_info(failure_info: Any) -> str:
    """Pretty-print failure info as JSON, or the literal "null" if that is impossible."""
    try:
        raw = json.dumps(failure_info, indent=2, ensure_ascii=False, allow_nan=False)
    except Exception:  # pylint: disable=broad-except
        return "null"
    return truncate(raw, MAX_FAILURE_INFO_CHARS)


def build_prompt(request: CritiqueRequest) -> str:
    prd = truncate(request.prd, MAX_PRD_CHARS)
    code = truncate(request.buggy_solution_code, MAX_CODE_CHARS)
    failure_info = serialize_failure_info(request.failure_info)
    label = request.label if request.label is not None else "null"

    prompt = critique_prompt.format(
        prd=prd.strip(),
        buggy_code=code.strip(),
        failure_info=failure_info,
        label=label,
    )
    return truncate(prompt, MAX_PROMPT_CHARS)

from .dto import CritiqueFailure, CritiqueRequest, CritiqueResult, CritiqueSuccess
from .invoker import CompletionInvoker
from .pipeline import CritiquePipeline
from .prompt_builder import build_prompt

__all__ = [
    "CompletionInvoker",
    "CritiqueFailure",
    "CritiquePipeline",
    "CritiqueRequest",
    "CritiqueResult",
    "CritiqueSuccess",
    "build_prompt",
]

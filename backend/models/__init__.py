# Models module
from models.explanation import (
    ExplainRequest,
    ExplanationResult,
    StepItem,
    Concept,
    OptimizationSuggestion,
    ComplexityAnalysis,
    BlackboxComponent,
    RawProviderPayload,
    ErrorResponse,
)
from models.history import (
    NewHistoryRecord,
    HistoryRecord,
)

__all__ = [
    "ExplainRequest",
    "ExplanationResult",
    "StepItem",
    "Concept",
    "OptimizationSuggestion",
    "ComplexityAnalysis",
    "BlackboxComponent",
    "RawProviderPayload",
    "ErrorResponse",
    "NewHistoryRecord",
    "HistoryRecord",
]

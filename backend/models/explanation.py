"""
Pydantic models for code explanation data.

Wire format is camelCase (keyPoints, stepByStep, ...); Python attributes
are snake_case. Both spellings are accepted on input.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Literal, Optional


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ExplainRequest(_CamelModel):
    """User's code explanation request."""

    code: str = Field("", description="Source code to explain (1..10000 chars)")
    language: str = Field("", description="Declared language tag, e.g. 'javascript'")

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "code": 'console.log("Hello, World!");',
                "language": "javascript",
            }
        }


class StepItem(_CamelModel):
    """One entry of the step-by-step breakdown."""
    step: str = ""
    description: str = ""
    color: str = ""  # UI accent, e.g. "blue", "green"


class Concept(_CamelModel):
    name: str = ""
    description: str = ""


class OptimizationSuggestion(_CamelModel):
    issue: str = ""
    solution: str = ""
    example: str = ""


class ComplexityAnalysis(_CamelModel):
    """Big-O summary of the submitted code."""
    time_complexity: str = "O(1)"
    space_complexity: str = "O(1)"
    analysis: str = "Basic complexity analysis"


class BlackboxComponent(_CamelModel):
    """External dependency the code relies on, with a risk assessment."""
    name: str = ""
    type: str = ""
    description: str = ""
    is_blackbox: bool = True
    risk_level: Literal["low", "medium", "high"] = "medium"
    recommendations: List[str] = Field(default_factory=list)


class ExplanationResult(_CamelModel):
    """Fully populated explanation, as returned by POST /api/explain-code."""

    # Required
    explanation: str = Field(..., min_length=1, description="Overview of what the code does")
    detected_language: str = Field(..., min_length=1, description="Language reported by the model")

    # Optional analysis, default-filled by the normalizer
    key_points: List[str] = Field(default_factory=list)
    step_by_step: List[StepItem] = Field(default_factory=list)
    concepts: List[Concept] = Field(default_factory=list)
    performance_notes: Optional[str] = None
    optimization_suggestions: List[OptimizationSuggestion] = Field(default_factory=list)
    complexity_analysis: ComplexityAnalysis = Field(default_factory=ComplexityAnalysis)
    blackbox_components: List[BlackboxComponent] = Field(default_factory=list)

    # Metadata
    response_time: float = Field(0.0, description="Provider call latency in seconds")


class RawProviderPayload(BaseModel):
    """
    Parsed but unvalidated provider output.

    `data` is whatever JSON object the model produced; nothing about its
    fields is trusted until it goes through the normalizer.
    """

    data: Dict[str, Any]
    raw_text: str = ""
    model: str = ""


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""
    error: str
    field: Optional[str] = None

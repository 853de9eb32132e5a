"""
Provider payload parsing and normalization.

Two steps, both pure:
1. parse_provider_payload(text) -> RawProviderPayload
   Turns model text into a JSON object and checks the two required fields.
2. normalize_explanation(payload, response_time) -> ExplanationResult
   Builds the fixed result shape, default-filling every optional field.

Policy for optional fields that are present but malformed:
- wrong container type (e.g. keyPoints is a string) -> field default
- list entries: scalars are stringified for string lists, objects keep
  their known keys (missing keys -> ""), anything else is dropped
The normalizer never fails on optional fields.
"""

import json
import re
from typing import Any, Dict, List, Optional

from models.explanation import (
    ExplanationResult,
    StepItem,
    Concept,
    OptimizationSuggestion,
    ComplexityAnalysis,
    BlackboxComponent,
    RawProviderPayload,
)
from services.explainer.errors import MalformedResponseError


REQUIRED_FIELDS = ("explanation", "detectedLanguage")

RISK_LEVELS = ("low", "medium", "high")

DEFAULT_COMPLEXITY = {
    "timeComplexity": "O(1)",
    "spaceComplexity": "O(1)",
    "analysis": "Basic complexity analysis",
}

# ```json ... ``` wrapper some models add despite instructions
_FENCE_RE = re.compile(r"^\s*```(?:json|JSON)?\s*\n(.*?)\n?\s*```\s*$", re.DOTALL)


def parse_provider_payload(text: Optional[str], model: str = "") -> RawProviderPayload:
    """
    Parse model output into a tagged raw payload.

    Raises:
        MalformedResponseError: empty text, invalid JSON, a non-object
            value, or a missing/empty required field
    """
    if not text or not text.strip():
        raise MalformedResponseError("empty response")

    body = text
    fenced = _FENCE_RE.match(text)
    if fenced:
        body = fenced.group(1)

    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"response is not valid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(f"expected a JSON object, got {type(data).__name__}")

    _check_required(data)

    return RawProviderPayload(data=data, raw_text=text, model=model)


def normalize_explanation(
    payload: RawProviderPayload,
    response_time: float = 0.0,
) -> ExplanationResult:
    """
    Build a fully populated ExplanationResult from a raw payload.

    Args:
        payload: Output of parse_provider_payload
        response_time: Provider call latency in seconds
    """
    data = payload.data
    _check_required(data)

    return ExplanationResult(
        explanation=data["explanation"],
        detected_language=data["detectedLanguage"],
        key_points=_string_list(data.get("keyPoints")),
        step_by_step=[
            StepItem(**_pick(item, "step", "description", "color"))
            for item in _object_list(data.get("stepByStep"))
        ],
        concepts=[
            Concept(**_pick(item, "name", "description"))
            for item in _object_list(data.get("concepts"))
        ],
        performance_notes=_optional_string(data.get("performanceNotes")),
        optimization_suggestions=[
            OptimizationSuggestion(**_pick(item, "issue", "solution", "example"))
            for item in _object_list(data.get("optimizationSuggestions"))
        ],
        complexity_analysis=_complexity(data.get("complexityAnalysis")),
        blackbox_components=[
            _blackbox(item) for item in _object_list(data.get("blackboxComponents"))
        ],
        response_time=response_time,
    )


def _check_required(data: Dict[str, Any]) -> None:
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise MalformedResponseError(f"missing required field '{field}'")


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_as_text(item) for item in value if _is_scalar(item)]


def _object_list(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _pick(item: Dict[str, Any], *keys: str) -> Dict[str, str]:
    """Known keys as text; missing or non-scalar values become ""."""
    return {
        key: _as_text(item[key]) if _is_scalar(item.get(key)) else ""
        for key in keys
    }


def _optional_string(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _complexity(value: Any) -> ComplexityAnalysis:
    source = value if isinstance(value, dict) else {}
    fields = {}
    for key, default in DEFAULT_COMPLEXITY.items():
        raw = source.get(key)
        fields[key] = _as_text(raw) if _is_scalar(raw) and str(raw).strip() else default
    return ComplexityAnalysis(
        time_complexity=fields["timeComplexity"],
        space_complexity=fields["spaceComplexity"],
        analysis=fields["analysis"],
    )


def _blackbox(item: Dict[str, Any]) -> BlackboxComponent:
    risk = str(item.get("riskLevel", "")).strip().lower()
    is_blackbox = item.get("isBlackbox", True)
    return BlackboxComponent(
        **_pick(item, "name", "type", "description"),
        is_blackbox=is_blackbox if isinstance(is_blackbox, bool) else True,
        risk_level=risk if risk in RISK_LEVELS else "medium",
        recommendations=_string_list(item.get("recommendations")),
    )


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

"""
Prompt templates for the code explainer.

Design principles:
1. Beginner-friendly explanations first
2. Every answer is a single JSON object
3. Two load-bearing fields: explanation, detectedLanguage
4. Concrete, example-backed optimization advice
"""


class ExplainerPrompts:
    """
    Prompt templates for code explanation.

    The user prompt embeds the submitted code verbatim inside a fenced block
    tagged with the declared language, then lists every field the response
    object must contain.
    """

    SYSTEM_PROMPT = (
        "You are an expert programming educator who explains code in a clear, "
        "beginner-friendly way. Always respond with valid JSON."
    )

    RESPONSE_FIELDS = """Please respond with a JSON object containing:
- explanation: A clear overview of what the code does
- detectedLanguage: The actual programming language detected (be specific, e.g., "Python", "JavaScript", "Java")
- keyPoints: Array of 3-5 key points about the code
- stepByStep: Array of objects with step, description, and color fields for step-by-step breakdown
- concepts: Array of objects with name and description for key programming concepts used
- performanceNotes: Performance analysis and optimization suggestions
- optimizationSuggestions: Array of objects with issue, solution, and example fields for specific improvements
- complexityAnalysis: Object with timeComplexity, spaceComplexity, and analysis fields
- blackboxComponents: Array of objects with name, type, description, isBlackbox (boolean), riskLevel ("low"/"medium"/"high"), and recommendations array

The fields "explanation" and "detectedLanguage" are required and must be non-empty strings."""

    FOCUS_AREAS = """Focus on:
1. Educational explanations for beginners
2. Algorithmic complexity analysis (Big O notation)
3. Specific optimization recommendations with examples
4. Data structure efficiency suggestions
5. Common performance pitfalls and solutions
6. Risk review of external dependencies

For optimization suggestions, provide specific examples like:
- "This loop has O(n²) complexity. Consider using a HashMap to reduce it to O(n)"
- "Linear search is inefficient. Use binary search for sorted arrays"
- "Recursive approach may cause stack overflow. Consider iterative solution"
- "Multiple array iterations can be combined into a single loop"

For blackbox component analysis, identify:
- External libraries, APIs, or third-party services
- Components with unknown internal implementation
- Whether components are transparent (code visible) or blackbox (opaque)
- A risk level and concrete recommendations for each component

Use one of these colors for each step: "blue", "green", "purple", "orange", "red".

Be specific about data structure choices and algorithmic improvements."""

    @staticmethod
    def build_explain_prompt(code: str, language: str) -> str:
        """
        Build the user prompt for one explanation request.

        The code is embedded exactly as submitted.
        """
        return f"""Analyze the following code and provide a comprehensive explanation with algorithmic analysis in JSON format.

Code:
```{language}
{code}
```

{ExplainerPrompts.RESPONSE_FIELDS}

{ExplainerPrompts.FOCUS_AREAS}

Respond with the JSON object only, without Markdown fences or commentary."""

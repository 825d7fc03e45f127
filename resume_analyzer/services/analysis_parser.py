import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from resume_analyzer.errors import MalformedResponse
from resume_analyzer.models import ResumeAnalysis

# Greedy: spans from the first "{" to the last "}" so nested objects stay intact.
# A brace in prose before the JSON therefore makes the reply malformed.
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def extract_completion_text(payload: Any) -> str:
    """Returns the first choice's message content of a chat completion."""
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponse("AI response did not contain a completion")
    if not isinstance(content, str):
        raise MalformedResponse("AI response did not contain a completion")
    return content


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Locates and parses the first top-level JSON object embedded in ``text``.

    The model is asked for bare JSON but may wrap it in prose or markdown
    fences. If the greedy match does not parse (e.g. trailing prose contains a
    stray brace), the first complete object at the match start is decoded.
    """
    match = JSON_OBJECT_PATTERN.search(text or "")
    if not match:
        raise MalformedResponse()

    candidate = match.group(0)
    try:
        parsed = json.loads(candidate)
    except RecursionError as e:
        raise MalformedResponse("AI response JSON is nested too deeply") from e
    except json.JSONDecodeError as e:
        try:
            parsed, _ = json.JSONDecoder().raw_decode(candidate)
        except (json.JSONDecodeError, RecursionError):
            raise MalformedResponse(str(e)) from e
    return parsed


def parse_analysis(text: str) -> ResumeAnalysis:
    data = extract_json_object(text)
    try:
        return ResumeAnalysis.model_validate(data)
    except (ValidationError, ValueError, OverflowError, RecursionError) as e:
        raise MalformedResponse(str(e)) from e

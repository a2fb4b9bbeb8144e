import json
import re
from typing import Any, List

def parse_llm_json(text: str) -> Any:
    """Parse a model reply that should be JSON, tolerating code fences and chatter"""
    if not text:
        raise ValueError("LLM returned an empty response")

    cleaned = re.sub(r"```(?:json)?", "", text, flags=re.IGNORECASE).strip("`").strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        # Fall back to the outermost object in the reply
        start = cleaned.find("{")
        end = cleaned.rfind("}") + 1
        if start != -1 and end > start:
            try:
                return json.loads(cleaned[start:end])
            except json.JSONDecodeError:
                pass
        raise ValueError(f"LLM did not return valid JSON. Error: {e}")

def string_list(value: Any, key: str) -> List[str]:
    """Pull a list of non-empty strings out of a parsed reply like {"key": [...]}"""
    items = value.get(key, []) if isinstance(value, dict) else value
    if not isinstance(items, list):
        raise ValueError(f"Expected a list under '{key}'")

    result = []
    for item in items:
        if isinstance(item, dict):
            item = item.get("text") or item.get("content") or ""
        item = str(item).strip()
        if item:
            result.append(item)
    return result

import logging
from typing import List
from llm_client import complete_json, use_openai
from utils import parse_llm_json, string_list

logger = logging.getLogger(__name__)

TONE_DESCRIPTIONS = {
    "Professional": "formal and business-like",
    "Friendly": "warm and approachable",
    "Enthusiastic": "excited and energetic",
    "Authoritative": "confident and commanding",
    "Humorous": "light-hearted and funny"
}

LENGTH_DESCRIPTIONS = {
    "short": "brief and concise",
    "medium": "balanced and informative",
    "long": "detailed and comprehensive"
}

CALL_TO_ACTION = " Call now to learn more about our exclusive offers!"

def describe_tone(tone: str) -> str:
    return TONE_DESCRIPTIONS.get(tone, "conversational")

def describe_length(length: str) -> str:
    return LENGTH_DESCRIPTIONS.get(length, "medium length")

def template_copy(motivation: str, tone: str, length: str, include_cta: bool) -> str:
    copy = f"{motivation} with a {describe_tone(tone)} tone. This copy is {describe_length(length)}."
    if include_cta:
        copy += CALL_TO_ACTION
    return copy

def generate_copy_variations(
    motivation: str,
    tone: str,
    length: str,
    count: int,
    include_cta: bool = False
) -> List[str]:
    """Ad copy texts derived from one motivation"""
    if not use_openai():
        return [template_copy(motivation, tone, length, include_cta) for _ in range(count)]

    cta_rule = "End each variation with a clear call to action." if include_cta else "Do not add a call to action."
    raw = complete_json(
        "You are a performance marketing copywriter.",
        f"""
Write exactly {count} distinct ad copy variations for this strategic motivation:
"{motivation}"

Tone: {tone} ({describe_tone(tone)})
Length: {length} ({describe_length(length)})
{cta_rule}

Return a JSON object with key "variations" containing an array of strings.
"""
    )
    variations = string_list(parse_llm_json(raw), "variations")[:count]
    if not variations:
        raise ValueError("Model returned no copy variations")

    logger.info(f"✅ {len(variations)} copy variations generated via OpenAI")
    return variations

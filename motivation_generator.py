import logging
from typing import List
from llm_client import complete_json, use_openai
from utils import parse_llm_json, string_list

logger = logging.getLogger(__name__)

TEMPLATE_MOTIVATIONS = [
    "Empower customers to achieve their goals with our innovative solutions",
    "Simplify complex processes to save time and reduce stress",
    "Build trust through transparency and consistent quality",
    "Create memorable experiences that customers want to share",
    "Demonstrate expertise while remaining accessible and approachable",
    "Highlight the unique value proposition that sets us apart from competitors"
]

def generate_strategic_motivations(brief_context: str, count: int = len(TEMPLATE_MOTIVATIONS)) -> List[str]:
    """
    Produce strategic motivation statements for a client brief.

    In template mode the brief is not read and the fixed statements are
    returned. In OpenAI mode the model is asked for ``count`` statements.
    """
    if not use_openai():
        return list(TEMPLATE_MOTIVATIONS)

    raw = complete_json(
        "You are a senior brand strategist. You write short, single-sentence "
        "strategic motivations that state the marketing angle a campaign should take.",
        f"""
From the sources below, write exactly {count} distinct strategic motivations.
Each must be one sentence, under 25 words, and must not mention a channel or format.

Sources:
{brief_context}

Return a JSON object with key "motivations" containing an array of strings.
""",
        temperature=0.7
    )
    motivations = string_list(parse_llm_json(raw), "motivations")[:count]
    if not motivations:
        raise ValueError("Model returned no motivations")

    logger.info(f"✅ {len(motivations)} motivations generated via OpenAI")
    return motivations

from openai import OpenAI
from config import config


_client = None

def get_openai_client() -> OpenAI:
    """Shared OpenAI client, created on first use"""
    global _client
    if _client is None:
        if not config.OPENAI_API_KEY:
            raise RuntimeError("OPENAI_API_KEY is not set")
        _client = OpenAI(api_key=config.OPENAI_API_KEY)
    return _client

def use_openai() -> bool:
    return config.AI_PROVIDER == "openai"

def complete_json(system_prompt: str, user_prompt: str, temperature: float = 0.6) -> str:
    """Run a JSON-mode chat completion and return the raw message content"""
    client = get_openai_client()
    response = client.chat.completions.create(
        model=config.OPENAI_MODEL,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt}
        ],
        temperature=temperature,
        response_format={"type": "json_object"}
    )
    return response.choices[0].message.content

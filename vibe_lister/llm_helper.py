# vibe_lister/llm_helper.py
# ---------------------------------------------------------------------------
# OpenAI helper: asks the chat model for a playlist name and song suggestions.
# The reply is returned as free text; vibe_lister.parsing picks it apart.
# ---------------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Optional, Sequence

from openai import AsyncOpenAI

from vibe_lister.config import Settings

SYSTEM_PROMPT = "You are a playlist curator."


def build_prompt(mood: str, song_count: int, genres: Optional[Sequence[str]] = None) -> str:
    prompt = (
        f"Generate a fun playlist name and {song_count} song suggestions "
        f"(artist + title) for this mood: {mood}"
    )
    if genres:
        prompt += (
            f". IMPORTANT: Only include songs from one of these genres: {', '.join(genres)}. "
            "Do not include any songs from other genres."
        )
    return prompt


def make_llm_client(settings: Settings) -> AsyncOpenAI:
    # an empty key still builds the client; calls then fail upstream with 401
    return AsyncOpenAI(api_key=settings.openai_api_key)


async def generate_text(
    llm: Any,
    mood: str,
    song_count: int,
    genres: Optional[Sequence[str]] = None,
    model: str = "gpt-4",
) -> str:
    """Return the model's raw playlist text for the given mood.

    ``llm`` is anything shaped like ``openai.AsyncOpenAI``. API errors and
    replies without a first choice propagate to the caller.
    """
    res = await llm.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(mood, song_count, genres)},
        ],
    )
    return res.choices[0].message.content or ""

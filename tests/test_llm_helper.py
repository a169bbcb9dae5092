import pytest

from tests.support.stubs import fake_llm
from vibe_lister.llm_helper import SYSTEM_PROMPT, build_prompt, generate_text


@pytest.mark.unit
def test_prompt_without_genres_has_no_genre_clause():
    prompt = build_prompt("chill sunday", 10, [])
    assert prompt == (
        "Generate a fun playlist name and 10 song suggestions (artist + title) "
        "for this mood: chill sunday"
    )
    assert "IMPORTANT" not in prompt


@pytest.mark.unit
def test_prompt_with_genres_restricts_to_joined_list():
    prompt = build_prompt("hype", 5, ["rock", "hip hop", "jazz"])
    assert prompt.startswith("Generate a fun playlist name and 5 song suggestions")
    assert (
        ". IMPORTANT: Only include songs from one of these genres: rock, hip hop, jazz. "
        "Do not include any songs from other genres."
    ) in prompt


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_text_sends_system_and_user_messages():
    llm = fake_llm("My Playlist\nA - B")

    out = await generate_text(llm, "happy", 7, ["pop"], model="gpt-4")

    assert out == "My Playlist\nA - B"
    kwargs = llm.chat.completions.create.await_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert kwargs["messages"][1] == {"role": "user", "content": build_prompt("happy", 7, ["pop"])}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_generate_text_treats_null_content_as_empty():
    assert await generate_text(fake_llm(None), "sad", 3) == ""

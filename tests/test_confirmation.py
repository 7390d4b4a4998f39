import pytest

from confirmation import PromptConfirmation, StaticConfirmation
from models import ScrapedRecord

RECORD = ScrapedRecord(
    publisher="frontiers",
    url="https://www.frontiersin.org/articles/1",
    head_ref={"title": ["T"]},
    cited_refs=["r1", "r2"],
)


@pytest.mark.asyncio
@pytest.mark.parametrize("answer", [True, False])
async def test_static_confirmation(answer: bool) -> None:
    assert await StaticConfirmation(answer).request(RECORD) is answer


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("typed", "expected"),
    [("y", True), ("YES\n", True), ("", False), ("n", False), ("maybe", False)],
)
async def test_prompt_confirmation_answers(typed: str, expected: bool) -> None:
    prompts: list[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return typed

    assert await PromptConfirmation(fake_input).request(RECORD) is expected
    assert "2 references from frontiers" in prompts[0]


@pytest.mark.asyncio
async def test_prompt_confirmation_treats_eof_as_declined() -> None:
    def closed_stdin(prompt: str) -> str:
        raise EOFError

    assert await PromptConfirmation(closed_stdin).request(RECORD) is False

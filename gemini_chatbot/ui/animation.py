"""Word-by-word typing effect for already received replies."""

import asyncio
from collections.abc import Awaitable, Callable, Iterator

MIN_WORD_DELAY_MS = 30
MAX_WORD_DELAY_MS = 100
DELAY_PER_CHAR_MS = 20
CURSOR = "▌"


def word_delay_ms(word: str) -> int:
    """Delay after revealing ``word``, longer words pause longer."""
    return max(MIN_WORD_DELAY_MS, min(MAX_WORD_DELAY_MS, len(word) * DELAY_PER_CHAR_MS))


def typing_frames(text: str) -> Iterator[tuple[str, int]]:
    """Yield the visible text after each word and the delay that follows it."""
    current = ""
    for i, word in enumerate(text.split(" ")):
        current += (" " if i > 0 else "") + word
        yield current, word_delay_ms(word)


async def animate_typing(
    text: str,
    render: Callable[[str], None],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> None:
    """Reveal ``text`` word by word through ``render``.

    A cursor trails the text while typing and is removed once the whole
    text is shown. Not cancellable.

    Args:
        text: The full reply.
        render: Called with the text to display for each frame.
        sleep: Awaitable sleep taking seconds, replaceable in tests.
    """
    for partial, delay in typing_frames(text):
        render(partial + CURSOR)
        await sleep(delay / 1000)
    render(text)

"""Split reply lines into Telegram-sized messages."""

from typing import Iterable, List

# Kept below Telegram's 4096 character message limit
DEFAULT_CHUNK_BUDGET = 3800


def chunk_lines(lines: Iterable[str], budget: int = DEFAULT_CHUNK_BUDGET) -> List[str]:
    """
    Group lines into newline-joined chunks.

    Each line counts with its trailing newline. A chunk is flushed before the
    line that would push it past ``budget``. A single line longer than the
    budget is emitted on its own rather than split. Empty chunks are never
    produced.

    Args:
        lines: Lines in output order
        budget: Maximum characters per chunk, newlines included

    Returns:
        List of message texts
    """
    if budget <= 0:
        raise ValueError("chunk budget must be positive")

    chunks: List[str] = []
    buffer: List[str] = []
    buffer_len = 0
    for line in lines:
        if buffer and buffer_len + len(line) + 1 > budget:
            chunks.append("\n".join(buffer))
            buffer = []
            buffer_len = 0
        buffer.append(line)
        buffer_len += len(line) + 1

    if buffer:
        chunks.append("\n".join(buffer))
    return chunks

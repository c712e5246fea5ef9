"""Text format for seed patterns.

A pattern is a block of newline-separated rows. Each row holds single-character
tokens separated by single spaces: ``#`` is a live cell, anything else (usually
``-``) is a dead one::

    - # -
    - # -
    - # -

Whitespace around the whole block and around each row is ignored.
"""

from typing import List, Sequence

from .errors import MalformedPattern

ALIVE = "#"
DEAD = "-"


def parse_pattern(text: str) -> List[List[bool]]:
    """Parse pattern text into rows of alive flags.

    Args:
        text: Pattern text

    Returns:
        List of rows, each a list of booleans (True for alive). Empty if the
        text holds no rows.

    Raises:
        MalformedPattern: If a token is not a single character or rows have
            different token counts
    """
    stripped = text.strip()
    if not stripped:
        return []

    rows: List[List[bool]] = []
    for row_number, line in enumerate(stripped.split("\n"), start=1):
        tokens = line.strip().split(" ")
        for token in tokens:
            if len(token) != 1:
                raise MalformedPattern(
                    f"Row {row_number}: expected single-character tokens, got {token!r}"
                )

        if rows and len(tokens) != len(rows[0]):
            raise MalformedPattern(
                f"Row {row_number} has {len(tokens)} tokens, expected {len(rows[0])}"
            )

        rows.append([token == ALIVE for token in tokens])

    return rows


def format_pattern(rows: Sequence[Sequence[bool]]) -> str:
    """Serialize rows of alive flags to pattern text.

    Args:
        rows: Rows of truthy/falsy cell states

    Returns:
        Pattern text that ``parse_pattern`` reads back to the same rows
    """
    return "\n".join(" ".join(ALIVE if cell else DEAD for cell in row) for row in rows)

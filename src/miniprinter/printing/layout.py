"""Text layout for thermal printer receipts.

Fixed-width wrapping for a character-cell printer (32 columns on 58mm
paper). Widths are measured in terminal cells rather than code points so
that wide and combining characters keep hanging indents aligned.
"""

import re
from typing import List, Sequence, Tuple

from wcwidth import wcwidth

# ASCII whitespace only; U+00A0 and other no-break spaces stay inside words
_BREAK = re.compile(r"[ \t\n\r\f\v]+")


def text_width(text: str) -> int:
    """Display width of text in character cells.

    Control characters count as zero width.
    """
    return sum(max(0, wcwidth(ch)) for ch in text)


def wrap(
    text: str,
    width: int,
    initial_indent: str = "",
    subsequent_indent: str = "",
) -> List[str]:
    """Greedily wrap text on whitespace.

    The first line is prefixed with ``initial_indent`` and every later line
    with ``subsequent_indent``. A word that does not fit on an empty line is
    emitted alone and unbroken, so that line may exceed ``width``.

    Args:
        text: Text to wrap; runs of ASCII whitespace collapse to one space
        width: Maximum line width in character cells, indent included
        initial_indent: Prefix for the first line
        subsequent_indent: Prefix for continuation lines

    Returns:
        Wrapped lines, empty if text has no words
    """
    if width < 1:
        raise ValueError(f"width must be positive, got {width}")

    words = [word for word in _BREAK.split(text) if word]
    if not words:
        return []

    lines: List[str] = []
    indent = initial_indent
    current = ""

    for word in words:
        candidate = f"{current} {word}" if current else word
        if not current or text_width(indent + candidate) <= width:
            current = candidate
        else:
            lines.append(indent + current)
            indent = subsequent_indent
            current = word

    lines.append(indent + current)
    return lines


def label_indents(label: str) -> Tuple[str, str]:
    """Indents that hang continuation lines under a "<label>: " prefix."""
    initial = f"{label}: "
    return initial, " " * text_width(initial)


def join_names(names: Sequence[str]) -> str:
    """Join names as an English list.

    ["A"] -> "A", ["A", "B"] -> "A and B", ["A", "B", "C"] -> "A, B, and C".
    """
    if not names:
        raise ValueError("join_names requires at least one name")
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return ", ".join(names[:-1]) + f", and {names[-1]}"

"""Label wrapping."""

from .config import WRAP_LENGTH


def wrap(text, max_line_length=WRAP_LENGTH):
    """Break text into lines of at most max_line_length characters.

    Words are packed greedily; a word longer than the limit is hard-split
    into max_line_length chunks. Existing newlines are kept.
    """
    if not text:
        return text

    lines = []
    for line in text.split("\n"):
        if len(line) <= max_line_length:
            lines.append(line)
            continue

        current = ""
        for word in line.split(" "):
            if len(word) > max_line_length:
                if current:
                    lines.append(current.strip())
                    current = ""
                for i in range(0, len(word), max_line_length):
                    lines.append(word[i:i + max_line_length])
            else:
                candidate = f"{current} {word}" if current else word
                if len(candidate) <= max_line_length:
                    current = candidate
                else:
                    if current:
                        lines.append(current.strip())
                    current = word
        if current:
            lines.append(current.strip())

    return "\n".join(lines)

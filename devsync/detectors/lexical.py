"""Line-oriented helpers shared by the lexical detectors."""

import re
from typing import Iterator

STRING_LITERAL = re.compile(r'"(?:\\.|[^"\\])*"|\'(?:\\.|[^\'\\])*\'')
WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")


def line_for_offset(content: str, offset: int) -> int:
    return content.count("\n", 0, offset) + 1


def strip_strings(line: str) -> str:
    """Replace string and char literals with empty quotes."""
    return STRING_LITERAL.sub('""', line)


def code_lines(lines: list[str]) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, code)`` with comments removed.

    String literals are blanked before comment markers are searched so that
    ``"http://..."`` is not mistaken for a comment. Lines left empty are skipped.
    """
    in_block = False
    for number, raw in enumerate(lines, start=1):
        line = strip_strings(raw)
        code = []
        i = 0
        while i < len(line):
            if in_block:
                end = line.find("*/", i)
                if end == -1:
                    i = len(line)
                else:
                    in_block = False
                    i = end + 2
                continue
            if line.startswith("//", i):
                break
            if line.startswith("/*", i):
                in_block = True
                i += 2
                continue
            code.append(line[i])
            i += 1
        text = "".join(code)
        if text.strip():
            yield number, text


def code_text(lines: list[str]) -> str:
    """Comment-free text with the original line numbering preserved."""
    stripped = [""] * len(lines)
    for number, code in code_lines(lines):
        stripped[number - 1] = code
    return "\n".join(stripped)


def is_header_line(code: str) -> bool:
    """``package`` and ``import`` lines."""
    return code.lstrip().startswith(("import ", "package "))


def split_words(identifier: str) -> list[str]:
    """``parseHTTPResponse_code2`` -> ``["parse", "HTTP", "Response", "code", "2"]``."""
    return WORD_PATTERN.findall(identifier)


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on ``separator`` outside of ``<...>``, ``(...)`` and ``[...]``."""
    parts = []
    depth = 0
    current = []
    for char in text:
        if char in "<([":
            depth += 1
        elif char in ">)]":
            depth = max(0, depth - 1)
        if char == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [part for part in parts if part]

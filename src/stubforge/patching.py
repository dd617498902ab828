"""Guarded edits of existing source files.

Edits locate their insertion point by bracket matching rather than raw
substring replacement, are skipped when the entry is already present, and are
rejected with :class:`~stubforge.errors.PatchError` when the result would not
have balanced brackets.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Iterator

from .errors import PatchError

__all__ = [
    "check_balanced",
    "insert_array_entry",
    "insert_method_statement",
    "patch_file",
]


LOGGER = logging.getLogger(__name__)

_PAIRS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = {closer: opener for opener, closer in _PAIRS.items()}
_WHITESPACE = re.compile(r"\s+")


def _code_positions(text: str, start: int = 0) -> Iterator[int]:
    """Yield indexes of characters that are outside strings and comments."""

    index = start
    length = len(text)
    while index < length:
        char = text[index]
        nxt = text[index + 1] if index + 1 < length else ""
        if char in "'\"":
            index += 1
            while index < length and text[index] != char:
                index += 2 if text[index] == "\\" else 1
            index += 1
            continue
        if (char == "/" and nxt == "/") or (char == "#" and nxt != "["):
            newline = text.find("\n", index)
            index = length if newline == -1 else newline + 1
            continue
        if char == "/" and nxt == "*":
            end = text.find("*/", index + 2)
            index = length if end == -1 else end + 2
            continue
        yield index
        index += 1


def check_balanced(text: str) -> str | None:
    """Return a description of the first bracket problem, or ``None``."""

    stack: list[tuple[str, int]] = []
    for index in _code_positions(text):
        char = text[index]
        if char in _PAIRS:
            stack.append((char, index))
        elif char in _CLOSERS:
            if not stack or stack[-1][0] != _CLOSERS[char]:
                line = text.count("\n", 0, index) + 1
                return f"unexpected '{char}' on line {line}"
            stack.pop()
    if stack:
        opener, index = stack[-1]
        line = text.count("\n", 0, index) + 1
        return f"unclosed '{opener}' from line {line}"
    return None


def _find_code(text: str, pattern: re.Pattern[str]) -> re.Match[str] | None:
    code = set(_code_positions(text))
    for match in pattern.finditer(text):
        if match.start() in code:
            return match
    return None


def _normalize(value: str) -> str:
    return _WHITESPACE.sub("", value).rstrip(",;")


def _contains(text: str, entry: str) -> bool:
    return _normalize(entry) in _WHITESPACE.sub("", text)


def _indent_of_line(text: str, index: int) -> str:
    line_start = text.rfind("\n", 0, index) + 1
    line = text[line_start:index]
    return line[: len(line) - len(line.lstrip())]


def insert_array_entry(text: str, entry: str, *, anchor: str = "return [", indent: str = "    ") -> str:
    """Insert ``entry`` as the first element of the array opened by ``anchor``.

    ``entry`` is written with a trailing comma. The text is returned unchanged
    when the entry is already present.
    """

    if _contains(text, entry):
        return text

    pattern = re.compile(r"\s*".join(re.escape(part) for part in anchor.split()))
    match = _find_code(text, pattern)
    if match is None or not match.group(0).endswith("["):
        raise ValueError(f"array anchor {anchor!r} not found")

    open_index = match.end() - 1
    item = entry.strip().rstrip(",")
    prefix = _indent_of_line(text, open_index) + indent
    return f"{text[: open_index + 1]}\n{prefix}{item},{text[open_index + 1 :]}"


def insert_method_statement(text: str, method: str, statement: str, *, indent: str = "    ") -> str:
    """Insert ``statement`` at the top of the body of ``function method(...)``.

    Multi-line statements keep their relative indentation. The text is
    returned unchanged when the statement is already present.
    """

    if _contains(text, statement):
        return text

    match = _find_code(text, re.compile(rf"function\s+{re.escape(method)}\s*\("))
    if match is None:
        raise ValueError(f"method {method!r} not found")

    body_index = next(
        (index for index in _code_positions(text, match.end()) if text[index] == "{"),
        None,
    )
    if body_index is None:
        raise ValueError(f"method {method!r} has no body")

    prefix = _indent_of_line(text, match.start()) + indent
    lines = statement.strip("\n").splitlines()
    block = "\n".join(f"{prefix}{line}" if line.strip() else "" for line in lines)
    return f"{text[: body_index + 1]}\n{block}\n{text[body_index + 1 :]}"


def patch_file(path: str | Path, transform: Callable[[str], str]) -> bool:
    """Apply ``transform`` to the file at ``path`` and write it back.

    Returns ``True`` when the file changed. The file is left untouched and
    :class:`PatchError` is raised when it cannot be read, when ``transform``
    cannot find its insertion point, or when the result is unbalanced.
    """

    path = Path(path)
    try:
        original = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PatchError(path, str(exc)) from exc

    try:
        updated = transform(original)
    except ValueError as exc:
        raise PatchError(path, str(exc)) from exc

    if updated == original:
        LOGGER.debug("%s already up to date", path)
        return False

    problem = check_balanced(updated)
    if problem is not None:
        raise PatchError(path, f"result would be malformed ({problem})")

    try:
        path.write_text(updated, encoding="utf-8")
    except OSError as exc:
        raise PatchError(path, str(exc)) from exc
    LOGGER.debug("patched %s", path)
    return True

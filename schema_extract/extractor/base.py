"""Abstract base extractor with shared brace-matching."""

from __future__ import annotations

import abc
from collections.abc import Iterator

from schema_extract.models import ClassDescriptor, EnumDescriptor, RawDeclaration


class UnbalancedBlockError(ValueError):
    """A declaration body whose braces cannot be balanced."""


RAW_QUOTE = '"""'


def iter_code_chars(
    source: str, start: int = 0, keep_strings: bool = False,
) -> Iterator[tuple[int, str]]:
    """Yield (position, char) for characters outside strings and comments.

    With keep_strings, string and char literals (quotes included) are yielded
    too, so only comments are dropped.
    """
    in_single_quote = False
    in_double_quote = False
    in_raw_string = False
    in_line_comment = False
    in_block_comment = False
    length = len(source)

    pos = start
    while pos < length:
        ch = source[pos]
        next_ch = source[pos + 1] if pos + 1 < length else ""

        if in_line_comment:
            if ch == "\n":
                in_line_comment = False
        elif in_block_comment:
            if ch == "*" and next_ch == "/":
                in_block_comment = False
                pos += 1
        elif in_raw_string:
            if source.startswith(RAW_QUOTE, pos):
                # Extra quotes before the closing delimiter belong to the string
                end = pos + len(RAW_QUOTE)
                while end < length and source[end] == '"':
                    end += 1
                in_raw_string = False
                if keep_strings:
                    yield from ((i, source[i]) for i in range(pos, end))
                pos = end - 1
            elif keep_strings:
                yield pos, ch
        elif in_single_quote or in_double_quote:
            quote = "'" if in_single_quote else '"'
            if keep_strings:
                yield pos, ch
            if ch == "\\" and next_ch:
                pos += 1  # skip escaped char
                if keep_strings:
                    yield pos, next_ch
            elif ch == quote:
                in_single_quote = in_double_quote = False
        else:
            if ch == "/" and next_ch == "/":
                in_line_comment = True
                pos += 1
            elif ch == "/" and next_ch == "*":
                in_block_comment = True
                pos += 1
            elif source.startswith(RAW_QUOTE, pos):
                in_raw_string = True
                if keep_strings:
                    yield from ((i, source[i]) for i in range(pos, pos + len(RAW_QUOTE)))
                pos += len(RAW_QUOTE) - 1
            elif ch == "'":
                in_single_quote = True
                if keep_strings:
                    yield pos, ch
            elif ch == '"':
                in_double_quote = True
                if keep_strings:
                    yield pos, ch
            else:
                yield pos, ch

        pos += 1


def mask_text(source: str, keep_strings: bool = False) -> str:
    """Blank out comments (and strings unless keep_strings), keeping offsets and newlines."""
    chars = [" " if ch != "\n" else ch for ch in source]
    for pos, ch in iter_code_chars(source, keep_strings=keep_strings):
        chars[pos] = ch
    return "".join(chars)


class BaseExtractor(abc.ABC):
    """Base class for declaration extractors."""

    @abc.abstractmethod
    def extract(
        self, declaration: RawDeclaration, source: str,
    ) -> ClassDescriptor | EnumDescriptor:
        """Build a descriptor for the given scanned declaration."""

    def _find_block_end(self, source: str, open_offset: int) -> int:
        """Return the index of the brace closing the one at open_offset."""
        depth = 0
        for pos, ch in iter_code_chars(source, open_offset):
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    return pos
        line = source.count("\n", 0, open_offset) + 1
        raise UnbalancedBlockError(f"Unbalanced braces in block opened at line {line}")

    def _extract_brace_block(self, source: str, open_offset: int) -> str:
        """Text between the brace at open_offset and its matching closing brace."""
        end = self._find_block_end(source, open_offset)
        return source[open_offset + 1:end]

    def _read_arguments(self, source: str, offset: int) -> str | None:
        """Argument text of a call whose '(' is the first non-blank char at offset."""
        while offset < len(source) and source[offset] in " \t":
            offset += 1
        if offset >= len(source) or source[offset] != "(":
            return None
        depth = 0
        for pos, ch in iter_code_chars(source, offset):
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0:
                    return source[offset + 1:pos]
        return None

    def _mask_nested_blocks(self, body: str) -> str:
        """Blank out the content of nested brace blocks, keeping offsets and newlines."""
        chars = list(body)
        skip_until = -1
        for pos, ch in iter_code_chars(body):
            if pos <= skip_until or ch != "{":
                continue
            end = self._find_block_end(body, pos)
            for i in range(pos + 1, end):
                if chars[i] != "\n":
                    chars[i] = " "
            skip_until = end
        return "".join(chars)

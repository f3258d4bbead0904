"""Block parser for indentation-structured configuration text.

Turns raw lines into a forest of LineRecords. Nesting comes from leading
whitespace; a bare comment marker closes the blocks deeper than itself.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..config.settings import ParserOptions
from ..utils.logging_config import timed
from .schema import LineRecord

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error parsing configuration text."""
    pass


class MalformedIndent(ParseError):
    """A line's indentation does not fit any open block."""

    def __init__(self, message: str, line_number: int = 0, line: str = ""):
        super().__init__(f"line {line_number}: {message}: {line.strip()!r}")
        self.line_number = line_number
        self.line = line


@dataclass
class _Frame:
    """An open block while parsing."""
    owner: Optional[LineRecord]
    members: list[LineRecord]
    body_indent: Optional[int] = None
    sealed: bool = False


def split_lines(lines: Union[str, Iterable[str]]) -> list[str]:
    """Accept either a text blob or an iterable of lines."""
    if isinstance(lines, str):
        return lines.splitlines()
    return [line.rstrip("\r\n") for line in lines]


def indent_width(text: str) -> int:
    """Leading whitespace width, tabs expanded to 8 columns."""
    expanded = text.expandtabs()
    return len(expanded) - len(expanded.lstrip())


class BlockParser:
    """Parse configuration lines into nested LineRecords."""

    def __init__(self, options: Optional[ParserOptions] = None, source: str = "<string>"):
        self.options = options or ParserOptions()
        self.source = source

    @timed("parse")
    def parse(self, lines: Union[str, Iterable[str]]) -> list[LineRecord]:
        """
        Parse raw configuration lines.

        Args:
            lines: Configuration text or an ordered iterable of lines

        Returns:
            Top-level LineRecords; nested lines hang off ``children``

        Raises:
            MalformedIndent: If a line's indentation matches no open block
        """
        root = _Frame(owner=None, members=[])
        stack = [root]
        index = 0

        for line_number, raw in enumerate(split_lines(lines), start=1):
            text = raw.rstrip()
            stripped = text.lstrip()
            if not stripped:
                continue

            width = indent_width(text)

            if stripped.startswith(self.options.comment):
                if stripped == self.options.comment:
                    self._terminate(stack, width)
                continue

            tokens = stripped.split()
            negated = len(tokens) > 1 and tokens[0] == self.options.negation
            if negated:
                tokens = tokens[1:]

            effective = width
            if width > 0 and self.options.is_minus_one(tokens[0]):
                effective = width - 1

            frame = self._place(stack, effective, line_number, text)
            record = LineRecord(
                index=index,
                text=text,
                tokens=tokens,
                negated=negated,
                depth=len(stack) - 1,
                indent=width,
                column=effective,
                line_number=line_number,
                parent=frame.owner.index if frame.owner else None,
            )
            frame.members.append(record)
            index += 1

        logger.debug(f"Parsed {index} lines from {self.source}")
        return root.members

    def _place(
        self,
        stack: list[_Frame],
        width: int,
        line_number: int,
        text: str,
    ) -> _Frame:
        """Find (or open) the block a line of the given width belongs to."""
        top = stack[-1]

        if top.body_indent is None:
            # A leading terminator may have sealed the frame already
            top.body_indent = width
            top.sealed = False
            return top

        if width > top.body_indent:
            if not top.members or top.sealed:
                self._fail("indented deeper than any open block", line_number, text)
            owner = top.members[-1]
            frame = _Frame(owner=owner, members=owner.children, body_indent=width)
            stack.append(frame)
            return frame

        if width < top.body_indent:
            while len(stack) > 1 and width < stack[-1].body_indent:
                stack.pop()
            top = stack[-1]
            if top.body_indent != width:
                self._fail("dedent matches no enclosing block", line_number, text)

        top.sealed = False
        return top

    def _terminate(self, stack: list[_Frame], width: int) -> None:
        """Close blocks deeper than a terminator and seal the one it sits in."""
        while len(stack) > 1 and stack[-1].body_indent > width:
            stack.pop()
        stack[-1].sealed = True

    def _fail(self, message: str, line_number: int, text: str) -> None:
        logger.warning(f"{self.source} line {line_number}: {message}")
        raise MalformedIndent(message, line_number=line_number, line=text)

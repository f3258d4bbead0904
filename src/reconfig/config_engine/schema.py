"""Schema definitions for the Config Engine.

Defines the parsed line records, the shared-prefix word graph and the
diff / command plan results.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    """Result of asking a selection for a single item."""
    FOUND = "found"           # Exactly one line continuation
    AMBIGUOUS = "ambiguous"   # Several nodes or divergent continuations
    ABSENT = "absent"         # Nothing matched


class ChangeType(str, Enum):
    """Type of change in a diff."""
    CREATE = "create"
    REPLACE_LINE = "replace_line"
    REPLACE_BLOCK = "replace_block"
    DELETE = "delete"
    NO_CHANGE = "no_change"


# --- Parsed input ---

@dataclass
class LineRecord:
    """One logical configuration line as written."""
    index: int                 # Source order among structural lines
    text: str                  # Original text, trailing whitespace removed
    tokens: list[str]          # Words used for matching (leading "no" removed)
    negated: bool = False
    depth: int = 0
    indent: int = 0            # Literal indentation width
    column: int = 0            # Indentation after the minus-one adjustment
    line_number: int = 0       # 1-based line in the input
    parent: Optional[int] = None
    children: list["LineRecord"] = field(default_factory=list)

    def walk(self):
        """Yield this record and all nested records in source order."""
        yield self
        for child in self.children:
            yield from child.walk()


# --- Word graph ---

@dataclass
class WordNode:
    """A word at one position of one block, shared by lines with the same prefix."""
    id: int
    token: str
    block: int
    parent: Optional[int] = None
    children: dict[str, int] = field(default_factory=dict)
    records: list[int] = field(default_factory=list)
    terminal_records: list[int] = field(default_factory=list)
    subs: Optional[int] = None

    @property
    def is_root(self) -> bool:
        """Block roots stand for the block itself, not for a word."""
        return self.parent is None

    @property
    def is_terminal(self) -> bool:
        """Check if at least one line ends on this word."""
        return len(self.terminal_records) > 0

    @property
    def introduces_block(self) -> bool:
        return self.subs is not None


@dataclass
class Block:
    """One nesting level: its graph root and the lines it contains."""
    id: int
    root: int
    owner: Optional[int] = None   # Node that opens this block, None at top
    records: list[int] = field(default_factory=list)
    indent: int = 0               # Effective indentation of the members


# --- Diff Results ---

@dataclass
class DiffResult:
    """Result of comparing a selected subtree against desired text."""
    change_type: ChangeType
    current_lines: list[str] = field(default_factory=list)
    desired_lines: list[str] = field(default_factory=list)

    @property
    def no_change(self) -> bool:
        return self.change_type == ChangeType.NO_CHANGE


# --- Command Plan ---

@dataclass
class CommandPlan:
    """Plan of commands to emit."""
    pre_commands: list[str] = field(default_factory=list)
    main_commands: list[str] = field(default_factory=list)
    post_commands: list[str] = field(default_factory=list)
    rollback_commands: list[str] = field(default_factory=list)

    @property
    def commands(self) -> list[str]:
        """Context, changed lines and exits, in emission order."""
        return self.pre_commands + self.main_commands + self.post_commands

    @property
    def total_commands(self) -> int:
        """Total number of commands."""
        return (
            len(self.pre_commands) +
            len(self.main_commands) +
            len(self.post_commands)
        )

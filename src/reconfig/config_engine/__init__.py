"""Config Engine - navigable models of indentation-structured configurations.

The Config Engine parses device configuration text (nesting by indentation,
``!`` comments, optional leading ``no``) into a shared-prefix word graph and
computes the commands that turn an observed configuration into a desired one:
- Navigate with designators instead of regexes over raw text
- Compare a selected item with desired text, ignoring whitespace
- Emit only what differs, wrapped in the right block context

Usage:
    from reconfig.config_engine import stringconfig

    root = stringconfig(running_config)
    commands = root.get("interface Serial0").set(
        "ip address",
        " ip address 2.2.2.2 255.255.255.0",
    )
    # ["interface Serial0", " ip address 2.2.2.2 255.255.255.0", "exit"]
"""

from .engine import ConfigEngine
from .schema import (
    LineRecord,
    WordNode,
    Block,
    Outcome,
    ChangeType,
    DiffResult,
    CommandPlan,
)
from .parser import BlockParser, ParseError, MalformedIndent
from .graph import ConfigModel, GraphBuilder
from .selection import Selection, Placement, UNDEFINED
from .diff import DiffEngine, structure, summarize_diff
from .generator import CommandGenerator, negate
from .reader import readconfig, stringconfig

__all__ = [
    # Main engine
    "ConfigEngine",
    "readconfig",
    "stringconfig",
    # Schema classes
    "LineRecord",
    "WordNode",
    "Block",
    "Outcome",
    "ChangeType",
    "DiffResult",
    "CommandPlan",
    # Parser
    "BlockParser",
    "ParseError",
    "MalformedIndent",
    # Model and navigation
    "ConfigModel",
    "GraphBuilder",
    "Selection",
    "Placement",
    "UNDEFINED",
    # Components (for advanced use)
    "DiffEngine",
    "structure",
    "summarize_diff",
    "CommandGenerator",
    "negate",
]

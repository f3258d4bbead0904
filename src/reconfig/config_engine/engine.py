"""Main Config Engine - orchestrates parsing and the set workflow.

Provides a single entry point for:
1. Parsing configuration text into a navigable model
2. Resolving the target of a change
3. Comparing the target with desired text
4. Generating context-wrapped commands
"""
import logging
from typing import Iterable, Optional, Union

from ..config.settings import ParserOptions
from ..utils.logging_config import timed_section_sync
from .diff import DiffEngine, summarize_diff
from .generator import CommandGenerator
from .graph import ConfigModel, GraphBuilder
from .parser import BlockParser
from .schema import CommandPlan
from .selection import Designator, Selection

logger = logging.getLogger(__name__)

Text = Union[str, Iterable[str]]


class ConfigEngine:
    """
    Config Engine for reading configurations and planning changes.

    Usage:
        engine = ConfigEngine()
        root = engine.load(running_config)
        commands = engine.set(root, ["interface Serial0"], desired_text)
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        """
        Initialize the Config Engine.

        Args:
            options: Parser tunables shared by both sides of every comparison
        """
        self.options = options or ParserOptions()
        self.diff_engine = DiffEngine()
        self.generator = CommandGenerator(self.options)

    def build_model(self, lines: Text, source: str = "<string>") -> ConfigModel:
        """Parse text and build its word graph."""
        forest = BlockParser(self.options, source=source).parse(lines)
        return GraphBuilder(self.options, source=source).build(forest)

    def load(self, lines: Text, source: str = "<string>") -> Selection:
        """Parse text and return the Selection over its top-level block."""
        return Selection.root(self.build_model(lines, source=source))

    def plan(
        self,
        selection: Selection,
        designators: Iterable[Designator],
        desired: Text,
    ) -> CommandPlan:
        """
        Plan the commands that make the designated item match desired text.

        This is the main entry point. It:
        1. Resolves the designators (a missing item means "create")
        2. Parses the desired text with the same options
        3. Compares both sides, returning an empty plan when equivalent
        4. Wraps the desired lines in context headers and exits

        Raises:
            MalformedIndent: If the desired text is malformed
        """
        source = selection.model.source if selection.model else None
        with timed_section_sync("set", source=source):
            placement = selection.locate(*designators)
            desired_model = self.build_model(desired, source="<desired>")
            diff = self.diff_engine.compare(placement.target, desired_model)

            if diff.no_change:
                logger.debug(f"No change needed for {placement.target!r}")
                return CommandPlan()

            plan = self.generator.generate(placement, diff, desired_model)

        logger.info(
            f"{diff.change_type.value} {placement.target!r}: "
            f"{plan.total_commands} commands "
            f"({len(plan.pre_commands)} context, {len(plan.main_commands)} lines, "
            f"{len(plan.post_commands)} exits)"
        )
        return plan

    def set(
        self,
        selection: Selection,
        designators: Iterable[Designator],
        desired: Text,
    ) -> list[str]:
        """Commands from plan(), in emission order."""
        return self.plan(selection, designators, desired).commands

    def preview(
        self,
        selection: Selection,
        designators: Iterable[Designator],
        desired: Text,
    ) -> str:
        """
        Preview a change without producing commands for a device.

        Returns human-readable diff summary followed by the commands.
        """
        placement = selection.locate(*designators)
        desired_model = self.build_model(desired, source="<desired>")
        diff = self.diff_engine.compare(placement.target, desired_model)

        summary = summarize_diff(diff)
        if diff.no_change:
            return summary

        plan = self.generator.generate(placement, diff, desired_model)
        return summary + "\n\nCommands:\n" + "\n".join(
            f"  {command}" for command in plan.commands
        )

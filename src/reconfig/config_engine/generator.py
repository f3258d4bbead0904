"""Command generator turning a diff into context-wrapped command lines.

Commands are emitted as: headers entering the target's block, the changed
lines, then one exit per header.
"""
from typing import Optional

from ..config.settings import ParserOptions
from .graph import ConfigModel
from .schema import ChangeType, CommandPlan, DiffResult, LineRecord
from .selection import Placement


def negate(text: str, negated: bool, negation: str = "no") -> str:
    """
    Invert one configuration line, keeping its indentation.

    Examples:
        " shutdown"    -> " no shutdown"
        " no shutdown" -> " shutdown"
    """
    stripped = text.lstrip()
    indent = text[:len(text) - len(stripped)]
    if negated:
        return indent + stripped.split(None, 1)[1]
    return f"{indent}{negation} {stripped}"


class CommandGenerator:
    """Generate command lines from diff results."""

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()

    def generate(
        self,
        placement: Placement,
        diff: DiffResult,
        desired: ConfigModel,
    ) -> CommandPlan:
        """
        Generate a command plan from a diff.

        Args:
            placement: Target and context resolved from the designators
            diff: Result of comparing the target with the desired text
            desired: Model parsed from the desired text

        Returns:
            CommandPlan; empty when the diff holds no change
        """
        plan = CommandPlan()
        if diff.no_change:
            return plan

        headers = list(placement.headers)
        exits = [self.options.exit_command] * len(headers)

        plan.pre_commands = headers
        plan.post_commands = list(exits)

        if diff.change_type == ChangeType.DELETE:
            plan.main_commands = [
                negate(record.text, record.negated, self.options.negation)
                for record in placement.target.records()
            ]
        else:
            plan.main_commands = self.reindent(desired.records, placement.indent)

        plan.rollback_commands = headers + self._rollback(placement, diff, desired) + exits

        return plan

    def reindent(self, records: list[LineRecord], indent: int) -> list[str]:
        """
        Shift lines so the outermost ones sit at the given indentation.

        Lines already written at that indentation are kept verbatim.
        """
        if not records:
            return []

        shift = indent - min(record.column for record in records)
        if shift == 0:
            return [record.text for record in records]

        return [
            " " * max(record.indent + shift, 0) + record.text.lstrip()
            for record in records
        ]

    def _rollback(
        self,
        placement: Placement,
        diff: DiffResult,
        desired: ConfigModel,
    ) -> list[str]:
        """Commands restoring the text the target had before the change."""
        if diff.change_type != ChangeType.CREATE:
            return list(diff.current_lines)

        # Created lines are taken back by negating the outermost ones
        base = min(record.depth for record in desired.records)
        lines = self.reindent(desired.records, placement.indent)
        return [
            negate(text, record.negated, self.options.negation)
            for record, text in zip(desired.records, lines)
            if record.depth == base
        ]

"""Diff engine comparing a selected subtree with desired text.

Two line sequences are equivalent when they hold the same words at the same
relative nesting, line for line, with the same negation. Whitespace and
comment lines do not count.
"""
from .graph import ConfigModel
from .schema import ChangeType, DiffResult, LineRecord
from .selection import Selection


def structure(records: list[LineRecord]) -> list[tuple[int, bool, tuple[str, ...]]]:
    """Reduce records to (relative depth, negated, words) for comparison."""
    if not records:
        return []
    base = min(record.depth for record in records)
    return [
        (record.depth - base, record.negated, tuple(record.tokens))
        for record in records
    ]


class DiffEngine:
    """Calculate the difference between a target and its desired text."""

    def compare(self, target: Selection, desired: ConfigModel) -> DiffResult:
        """
        Compare the target's lines (nested blocks included) with desired lines.

        Args:
            target: Existing item, or UNDEFINED when it does not exist yet
            desired: Model parsed from the desired text

        Returns:
            DiffResult; change_type is NO_CHANGE when both sides are equivalent
        """
        current = target.all_records()
        wanted = desired.records

        result = DiffResult(
            change_type=ChangeType.NO_CHANGE,
            current_lines=[record.text for record in current],
            desired_lines=[record.text for record in wanted],
        )

        if structure(current) == structure(wanted):
            return result

        if not target:
            result.change_type = ChangeType.CREATE
        elif not wanted:
            result.change_type = ChangeType.DELETE
        elif target.block():
            result.change_type = ChangeType.REPLACE_BLOCK
        else:
            result.change_type = ChangeType.REPLACE_LINE

        return result


def summarize_diff(diff: DiffResult) -> str:
    """
    Create a human-readable summary of a diff.

    Useful for previews and logging.
    """
    if diff.no_change:
        return "No changes needed - current configuration matches desired text"

    titles = {
        ChangeType.CREATE: "[+] Create",
        ChangeType.DELETE: "[-] Remove",
        ChangeType.REPLACE_LINE: "[~] Replace line",
        ChangeType.REPLACE_BLOCK: "[~] Replace block",
    }
    lines = [f"{titles[diff.change_type]}:"]

    for text in diff.current_lines:
        lines.append(f"  - {text}")
    for text in diff.desired_lines:
        lines.append(f"  + {text}")

    return "\n".join(lines)

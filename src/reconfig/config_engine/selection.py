"""Selection cursor - navigation over the word graph.

A Selection is a set of WordNodes reached by a designator path. Every
operation returns a value: no match yields the falsy UNDEFINED sentinel,
which accepts further navigation calls and keeps returning itself.

Usage:
    root = stringconfig(text)
    addr = root.get("interface Serial0", "ip address")
    print(addr.text())
    commands = addr.set(" ip address 2.2.2.2 255.255.255.0")
"""
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from ..config.settings import ParserOptions
from .graph import ConfigModel
from .parser import indent_width
from .schema import LineRecord, Outcome, WordNode

Designator = Union[str, Iterable[str]]


@dataclass
class Placement:
    """Where a set() lands: the existing target and the context to reach it."""
    target: "Selection"
    headers: list[str]
    indent: int


def _unique(node_ids: Iterable[int]) -> tuple[int, ...]:
    seen: dict[int, None] = {}
    for node_id in node_ids:
        seen.setdefault(node_id, None)
    return tuple(seen)


class Selection:
    """Handle over one or more WordNodes of a ConfigModel."""

    __slots__ = ("_model", "_nodes")

    def __init__(self, model: Optional[ConfigModel], nodes: tuple[int, ...] = ()):
        self._model = model
        self._nodes = tuple(nodes)

    @classmethod
    def root(cls, model: ConfigModel) -> "Selection":
        """Selection over the top-level block of a model."""
        return cls(model, (model.blocks[0].root,))

    # --- Introspection ---

    @property
    def model(self) -> Optional[ConfigModel]:
        return self._model

    @property
    def nodes(self) -> tuple[int, ...]:
        return self._nodes

    @property
    def options(self) -> ParserOptions:
        return self._model.options if self._model is not None else ParserOptions()

    @property
    def word(self) -> str:
        """Word at the first selected node ("" for block roots and UNDEFINED)."""
        if not self._nodes:
            return ""
        return self._node(self._nodes[0]).token

    @property
    def path(self) -> list[str]:
        """Words from the enclosing block root to the first selected node."""
        if not self._nodes:
            return []
        return self._model.path(self._nodes[0])

    def is_present(self) -> bool:
        return bool(self._nodes)

    def outcome(self) -> Outcome:
        """Tell a single match apart from an ambiguous or missing one."""
        if not self._nodes:
            return Outcome.ABSENT
        if self.single() is None:
            return Outcome.AMBIGUOUS
        return Outcome.FOUND

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._model is other._model and self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash((id(self._model), self._nodes))

    def __repr__(self) -> str:
        if not self._nodes:
            return "<Selection undefined>"
        paths = [" ".join(self._model.path(n)) or "<block>" for n in self._nodes]
        return f"<Selection {' | '.join(paths)}>"

    # --- Navigation ---

    def get(self, *designators: Designator) -> "Selection":
        """
        Follow designators from the selected nodes.

        Each designator is split into words that must match a consecutive
        word chain. A designator may start inside the nested block of the
        node it is applied to, so ``get("interface Serial0", "ip address")``
        descends into the interface block. The negation keyword is ignored.

        Returns:
            Selection over every surviving node, or UNDEFINED
        """
        nodes = self._nodes
        for designator in designators:
            tokens = self._tokens(designator)
            if not tokens:
                continue
            nodes = self._match(nodes, tokens)
            if not nodes:
                return UNDEFINED
        return self._make(nodes)

    def get_all(self, *designators: Designator) -> list["Selection"]:
        """Like get(), but one single-node Selection per surviving path."""
        matched = self.get(*designators)
        return [Selection(matched._model, (n,)) for n in matched._nodes]

    def all(self, pattern: Union[str, re.Pattern, None] = None) -> list["Selection"]:
        """
        Expand the selected nodes into one Selection per child word.

        Args:
            pattern: Optional regex; only child words it matches are kept
        """
        regex = re.compile(pattern) if isinstance(pattern, str) else pattern
        result = []
        for node_id in self._nodes:
            for token, child_id in self._node(node_id).children.items():
                if regex is None or regex.search(token):
                    result.append(Selection(self._model, (child_id,)))
        return result

    def kids(self) -> "Selection":
        """Immediate child words; a line-terminal leaf stands for itself."""
        found = []
        for node_id in self._nodes:
            node = self._node(node_id)
            if node.children:
                found.extend(node.children.values())
            elif node.is_terminal:
                found.append(node_id)
        return self._make(found)

    def single(self) -> Optional["Selection"]:
        """
        Resolve to exactly one line, or None.

        The selection must hold one node whose continuation does not branch
        before a line ends. The result sits on that line's last word.
        """
        if len(self._nodes) != 1:
            return None
        node = self._node(self._nodes[0])
        while not node.is_terminal:
            if len(node.children) != 1:
                return None
            node = self._node(next(iter(node.children.values())))
        return Selection(self._model, (node.id,))

    def zoom(self) -> "Selection":
        """single(), falling back to UNDEFINED."""
        return self.single() or UNDEFINED

    def endpt(self) -> "Selection":
        """Descend along first-seen words until a line ends."""
        if not self._nodes:
            return UNDEFINED
        node = self._node(self._nodes[0])
        while not node.is_terminal:
            if not node.children:
                return UNDEFINED
            node = self._node(next(iter(node.children.values())))
        return Selection(self._model, (node.id,))

    def next(self) -> "Selection":
        """Last word of the line following the selected line in its block."""
        if not self._nodes:
            return UNDEFINED
        node = self._node(self._nodes[0])
        block = self._model.blocks[node.block]
        if not block.records:
            return UNDEFINED

        if node.is_root:
            following = block.records[0]
        else:
            position = block.records.index(node.records[-1])
            if position + 1 >= len(block.records):
                return UNDEFINED
            following = block.records[position + 1]

        return Selection(self._model, (self._model.terminals[following],))

    def context(self) -> "Selection":
        """The node(s) opening the block(s) that hold the selection."""
        owners = []
        for node_id in self._nodes:
            owner = self._model.blocks[self._node(node_id).block].owner
            if owner is not None:
                owners.append(owner)
        return self._make(owners)

    def subs(self) -> "Selection":
        """Root of the nested block opened by the selected node(s)."""
        roots = [
            self._model.blocks[node.subs].root
            for node in map(self._node, self._nodes)
            if node.subs is not None
        ]
        return self._make(roots)

    def block(self) -> bool:
        """Check if the selection opens a nested block."""
        return any(self._node(n).subs is not None for n in self._nodes)

    # --- Text ---

    def records(self) -> list[LineRecord]:
        """Lines passing through or ending on the selected nodes, in source order."""
        indexes = {i for n in self._nodes for i in self._node(n).records}
        return [self._model.records[i] for i in sorted(indexes)]

    def all_records(self) -> list[LineRecord]:
        """records() plus everything nested below them, in source order."""
        indexes = {r.index for record in self.records() for r in record.walk()}
        return [self._model.records[i] for i in sorted(indexes)]

    def text(self) -> str:
        return "\n".join(record.text for record in self.records())

    def alltext(self) -> str:
        return "\n".join(record.text for record in self.all_records())

    def setcontext(self) -> list[str]:
        """Header lines, top down, that enter the block holding the selection."""
        if not self._nodes:
            return []
        return [
            self._model.header_text(owner)
            for owner in self._model.context_nodes(self._nodes[0])
        ]

    def unsetcontext(self) -> list[str]:
        """One exit per header returned by setcontext()."""
        return [self.options.exit_command] * len(self.setcontext())

    # --- Changes ---

    def locate(self, *designators: Designator) -> Placement:
        """
        Resolve designators for set().

        When a designator does not match, the placement describes where the
        missing item would be created: inside the nested block of a line that
        ends at the deepest match, otherwise beside it.
        """
        if not self._nodes:
            return Placement(target=UNDEFINED, headers=[], indent=0)

        current = self
        for designator in designators:
            tokens = self._tokens(designator)
            if not tokens:
                continue
            matched = current.get(tokens)
            if not matched:
                return current._creation_placement()
            current = matched

        if not current._nodes:
            return Placement(target=UNDEFINED, headers=[], indent=0)

        node = current._node(current._nodes[0])
        return Placement(
            target=current,
            headers=current.setcontext(),
            indent=self._model.blocks[node.block].indent,
        )

    def set(self, *args) -> list[str]:
        """
        Commands that turn the designated item into the desired text.

        Usage:
            selection.set("ip address", " ip address 2.2.2.2 255.255.255.0")

        Args:
            *args: Designators followed by the desired text (str or lines)

        Returns:
            Context headers, desired lines and exits; empty when nothing differs
        """
        from .engine import ConfigEngine

        if not args:
            raise TypeError("set() requires the desired configuration text")
        *designators, desired = args
        return ConfigEngine(self.options).set(self, designators, desired)

    # --- Internals ---

    def _node(self, node_id: int) -> WordNode:
        return self._model.node(node_id)

    def _make(self, node_ids: Iterable[int]) -> "Selection":
        nodes = _unique(node_ids)
        if not nodes:
            return UNDEFINED
        return Selection(self._model, nodes)

    def _tokens(self, designator: Designator) -> list[str]:
        if isinstance(designator, str):
            words = designator.split()
        else:
            words = [word for part in designator for word in part.split()]
        return [word for word in words if word != self.options.negation]

    def _match(self, node_ids: tuple[int, ...], tokens: list[str]) -> tuple[int, ...]:
        found = []
        for node_id in node_ids:
            node = self._node(node_id)
            starts = [node]
            if node.subs is not None:
                starts.append(self._node(self._model.blocks[node.subs].root))
            for start in starts:
                current: Optional[WordNode] = start
                for token in tokens:
                    child_id = current.children.get(token)
                    if child_id is None:
                        current = None
                        break
                    current = self._node(child_id)
                if current is not None:
                    found.append(current.id)
        return _unique(found)

    def _creation_placement(self) -> Placement:
        node = self._node(self._nodes[0])
        opens_block = node.subs is not None or (node.is_terminal and not node.children)
        if not opens_block:
            return Placement(
                target=UNDEFINED,
                headers=self.setcontext(),
                indent=self._model.blocks[node.block].indent,
            )

        header = self._model.header_text(node.id)
        if node.subs is not None:
            indent = self._model.blocks[node.subs].indent
        else:
            indent = indent_width(header) + 1
        return Placement(
            target=UNDEFINED,
            headers=self.setcontext() + [header],
            indent=indent,
        )


UNDEFINED = Selection(None, ())

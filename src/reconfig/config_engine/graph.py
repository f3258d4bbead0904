"""Shared-prefix word graph built per nesting block.

Lines of one block that start with the same words share WordNodes up to the
first differing word. The word a line ends on owns the graph of the line's
nested block. All nodes live in one arena (``ConfigModel.nodes``) and refer
to each other by index.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config.settings import ParserOptions
from ..utils.logging_config import timed
from .schema import Block, LineRecord, WordNode

logger = logging.getLogger(__name__)


@dataclass
class ConfigModel:
    """Parsed configuration: line records plus the word graph over them."""
    options: ParserOptions = field(default_factory=ParserOptions)
    source: str = "<string>"
    records: list[LineRecord] = field(default_factory=list)
    nodes: list[WordNode] = field(default_factory=list)
    blocks: list[Block] = field(default_factory=list)
    # record index -> node the record ends on
    terminals: dict[int, int] = field(default_factory=dict)

    @property
    def root(self) -> WordNode:
        """Root node of the top-level block."""
        return self.nodes[self.blocks[0].root]

    def node(self, node_id: int) -> WordNode:
        return self.nodes[node_id]

    def new_node(self, token: str, block: int, parent: Optional[int] = None) -> WordNode:
        node = WordNode(id=len(self.nodes), token=token, block=block, parent=parent)
        self.nodes.append(node)
        return node

    def header_text(self, node_id: int) -> str:
        """Text of the first line ending on a node (the line opening its block)."""
        node = self.nodes[node_id]
        return self.records[node.terminal_records[0]].text

    def context_nodes(self, node_id: int) -> list[int]:
        """Block-opening nodes from the top down to the block holding node_id."""
        owners = []
        block = self.blocks[self.nodes[node_id].block]
        while block.owner is not None:
            owners.append(block.owner)
            block = self.blocks[self.nodes[block.owner].block]
        owners.reverse()
        return owners

    def path(self, node_id: int) -> list[str]:
        """Words from the block root down to a node."""
        words = []
        node = self.nodes[node_id]
        while node.parent is not None:
            words.append(node.token)
            node = self.nodes[node.parent]
        words.reverse()
        return words


class GraphBuilder:
    """Build the word graph for a forest of LineRecords."""

    def __init__(self, options: Optional[ParserOptions] = None, source: str = "<string>"):
        self.options = options or ParserOptions()
        self.source = source

    @timed("build")
    def build(self, forest: list[LineRecord]) -> ConfigModel:
        """
        Build a ConfigModel from parsed records.

        Args:
            forest: Top-level records as returned by BlockParser.parse

        Returns:
            ConfigModel whose first block is the top-level block
        """
        model = ConfigModel(options=self.options, source=self.source)
        for top in forest:
            model.records.extend(top.walk())

        self._build_block(model, forest, owner=None)

        logger.debug(
            f"Built graph for {self.source}: {len(model.records)} lines, "
            f"{len(model.nodes)} nodes, {len(model.blocks)} blocks"
        )
        return model

    def _build_block(
        self,
        model: ConfigModel,
        records: list[LineRecord],
        owner: Optional[int],
    ) -> int:
        """Build the graph of one block and, recursively, of its nested blocks."""
        block = Block(
            id=len(model.blocks),
            root=-1,
            owner=owner,
            indent=records[0].column if records else 0,
        )
        model.blocks.append(block)
        root = model.new_node("", block.id)
        block.root = root.id

        # Terminal nodes in the order their first line was seen
        ends: list[int] = []

        for record in records:
            block.records.append(record.index)

            node = root
            node.records.append(record.index)
            for token in record.tokens:
                child_id = node.children.get(token)
                if child_id is None:
                    child = model.new_node(token, block.id, parent=node.id)
                    node.children[token] = child.id
                else:
                    child = model.nodes[child_id]
                child.records.append(record.index)
                node = child

            if not node.terminal_records:
                ends.append(node.id)
            node.terminal_records.append(record.index)
            model.terminals[record.index] = node.id

        for node_id in ends:
            node = model.nodes[node_id]
            # Repeated headers ("interface X" twice) share one nested block
            nested = sorted(
                (
                    child
                    for index in node.terminal_records
                    for child in model.records[index].children
                ),
                key=lambda r: r.index,
            )
            if nested:
                node.subs = self._build_block(model, nested, owner=node.id)

        return block.id

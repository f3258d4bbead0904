"""Tests for the shared-prefix word graph."""
import pytest
from reconfig.config_engine import ConfigEngine


CONFIG = """\
!
hostname router1
!
interface Serial0
 ip address 1.1.1.1 255.255.255.0
!
interface Serial1
 shutdown
!
ip route 10.0.0.0 255.0.0.0 1.1.1.1
ip route 20.0.0.0 255.0.0.0 1.1.1.1
!
router bgp 65000
 address-family ipv4
  neighbor 1.1.1.2 activate
!
"""


@pytest.fixture
def model():
    return ConfigEngine().build_model(CONFIG)


def child(model, node, *tokens):
    for token in tokens:
        node = model.nodes[node.children[token]]
    return node


class TestGraphBuilder:
    """Tests for GraphBuilder."""

    def test_records_in_source_order(self, model):
        """Every structural line is kept, indexed by position."""
        assert len(model.records) == 10
        assert all(r.index == i for i, r in enumerate(model.records))

    def test_root_children_follow_first_appearance(self, model):
        """Children are ordered by first insertion, not alphabetically."""
        assert list(model.root.children) == ["hostname", "interface", "ip", "router"]

    def test_shared_prefix(self, model):
        """Lines with a common prefix share nodes up to the first difference."""
        route = child(model, model.root, "ip", "route")
        assert list(route.children) == ["10.0.0.0", "20.0.0.0"]
        assert route.records == [5, 6]
        assert not route.is_terminal

    def test_terminal_node(self, model):
        """The last word of a line records the line as ending there."""
        serial0 = child(model, model.root, "interface", "Serial0")
        assert serial0.terminal_records == [1]
        assert model.terminals[1] == serial0.id

    def test_block_ownership(self, model):
        """A line with a block owns the nested graph."""
        serial0 = child(model, model.root, "interface", "Serial0")
        assert serial0.introduces_block

        nested = model.blocks[serial0.subs]
        assert nested.owner == serial0.id
        assert nested.indent == 1
        assert list(model.nodes[nested.root].children) == ["ip"]

        hostname = child(model, model.root, "hostname", "router1")
        assert not hostname.introduces_block

    def test_block_count(self, model):
        """Top level, two interfaces, bgp and its address family."""
        assert len(model.blocks) == 5
        assert model.blocks[0].owner is None

    def test_parent_links(self, model):
        """Nodes point back to the word before them."""
        route = child(model, model.root, "ip", "route")
        ip = model.nodes[route.parent]
        assert ip.token == "ip"
        assert ip.parent == model.root.id
        assert model.root.is_root

    def test_context_nodes_and_path(self, model):
        """Owners from the top down and words within a block."""
        bgp = child(model, model.root, "router", "bgp", "65000")
        family_root = model.nodes[model.blocks[bgp.subs].root]
        family = child(model, family_root, "address-family", "ipv4")
        activate_root = model.nodes[model.blocks[family.subs].root]
        activate = child(model, activate_root, "neighbor", "1.1.1.2", "activate")

        assert model.context_nodes(activate.id) == [bgp.id, family.id]
        assert model.path(activate.id) == ["neighbor", "1.1.1.2", "activate"]
        assert model.header_text(family.id) == " address-family ipv4"

    def test_repeated_header_shares_block(self):
        """Two lines opening the same block feed one nested graph."""
        model = ConfigEngine().build_model(
            "interface A\n description x\n!\ninterface A\n shutdown\n!\n"
        )
        a = child(model, model.root, "interface", "A")
        assert a.terminal_records == [0, 2]

        nested = model.blocks[a.subs]
        assert [model.records[i].text for i in nested.records] == [
            " description x",
            " shutdown",
        ]

    def test_negated_and_plain_lines_share_path(self):
        """'no cdp enable' and 'cdp enable' end on the same node."""
        model = ConfigEngine().build_model("cdp enable\nno cdp enable\n")
        enable = child(model, model.root, "cdp", "enable")
        assert enable.terminal_records == [0, 1]

    def test_empty_input(self):
        """Empty text still has a top-level block."""
        model = ConfigEngine().build_model("")
        assert len(model.blocks) == 1
        assert model.root.children == {}

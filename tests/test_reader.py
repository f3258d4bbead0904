"""Tests for the readconfig / stringconfig entry points."""
import pytest
from reconfig import ParserOptions, readconfig, stringconfig


CONFIG = """\
!
hostname router1
!
interface Serial0
 ip address 1.1.1.1 255.255.255.0
!
"""


class TestReadconfig:
    """Tests for reading configuration files."""

    def test_read_file(self, tmp_path):
        """A file parses to its root selection and remembers its path."""
        path = tmp_path / "router1.cfg"
        path.write_text(CONFIG)

        root = readconfig(path)
        assert root.model.source == str(path)
        assert root.get("interface Serial0", "ip address").text() == (
            " ip address 1.1.1.1 255.255.255.0"
        )

    def test_string_path(self, tmp_path):
        path = tmp_path / "router1.cfg"
        path.write_text(CONFIG)
        assert readconfig(str(path)).get("hostname").single().word == "router1"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            readconfig(tmp_path / "absent.cfg")


class TestStringconfig:
    """Tests for parsing text held in memory."""

    def test_text(self):
        root = stringconfig(CONFIG)
        assert root.model.source == "<string>"
        assert root.alltext() == (
            "hostname router1\n"
            "interface Serial0\n"
            " ip address 1.1.1.1 255.255.255.0"
        )

    def test_options_are_kept(self):
        """The model carries the options it was parsed with."""
        options = ParserOptions(comment="#")
        root = stringconfig("hostname r1\n# note\n", options)
        assert root.options is options
        assert root.text() == "hostname r1"

    def test_empty_text(self):
        """Empty text still yields a usable root."""
        root = stringconfig("")
        assert root.is_present()
        assert root.alltext() == ""
        assert root.endpt().is_present() is False

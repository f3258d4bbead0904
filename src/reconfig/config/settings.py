"""Parser options for indentation-structured device configurations.

Environment variables:
- RECONFIG_MINUS_ONE_INDENT: Regex for first tokens parsed one column shallower
  (empty string disables, default: ^class$, for policy-map output that writes
  "  class X" with its body at three spaces)
- RECONFIG_COMMENT: Comment / block terminator marker (default: !)
- RECONFIG_NEGATION: Negation keyword (default: no)
- RECONFIG_EXIT_COMMAND: Command that leaves a configuration block (default: exit)
"""
import os
import logging
import re
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MINUS_ONE_INDENT = r"^class$"

MinusOneIndent = Union[str, Callable[[str], bool], None]


class OptionsError(ValueError):
    """Invalid parser option."""
    pass


@dataclass(frozen=True)
class ParserOptions:
    """Tunables shared by the block parser, the graph and the set generator."""
    minus_one_indent: MinusOneIndent = DEFAULT_MINUS_ONE_INDENT
    comment: str = "!"
    negation: str = "no"
    exit_command: str = "exit"

    def __post_init__(self):
        if isinstance(self.minus_one_indent, str):
            try:
                re.compile(self.minus_one_indent)
            except re.error as e:
                raise OptionsError(
                    f"Invalid minus_one_indent pattern {self.minus_one_indent!r}: {e}"
                )
        elif self.minus_one_indent is not None and not callable(self.minus_one_indent):
            raise OptionsError(
                f"minus_one_indent must be a regex string, a callable or None, "
                f"not {type(self.minus_one_indent).__name__}"
            )

        for name in ("comment", "negation", "exit_command"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip() or value != value.strip():
                raise OptionsError(f"{name} must be a non-empty word, got {value!r}")

    def is_minus_one(self, token: str) -> bool:
        """Check whether a line starting with token sits one column shallower."""
        if self.minus_one_indent is None:
            return False
        if callable(self.minus_one_indent):
            return bool(self.minus_one_indent(token))
        return re.search(self.minus_one_indent, token) is not None

    @classmethod
    def from_env(cls) -> "ParserOptions":
        """Load parser options from environment variables."""
        kwargs: dict[str, Any] = {}

        minus_one = os.environ.get("RECONFIG_MINUS_ONE_INDENT")
        if minus_one is not None:
            kwargs["minus_one_indent"] = minus_one or None

        for name, env in (
            ("comment", "RECONFIG_COMMENT"),
            ("negation", "RECONFIG_NEGATION"),
            ("exit_command", "RECONFIG_EXIT_COMMAND"),
        ):
            value = os.environ.get(env)
            if value:
                kwargs[name] = value

        return cls(**kwargs)

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "ParserOptions":
        """
        Build options from a mapping, ignoring unknown keys.

        Raises:
            OptionsError: If data is not a mapping or holds an invalid value
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise OptionsError(
                f"Parser options must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Ignoring unknown parser option: {key}")
                continue
            kwargs[key] = value

        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ParserOptions":
        """
        Load parser options from a YAML file.

        The file may hold the options at top level or under a ``parser`` key:

        ```yaml
        parser:
          minus_one_indent: "^(class|policy)$"
          exit_command: exit
        ```
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"Parser options file not found: {path}")
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        if isinstance(data, dict) and "parser" in data:
            data = data["parser"]

        return cls.from_dict(data)

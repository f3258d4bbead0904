"""reconfig - navigate and reconcile indentation-structured device configurations."""
from .config import ParserOptions, OptionsError
from .config_engine import (
    ConfigEngine,
    Selection,
    UNDEFINED,
    Outcome,
    ParseError,
    MalformedIndent,
    readconfig,
    stringconfig,
)

__version__ = "0.1.0"

__all__ = [
    "ParserOptions",
    "OptionsError",
    "ConfigEngine",
    "Selection",
    "UNDEFINED",
    "Outcome",
    "ParseError",
    "MalformedIndent",
    "readconfig",
    "stringconfig",
]

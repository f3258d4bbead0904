"""Parser tunables and their loading from environment / YAML."""
from .settings import ParserOptions, OptionsError, DEFAULT_MINUS_ONE_INDENT

__all__ = ["ParserOptions", "OptionsError", "DEFAULT_MINUS_ONE_INDENT"]

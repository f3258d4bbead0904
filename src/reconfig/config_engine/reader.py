"""Entry points reading configuration text into a root Selection."""
import logging
from pathlib import Path
from typing import Optional, Union

from ..config.settings import ParserOptions
from .engine import ConfigEngine
from .selection import Selection

logger = logging.getLogger(__name__)


def readconfig(path: Union[str, Path], options: Optional[ParserOptions] = None) -> Selection:
    """
    Read a configuration file.

    Args:
        path: File holding the configuration text
        options: Parser tunables (defaults apply when omitted)

    Returns:
        Selection over the top-level block

    Raises:
        FileNotFoundError: If the file does not exist
        MalformedIndent: If the indentation is inconsistent
    """
    path = Path(path)
    logger.info(f"Reading configuration from {path}")
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return ConfigEngine(options).load(text, source=str(path))


def stringconfig(text: str, options: Optional[ParserOptions] = None) -> Selection:
    """Parse configuration text held in memory."""
    return ConfigEngine(options).load(text)

"""
Render configuration, read from the environment (and a .env file if present).
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2
TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class RenderSettings:
    """Formatting options used by Feed.render()."""
    pretty_print: bool = True
    indent: str = " " * DEFAULT_INDENT

    @classmethod
    def from_env(cls) -> 'RenderSettings':
        """Build settings from ATOM_PRETTY_PRINT and ATOM_INDENT"""
        pretty_print = os.getenv("ATOM_PRETTY_PRINT", "true").strip().lower() in TRUE_VALUES

        raw_indent = os.getenv("ATOM_INDENT", str(DEFAULT_INDENT))
        try:
            indent_width = int(raw_indent)
        except ValueError:
            logger.warning(f"Ignoring invalid ATOM_INDENT={raw_indent!r}, using {DEFAULT_INDENT}")
            indent_width = DEFAULT_INDENT
        if indent_width < 0:
            logger.warning(f"Ignoring negative ATOM_INDENT={indent_width}, using {DEFAULT_INDENT}")
            indent_width = DEFAULT_INDENT

        settings = cls(pretty_print=pretty_print, indent=" " * indent_width)
        logger.debug(f"Loaded render settings: pretty_print={settings.pretty_print}, indent={indent_width}")
        return settings


_settings: Optional[RenderSettings] = None


def get_render_settings() -> RenderSettings:
    """Get or create the render settings instance"""
    global _settings
    if _settings is None:
        _settings = RenderSettings.from_env()
    return _settings


def reset_render_settings():
    """Forget the cached settings so the environment is read again"""
    global _settings
    _settings = None

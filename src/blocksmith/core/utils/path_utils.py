# src/blocksmith/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package and output paths.
    """

    @staticmethod
    def get_app_package_root() -> Path:
        """Returns the directory of the 'blocksmith' package (holds settings.json)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_app_package_root() / "settings.json"

    @staticmethod
    def get_default_output_root() -> Path:
        """
        Returns the default directory for generated themes in the current working directory.
        (e.g., ./blocksmith_output)
        """
        return Path.cwd() / "blocksmith_output"

    @staticmethod
    def get_theme_dir(slug: str, base_dir: Path) -> Path:
        """
        Returns the output directory for a single theme.
        Creates the directory if it doesn't exist.
        """
        path = base_dir / slug
        path.mkdir(parents=True, exist_ok=True)
        return path

    @staticmethod
    def sibling_with_suffix(path: Path, suffix: str) -> Path:
        """'site/home.json' + '.html' -> 'site/home.html'"""
        return path.with_suffix(suffix)

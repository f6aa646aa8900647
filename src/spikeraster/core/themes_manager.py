# src/spikeraster/core/themes_manager.py
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import matplotlib.pyplot as plt
import plotly.io as pio
import seaborn as sns

from spikeraster.core.internals import public_api

logger = logging.getLogger(__name__)


@public_api()
class ThemeManager:
    """
    Theme management for the raster renderers.

    Supports:
    - Seaborn styles and built-in Matplotlib styles
    - Built-in Plotly templates
    - Custom TOML themes, whose ``color_order`` feeds the group colours
    """

    PLOTLY_THEMES = [
        "plotly",
        "plotly_white",
        "plotly_dark",
        "ggplot2",
        "seaborn",
        "simple_white",
        "none",
    ]

    MATPLOTLIB_THEMES = [
        "default",
        "seaborn",
        "seaborn-darkgrid",
        "seaborn-whitegrid",
        "seaborn-ticks",
        "ggplot",
        "dark_background",
        "classic",
    ]

    def __init__(
        self,
        mpl_theme: str = "seaborn-ticks",
        plotly_theme: str = "simple_white",
        custom_themes_dir: Optional[Path] = None,
    ):
        """
        Initialize ThemeManager with theme preferences.

        Args:
            mpl_theme: Matplotlib theme (default: 'seaborn-ticks')
            plotly_theme: Plotly theme (default: 'simple_white')
            custom_themes_dir: Optional directory holding custom TOML themes
        """
        self.mpl_theme = mpl_theme
        self.plotly_theme = plotly_theme
        self.custom_themes_dir = (
            Path(custom_themes_dir)
            if custom_themes_dir is not None
            else Path(__file__).parent / "themes"
        )

    def apply_matplotlib_theme(self, theme: Optional[str] = None) -> str:
        """
        Apply theme to Matplotlib.

        Args:
            theme: Theme name. Uses default if not specified.

        Returns:
            Name of the theme actually applied
        """
        applied_theme = theme or self.mpl_theme

        if applied_theme not in self.MATPLOTLIB_THEMES:
            logger.warning(
                "Unknown Matplotlib theme '%s'. Using '%s'.",
                applied_theme,
                self.mpl_theme,
            )
            applied_theme = self.mpl_theme

        if applied_theme.startswith("seaborn"):
            style = applied_theme.replace("seaborn", "").lstrip("-") or "darkgrid"
            sns.set_theme(style=style)
        else:
            plt.style.use(applied_theme)

        return applied_theme

    def apply_plotly_theme(self, theme: Optional[str] = None) -> str:
        """
        Apply theme to Plotly.

        Args:
            theme: Theme name. Uses default if not specified.

        Returns:
            Name of the template actually applied
        """
        applied_theme = theme or self.plotly_theme

        if applied_theme not in self.PLOTLY_THEMES:
            logger.warning(
                "Unknown Plotly theme '%s'. Using '%s'.",
                applied_theme,
                self.plotly_theme,
            )
            applied_theme = self.plotly_theme

        pio.templates.default = applied_theme
        return applied_theme

    def theme_path(self, theme_name: str) -> Path:
        return self.custom_themes_dir / f"{theme_name}.toml"

    def load_custom_theme(self, theme: Union[str, Path]) -> Dict[str, Any]:
        """
        Load a custom theme from a TOML file.

        Args:
            theme: Path to a TOML file, or the name of a theme in
                ``custom_themes_dir``

        Returns:
            Parsed theme configuration
        """
        theme_path = Path(theme)
        if theme_path.suffix != ".toml":
            theme_path = self.theme_path(str(theme))
        if not theme_path.exists():
            raise FileNotFoundError(f"Theme file not found: {theme_path}")

        with open(theme_path, "rb") as f:
            return tomllib.load(f)

    def create_custom_theme(self, theme_name: str, theme_config: Dict[str, Any]) -> Path:
        """
        Save a custom theme to a TOML file.

        Args:
            theme_name: Name of the custom theme
            theme_config: Dictionary containing theme configuration

        Returns:
            Path of the written file
        """
        import tomli_w

        self.custom_themes_dir.mkdir(parents=True, exist_ok=True)
        theme_file = self.theme_path(theme_name)
        with open(theme_file, "wb") as f:
            tomli_w.dump(theme_config, f)
        return theme_file

    def color_order(self, theme: Optional[Union[str, Path]] = None) -> List[Any]:
        """
        Colours to cycle over raster groups.

        Args:
            theme: Custom theme name or path. Without one, or when the theme
                has no ``color_order``, the seaborn colorblind palette is used.
        """
        if theme is not None:
            config = self.load_custom_theme(theme)
            colors = config.get("color_order") or config.get("raster", {}).get(
                "color_order"
            )
            if colors:
                return list(colors)
        return [tuple(color) for color in sns.color_palette("colorblind")]

    def list_available_themes(self) -> Dict[str, List[str]]:
        """
        List available themes for different backends.

        Returns:
            Dictionary of available themes
        """
        custom_themes = []
        if self.custom_themes_dir.exists():
            custom_themes = sorted(f.stem for f in self.custom_themes_dir.glob("*.toml"))

        return {
            "matplotlib": self.MATPLOTLIB_THEMES + custom_themes,
            "plotly": self.PLOTLY_THEMES + custom_themes,
        }


# Singleton theme manager
theme_manager = ThemeManager()


@public_api()
def apply_matplotlib_theme(theme: Optional[str] = None) -> str:
    """Convenience function to apply Matplotlib theme"""
    return theme_manager.apply_matplotlib_theme(theme)


@public_api()
def apply_plotly_theme(theme: Optional[str] = None) -> str:
    """Convenience function to apply Plotly theme"""
    return theme_manager.apply_plotly_theme(theme)


@public_api()
def list_available_themes() -> Dict[str, List[str]]:
    """Convenience function to list available themes"""
    return theme_manager.list_available_themes()

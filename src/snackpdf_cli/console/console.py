"""
Flexoki-themed Console class for Rich library
Uses the warm, inky Flexoki color scheme by Steph Ango
https://stephango.com/flexoki
"""

import os
from contextlib import contextmanager

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from snackpdf_core.models.config import SnackPdfConfig

# Flexoki color palette (dark theme - 400 series)
COLORS_DARK = {
    'ui_2': '#403E3C',
    'tx_3': '#B7B5AC',
    'tx_2': '#CECDC3',
    'tx': '#E6E4D9',
    'red': '#D14D41',
    'orange': '#DA702C',
    'yellow': '#D0A215',
    'green': '#879A39',
    'cyan': '#3AA99F',
    'blue': '#4385BE',
}

# Flexoki color palette (light theme - 600 series)
COLORS_LIGHT = {
    'ui_2': '#DAD8CE',
    'tx_3': '#6F6E69',
    'tx_2': '#403E3C',
    'tx': '#100F0F',
    'red': '#AF3029',
    'orange': '#BC5215',
    'yellow': '#AD8301',
    'green': '#66800B',
    'cyan': '#24837B',
    'blue': '#205EA6',
}


class Console:
    """
    A themed console wrapper using the Flexoki color scheme.
    Provides methods for styled messages, panels and spinners.
    """

    @staticmethod
    def detect_terminal_background(config: SnackPdfConfig = None):
        """
        Detect if the terminal has a light or dark background.
        Returns 'dark' or 'light'.

        Detection methods:
        1. Check SnackPdfConfig theme setting
        2. Check COLORFGBG environment variable
        3. Default to 'dark' if uncertain
        """
        if config is not None and config.theme is not None:
            return config.theme

        # Format is "foreground;background"; 7 and 15 are light backgrounds
        colorfgbg = os.environ.get('COLORFGBG', '')
        parts = colorfgbg.split(';')
        if len(parts) >= 2:
            try:
                if int(parts[-1]) in (7, 15):
                    return 'light'
            except ValueError:
                pass

        return 'dark'

    def __init__(self, theme_mode=None, config: SnackPdfConfig = None):
        if config is None:
            config = SnackPdfConfig()

        if theme_mode is None:
            theme_mode = self.detect_terminal_background(config)

        self.theme_mode = theme_mode
        self.COLORS = COLORS_LIGHT if theme_mode == 'light' else COLORS_DARK

        self.theme = Theme(
            {
                'default': self.COLORS['tx'],
                'muted': self.COLORS['tx_2'],
                'faint': self.COLORS['tx_3'],
                'blue': self.COLORS['blue'],
                'success': f'bold {self.COLORS["green"]}',
                'info': self.COLORS['cyan'],
                'warning': f'bold {self.COLORS["orange"]}',
                'error': f'bold {self.COLORS["red"]}',
                'highlight': f'bold {self.COLORS["yellow"]}',
                'status.spinner': self.COLORS['tx_3'],
            }
        )

        self.console = RichConsole(theme=self.theme)

    def print(self, *args, style=None, **kwargs):
        """Print with optional style."""
        self.console.print(*args, style=style, **kwargs)

    def _icon_and_text(self, message: str, icon: str, icon_style: str):
        grid = Table.grid(padding=(0, 1), expand=False)
        grid.add_column(width=1)
        grid.add_column()
        grid.add_row(Text(icon, style=icon_style), Text(message))
        return grid

    def _message(self, message: str, icon: str, style: str, panel: bool):
        formatted = self._icon_and_text(message=message, icon=icon, icon_style=style)
        if panel:
            self.panel(formatted, border_style=style)
        else:
            self.print(formatted)

    def success(self, message: str, prefix: str = '✓', panel: bool = False):
        """Print a success message."""
        self._message(message, prefix, 'success', panel)

    def info(self, message: str, prefix: str = 'ℹ', panel: bool = False):
        """Print an info message."""
        self._message(message, prefix, 'info', panel)

    def warning(self, message: str, prefix: str = '⚠', panel: bool = False):
        """Print a warning message."""
        self._message(message, prefix, 'warning', panel)

    def error(self, message: str, prefix: str = '✗', panel: bool = False):
        """Print an error message."""
        self._message(message, prefix, 'error', panel)

    def muted(self, message: str):
        self.print(message, style='muted')

    def faint(self, message: str):
        self.print(message, style='faint')

    def action(self, message: str, style: str = 'faint'):
        """Print a highlighted action."""
        self.print(f'[{style}]▣[/{style}] {message}')
        self.newline()

    def panel(self, content, title: str = None, border_style: str = None):
        """Display content in a panel."""
        self.console.print(
            Panel(
                content,
                title=title,
                border_style=border_style or self.COLORS['ui_2'],
                title_align='left',
            )
        )

    @contextmanager
    def spinner(self, message: str = 'Loading...'):
        """
        Context manager for a spinner.

        Usage:
            with console.spinner("Extracting pages..."):
                # do work
        """
        with self.console.status(
            f'[{self.COLORS["cyan"]}]{message}[/{self.COLORS["cyan"]}]',
            spinner='dots',
        ):
            yield

    def newline(self, count: int = 1):
        """Print newlines."""
        self.console.print('\n' * (count - 1))

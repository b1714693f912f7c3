"""
Unit tests for the Console class.

Tests cover theme detection, styled messages, panels and the spinner.
"""

import os
from unittest.mock import patch

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from snackpdf_cli.console.console import Console, COLORS_DARK, COLORS_LIGHT
from snackpdf_core.models.config import SnackPdfConfig


class TestConsoleThemeDetection:
    """Tests for terminal background detection and theme selection."""

    def test_detect_terminal_background_from_config_light(self):
        """Test theme detection from SnackPdfConfig - light theme."""
        config = SnackPdfConfig(theme='light')
        assert Console.detect_terminal_background(config) == 'light'

    @patch.dict(os.environ, {'COLORFGBG': '15;0'})
    def test_detect_terminal_background_from_colorfgbg_dark(self):
        assert Console.detect_terminal_background() == 'dark'

    @patch.dict(os.environ, {'COLORFGBG': '0;15'})
    def test_detect_terminal_background_from_colorfgbg_light(self):
        assert Console.detect_terminal_background() == 'light'

    @patch.dict(os.environ, {'COLORFGBG': 'default;default'})
    def test_detect_terminal_background_unparsable(self):
        assert Console.detect_terminal_background() == 'dark'

    @patch.dict(os.environ, {}, clear=True)
    def test_detect_terminal_background_default_dark(self):
        """Test default theme when no detection method works."""
        assert Console.detect_terminal_background() == 'dark'

    def test_detect_terminal_background_config_overrides_env(self):
        """Test that config theme takes precedence over environment variables."""
        with patch.dict(os.environ, {'COLORFGBG': '0;7'}):
            config = SnackPdfConfig(theme='dark')
            assert Console.detect_terminal_background(config) == 'dark'


class TestConsoleInitialization:
    @patch.dict(os.environ, {}, clear=True)
    def test_console_initialization_default(self):
        console = Console()
        assert console.theme_mode == 'dark'
        assert console.COLORS == COLORS_DARK
        assert isinstance(console.console, RichConsole)

    def test_console_initialization_with_config(self):
        console = Console(config=SnackPdfConfig(theme='light'))
        assert console.theme_mode == 'light'
        assert console.COLORS == COLORS_LIGHT

    def test_console_theme_has_message_styles(self):
        theme_styles = Console().theme.styles

        for style in ['success', 'info', 'warning', 'error', 'muted', 'faint']:
            assert style in theme_styles


class TestConsoleMessages:
    """Tests for styled message output methods."""

    @patch('snackpdf_cli.console.console.RichConsole.print')
    def test_print_with_style(self, mock_print):
        console = Console()
        console.print('Test message', style='bold')

        mock_print.assert_called_once()
        assert 'Test message' in mock_print.call_args[0]
        assert mock_print.call_args[1]['style'] == 'bold'

    @patch('snackpdf_cli.console.console.RichConsole.print')
    def test_message_types_print_icon_tables(self, mock_print):
        console = Console()

        console.success('Saved')
        console.info('Information')
        console.warning('Careful')
        console.error('Broken')

        assert mock_print.call_count == 4
        for printed in mock_print.call_args_list:
            assert isinstance(printed[0][0], Table)

    @patch('snackpdf_cli.console.console.RichConsole.print')
    def test_error_in_panel(self, mock_print):
        console = Console()
        console.error('Failed to extract pages', panel=True)

        mock_print.assert_called_once()
        assert isinstance(mock_print.call_args[0][0], Panel)

    @patch('snackpdf_cli.console.console.RichConsole.print')
    def test_muted_and_faint(self, mock_print):
        console = Console()
        console.muted('muted text')
        console.faint('faint text')

        assert mock_print.call_args_list[0][1]['style'] == 'muted'
        assert mock_print.call_args_list[1][1]['style'] == 'faint'

    @patch('snackpdf_cli.console.console.RichConsole.print')
    def test_action_is_followed_by_newline(self, mock_print):
        console = Console()
        console.action('Extract pages')

        assert mock_print.call_count == 2
        assert 'Extract pages' in mock_print.call_args_list[0][0][0]


class TestConsoleSpinner:
    def test_spinner_runs_body(self):
        console = Console()
        executed = False

        with console.spinner('Extracting pages...'):
            executed = True

        assert executed

"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner.
"""

import logging
import pytest
from unittest.mock import MagicMock, patch
from typer.testing import CliRunner

from src.cli.errors import ConfigError, InvalidArgumentError
from src.cli.main import app, _configure_logging, VERSION
from src.cli.models import AppConfig, ExitCode
from src.confluence_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
)


runner = CliRunner()

CONFIG = AppConfig(
    confluence_url="https://wiki.example.com",
    user="alice",
    api_token="secret",
    default_space="DOC",
    limit=15,
    children_limit=40,
)


@pytest.fixture
def cli_env():
    """Patch configuration loading and the API client for CLI tests."""
    with patch('src.cli.main.ConfigLoader') as mock_loader, \
            patch('src.cli.main.APIWrapper') as mock_api, \
            patch('src.cli.main.Authenticator') as mock_auth:
        mock_loader.load.return_value = CONFIG
        yield {"loader": mock_loader, "api": mock_api, "auth": mock_auth}


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    @pytest.mark.parametrize("verbosity,level", [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (5, logging.DEBUG),
    ])
    def test_verbosity_sets_level(self, verbosity, level):
        """Verbosity maps to WARNING, INFO and DEBUG."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_app_logger = MagicMock()
            mock_get_logger.return_value = mock_app_logger

            _configure_logging(verbosity)

            mock_get_logger.assert_called_with("src")
            mock_app_logger.setLevel.assert_called_with(level)

    def test_logdir_creates_log_file(self, tmp_path):
        """A log directory gets a timestamped log file."""
        logdir = tmp_path / "logs"

        _configure_logging(1, str(logdir))

        assert len(list(logdir.glob("atl_*.log"))) == 1
        assert len(logging.getLogger("src").handlers) == 2

    def test_repeated_calls_do_not_duplicate_handlers(self):
        """Configuring twice leaves a single console handler."""
        _configure_logging(0)
        _configure_logging(0)

        assert len(logging.getLogger("src").handlers) == 1


class TestRootOptions:
    """Test cases for global options."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"atl version {VERSION}" in result.output

    def test_explicit_config_path(self, cli_env):
        """--config is passed to the loader."""
        with patch('src.cli.main.SpacesCommand'):
            runner.invoke(app, ["--config", "/tmp/atl.yaml", "page", "spaces"])

        cli_env["loader"].load.assert_called_once_with("/tmp/atl.yaml")

    def test_config_error_exits_1(self, cli_env):
        """An invalid configuration file exits with a general error."""
        cli_env["loader"].load.side_effect = ConfigError("must be positive, got 0", "timeout")

        result = runner.invoke(app, ["page", "spaces"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "timeout" in result.output

    def test_api_built_from_config(self, cli_env):
        """The API client is built from the loaded configuration."""
        with patch('src.cli.main.SpacesCommand'):
            runner.invoke(app, ["page", "spaces"])

        cli_env["auth"].assert_called_once_with(
            url="https://wiki.example.com", user="alice", api_token="secret"
        )
        cli_env["api"].assert_called_once_with(
            cli_env["auth"].return_value, cloud=False, timeout=30, max_retries=3
        )


class TestViewCommand:
    """Test cases for the page view command."""

    @patch('src.cli.main.ViewCommand')
    def test_view_passes_options(self, mock_view, cli_env):
        """Options are forwarded to ViewCommand.run."""
        result = runner.invoke(app, [
            "page", "view", "123456",
            "-o", "out.md", "--format", "md", "--with-toc", "--with-images",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        mock_view.assert_called_once_with(
            cli_env["api"].return_value,
            mock_view.call_args.args[1],
            base_url="https://wiki.example.com",
        )
        mock_view.return_value.run.assert_called_once_with(
            "123456",
            output_file="out.md",
            output_format="md",
            with_toc=True,
            with_images=True,
            info=False,
            space_key="DOC",
        )

    @patch('src.cli.main.ViewCommand')
    def test_space_option_overrides_default(self, mock_view, cli_env):
        """--space wins over the configured default space."""
        runner.invoke(app, ["page", "view", "Home", "--space", "OPS", "--info"])

        kwargs = mock_view.return_value.run.call_args.kwargs
        assert kwargs["space_key"] == "OPS"
        assert kwargs["info"] is True

    @patch('src.cli.main.ViewCommand')
    def test_confluence_alias(self, mock_view, cli_env):
        """'confluence' is an alias of the page command group."""
        result = runner.invoke(app, ["confluence", "view", "1"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_view.return_value.run.assert_called_once()


class TestErrorHandling:
    """Test cases for mapping errors to exit codes."""

    @pytest.mark.parametrize("error,exit_code", [
        (InvalidCredentialsError(user="alice", endpoint="https://wiki"), ExitCode.AUTH_ERROR),
        (APIUnreachableError(endpoint="https://wiki"), ExitCode.NETWORK_ERROR),
        (PageNotFoundError(page_id="9"), ExitCode.GENERAL_ERROR),
        (APIAccessError("forbidden", status_code=403), ExitCode.GENERAL_ERROR),
        (ValueError("Invalid page_id format"), ExitCode.GENERAL_ERROR),
        (RuntimeError("surprise"), ExitCode.GENERAL_ERROR),
    ])
    @patch('src.cli.main.ViewCommand')
    def test_exit_codes(self, mock_view, cli_env, error, exit_code):
        """Each failure maps to its exit code and prints an error."""
        mock_view.return_value.run.side_effect = error

        result = runner.invoke(app, ["page", "view", "9"])

        assert result.exit_code == exit_code
        assert "Error:" in result.output

    @patch('src.cli.main.ViewCommand')
    def test_invalid_argument_prints_hint(self, mock_view, cli_env):
        """Argument errors print their hint."""
        mock_view.return_value.run.side_effect = InvalidArgumentError(
            "cannot parse Confluence URL: https://x", hint="expected /spaces/SPACE/pages/ID"
        )

        result = runner.invoke(app, ["page", "view", "https://x"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "cannot parse Confluence URL" in result.output
        assert "Hint: expected /spaces/SPACE/pages/ID" in result.output

    @patch('src.cli.main.ViewCommand')
    def test_auth_error_prints_credentials_hint(self, mock_view, cli_env):
        """Authentication failures explain how to configure credentials."""
        mock_view.return_value.run.side_effect = InvalidCredentialsError(user="unknown", endpoint="unknown")

        result = runner.invoke(app, ["page", "view", "1"])

        assert "CONFLUENCE_API_TOKEN" in result.output


class TestListingCommands:
    """Test cases for search, list, children and spaces."""

    @patch('src.cli.main.SearchCommand')
    def test_search_builds_criteria(self, mock_search, cli_env):
        """Search flags become SearchCriteria with config defaults."""
        result = runner.invoke(app, [
            "page", "search", "deploy", "--title", "Guide", "--modified", "week", "--reverse",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        criteria = mock_search.return_value.run.call_args.args[0]
        assert criteria.text == "deploy"
        assert criteria.space == "DOC"
        assert criteria.title == "Guide"
        assert criteria.modified == "week"
        assert criteria.reverse is True
        assert criteria.content_type == "page"
        assert mock_search.return_value.run.call_args.kwargs == {"limit": 15}

    @patch('src.cli.main.SearchCommand')
    def test_search_limit_option(self, mock_search, cli_env):
        """--limit overrides the configured default."""
        runner.invoke(app, ["page", "search", "--cql", "type=page", "--limit", "3"])

        call = mock_search.return_value.run.call_args
        assert call.args[0].cql == "type=page"
        assert call.kwargs == {"limit": 3}

    @patch('src.cli.main.ChildrenCommand')
    def test_children(self, mock_children, cli_env):
        """children forwards the reference and the children limit."""
        result = runner.invoke(app, ["page", "children", "10"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_children.return_value.run.assert_called_once_with("10", limit=40, space_key="DOC")

    @patch('src.cli.main.SpacesCommand')
    def test_spaces(self, mock_spaces, cli_env):
        """spaces forwards the limit."""
        result = runner.invoke(app, ["page", "spaces", "--limit", "7"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_spaces.return_value.run.assert_called_once_with(limit=7)

    @patch('src.cli.main.ListCommand')
    def test_list_defaults(self, mock_list, cli_env):
        """list falls back to the default space and configured limit."""
        result = runner.invoke(app, ["page", "list"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_list.return_value.run.assert_called_once_with("DOC", limit=15, content_type="page")

    @patch('src.cli.main.ListCommand')
    def test_list_options(self, mock_list, cli_env):
        """list takes a space argument, --limit and --type."""
        runner.invoke(app, ["page", "list", "NEWS", "--limit", "5", "--type", "blogpost"])

        mock_list.return_value.run.assert_called_once_with("NEWS", limit=5, content_type="blogpost")


class TestWriteCommands:
    """Test cases for create, edit and delete."""

    @patch('src.cli.main.CreateCommand')
    def test_create(self, mock_create, cli_env):
        """create forwards its flags with the default space."""
        result = runner.invoke(app, [
            "page", "create", "-t", "Notes", "-c", "<p>x</p>", "-p", "77",
        ])

        assert result.exit_code == ExitCode.SUCCESS
        assert mock_create.call_args.kwargs == {"base_url": "https://wiki.example.com"}
        mock_create.return_value.run.assert_called_once_with(
            "DOC", "Notes", content="<p>x</p>", content_file=None, parent="77"
        )

    @patch('src.cli.main.CreateCommand')
    def test_create_missing_title_exits_1(self, mock_create, cli_env):
        """Argument errors from create exit with the general error code."""
        mock_create.return_value.run.side_effect = InvalidArgumentError(
            "--title is required and cannot be empty"
        )

        result = runner.invoke(app, ["page", "create", "-c", "<p/>"])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert "--title is required" in result.output

    @patch('src.cli.main.EditCommand')
    def test_edit(self, mock_edit, cli_env):
        """edit forwards the page ID and content file."""
        result = runner.invoke(app, ["page", "edit", "42", "-f", "body.xhtml"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_edit.return_value.run.assert_called_once_with(
            "42", title=None, content=None, content_file="body.xhtml"
        )

    @pytest.mark.parametrize("name", ["delete", "rm", "del", "remove"])
    @patch('src.cli.main.DeleteCommand')
    def test_delete_and_aliases(self, mock_delete, name, cli_env):
        """delete and its aliases forward --yes and --cascade."""
        result = runner.invoke(app, ["page", name, "10", "--yes", "--cascade"])

        assert result.exit_code == ExitCode.SUCCESS
        mock_delete.return_value.run.assert_called_once_with(
            "10", space_key="DOC", yes=True, cascade=True
        )

"""Command-line interface for atlas-cli.

This package provides the `atl` CLI tool. Its `page` command group views,
searches, lists, creates, edits and deletes Confluence pages, and can export
a page to Markdown with a table of contents and locally downloaded images.
"""

from .view_command import ViewCommand
from .search_command import SearchCommand, SearchCriteria
from .listing_commands import ChildrenCommand, ListCommand, SpacesCommand
from .edit_commands import CreateCommand, DeleteCommand, EditCommand
from .models import AppConfig, ExitCode
from .errors import CLIError, ConfigError, InvalidArgumentError

__all__ = [
    'ViewCommand',
    'SearchCommand',
    'SearchCriteria',
    'ListCommand',
    'ChildrenCommand',
    'SpacesCommand',
    'CreateCommand',
    'EditCommand',
    'DeleteCommand',
    'AppConfig',
    'ExitCode',
    'CLIError',
    'ConfigError',
    'InvalidArgumentError',
]

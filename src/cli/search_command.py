"""SearchCommand: find pages by text, filters, or raw CQL."""

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.errors import ConfluenceError

from .errors import InvalidArgumentError
from .models import DEFAULT_LIMIT, TITLE_TRUNCATE_NORMAL, truncate
from .output import OutputHandler

logger = logging.getLogger(__name__)

# Relative date keywords accepted by --modified / --created
DATE_KEYWORDS = {
    "today": "startOfDay()",
    "yesterday": "startOfDay(-1d)",
    "week": "startOfWeek()",
    "month": "startOfMonth()",
    "year": "startOfYear()",
}


def _quote(value: str) -> str:
    # CQL string literals use the same escaping as JSON strings
    return json.dumps(value, ensure_ascii=False)


def parse_date_filter(value: str) -> str:
    """Translate a date filter into a CQL expression.

    Keywords map to CQL date functions; anything that looks like a date
    ("2024-01-01", "2024/01/01") is quoted as-is. Other values yield "".
    """
    keyword = DATE_KEYWORDS.get(value.lower())
    if keyword:
        return keyword
    if "-" in value or "/" in value:
        return _quote(value)
    return ""


@dataclass
class SearchCriteria:
    """Filters for a page search; a raw CQL query overrides all others."""
    text: Optional[str] = None
    space: Optional[str] = None
    content_type: Optional[str] = "page"
    title: Optional[str] = None
    creator: Optional[str] = None
    contributor: Optional[str] = None
    modified: Optional[str] = None
    created: Optional[str] = None
    cql: Optional[str] = None
    order_by: Optional[str] = "lastmodified"
    reverse: bool = False

    def to_cql(self) -> str:
        """Build the CQL query.

        Raises:
            InvalidArgumentError: If no criteria were given
        """
        if self.cql:
            return self.cql

        conditions: List[str] = []
        if self.content_type:
            conditions.append(f"type={self.content_type}")
        if self.space:
            conditions.append(f"space={_quote(self.space)}")
        if self.text:
            conditions.append(f"text~{_quote(self.text)}")
        if self.title:
            conditions.append(f"title~{_quote(self.title)}")
        if self.creator:
            conditions.append(f"creator={_quote(self.creator)}")
        if self.contributor:
            conditions.append(f"contributor={_quote(self.contributor)}")
        if self.modified:
            expression = parse_date_filter(self.modified)
            if expression:
                conditions.append(f"lastmodified>={expression}")
        if self.created:
            expression = parse_date_filter(self.created)
            if expression:
                conditions.append(f"created>={expression}")

        if not conditions:
            raise InvalidArgumentError(
                "no search criteria provided (use text argument or filters)"
            )

        cql = " AND ".join(conditions)
        if self.order_by:
            direction = "asc" if self.reverse else "desc"
            cql = f"{cql} ORDER BY {self.order_by} {direction}"
        return cql


class SearchCommand:
    """Handles the ``page search`` command."""

    def __init__(self, api: APIWrapper, output: OutputHandler):
        self.api = api
        self.output = output

    def run(self, criteria: SearchCriteria, limit: int = DEFAULT_LIMIT) -> None:
        cql = criteria.to_cql()
        logger.debug(f"CQL: {cql}")

        try:
            with self.output.spinner("Searching..."):
                pages = self.api.search_content(cql, limit=limit)
        except ConfluenceError:
            self.output.warning(f"search failed for CQL: {cql}")
            raise

        if not pages:
            self.output.print("No pages found")
            return

        self.output.print_table(
            ["ID", "SPACE", "TITLE", "VERSION"],
            [
                [page.page_id, page.space_key, truncate(page.title, TITLE_TRUNCATE_NORMAL), f"v{page.version}"]
                for page in pages
            ],
        )

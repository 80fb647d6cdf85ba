"""Confluence page data model."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class ConfluencePage:
    """Confluence page as returned by the content REST API.

    Attributes:
        page_id: Unique identifier for the page
        title: Page title
        status: Content status (e.g., "current")
        space_key: Space key where the page resides (e.g., "TEAM")
        version: Current version number
        storage: Page body in storage format (XHTML), empty if not expanded
        view: Page body in view format (rendered HTML), empty if not expanded
        webui_link: Relative web UI link (e.g., "/display/TEAM/Page")
    """
    page_id: str
    title: str
    status: str = ""
    space_key: str = ""
    version: int = 0
    storage: str = ""
    view: str = ""
    webui_link: str = ""

    @property
    def structural_markup(self) -> str:
        """Markup used for metadata extraction: storage format, else view."""
        return self.storage or self.view

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "ConfluencePage":
        body = data.get('body') or {}
        return cls(
            page_id=str(data.get('id', '')),
            title=data.get('title', ''),
            status=data.get('status', ''),
            space_key=(data.get('space') or {}).get('key', ''),
            version=(data.get('version') or {}).get('number', 0),
            storage=(body.get('storage') or {}).get('value', ''),
            view=(body.get('view') or {}).get('value', ''),
            webui_link=(data.get('_links') or {}).get('webui', ''),
        )

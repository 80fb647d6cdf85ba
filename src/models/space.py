"""Confluence space data model."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class Space:
    """Confluence space summary used by the space listing."""
    key: str
    name: str
    type: str = ""
    status: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Space":
        return cls(
            key=data.get('key', ''),
            name=data.get('name', ''),
            type=data.get('type', ''),
            status=data.get('status', ''),
        )

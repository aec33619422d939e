"""Data models and canned documents used by the document store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class GroupSummary(BaseModel):
    """A group as reported to clients; files are listed lazily on load."""

    name: str = Field(description="Group directory name.")
    files: list[str] = Field(default_factory=list, description="Always empty; populated by clients on demand.")


class LoadStatus(str, Enum):
    LOADED = "loaded"
    DEFAULT = "default"
    FALLBACK = "fallback"
    DEFAULT_UNAVAILABLE = "default_unavailable"


@dataclass
class LoadResult:
    """Outcome of a load: always a renderable tree, plus how it was obtained."""

    document: Any
    status: LoadStatus


def error_tree(root_name: str, message: str) -> dict[str, Any]:
    """Build a placeholder document shaped like a real tree."""
    return {"name": root_name, "children": [{"name": message}]}


def missing_default_document() -> dict[str, Any]:
    return error_tree("Error", "No file or group specified, and default file failed to load.")


def load_error_document(group: Any, file: Any) -> dict[str, Any]:
    return error_tree("Load_Error", f"File {file} in group {group} not found on server.")


SAMPLE_TREE: dict[str, Any] = {
    "name": "Sophisticated_Root",
    "children": [
        {
            "name": "Analytics Group",
            "children": [
                {"name": "Cluster_Analysis", "size": 5200},
                {"name": "Data_Mining", "size": 3812},
                {
                    "name": "Graph_Theory",
                    "size": 7100,
                    "children": [
                        {"name": "LinkDistance", "size": 5731},
                        {"name": "ForceDirected", "size": 9000},
                    ],
                },
            ],
        },
        {
            "name": "Visualization Group",
            "children": [
                {"name": "TreeMap_Layout", "size": 4500},
                {"name": "PackedCircle_View", "size": 6800},
            ],
        },
    ],
}

"""Resolution of group/file tokens to paths under the storage root."""

from __future__ import annotations

from pathlib import Path

from .errors import InvalidName

PARENT_MARKER = ".."
SEPARATORS = ("/", "\\")


def is_valid_name(name: object) -> bool:
    """Return True if ``name`` is safe to use as a single path component."""
    if not isinstance(name, str) or not name or name == PARENT_MARKER:
        return False
    return not any(sep in name for sep in SEPARATORS)


class PathResolver:
    """Map group/file tokens to document paths confined to ``root``.

    Tokens are checked before any joining happens and nothing here touches
    the file system, so an invalid token never results in I/O.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root).absolute()

    def resolve_group(self, group: str) -> Path:
        if not is_valid_name(group):
            raise InvalidName("group", group)
        path = self.root.joinpath(group)
        # pathlib collapses "." components, so "." would name the root itself
        if path.parent != self.root or path.name != group:
            raise InvalidName("group", group)
        return path

    def resolve(self, group: str, file: str) -> Path:
        group_dir = self.resolve_group(group)
        if not is_valid_name(file):
            raise InvalidName("file", file)
        path = group_dir.joinpath(file)
        if path.parent != group_dir or path.name != file:
            raise InvalidName("file", file)
        return path

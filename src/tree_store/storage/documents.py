"""Document persistence on top of the path resolver."""

from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml

from .errors import InvalidName, MissingField, StorageReadFailed, StorageWriteFailed, UninitializedStore
from .models import (
    SAMPLE_TREE,
    GroupSummary,
    LoadResult,
    LoadStatus,
    load_error_document,
    missing_default_document,
)
from .paths import PathResolver

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

SEED_INDENT = 2
SAVE_INDENT = 4


def load_seed_document(path: Path) -> Any:
    """Read a seed tree from a YAML (or JSON) file."""
    with path.open("r", encoding="utf-8") as fh:
        document = yaml.safe_load(fh)
    if document is None:
        raise ValueError(f"Seed file {path} is empty")
    return document


def is_missing_content(content: Any) -> bool:
    """Null, false, zero and empty strings count as absent; empty trees do not."""
    if content is None:
        return True
    return isinstance(content, (bool, int, float, str)) and not content


class DocumentStore:
    """Read, write and seed tree documents stored as ``<root>/<group>/<file>``."""

    def __init__(
        self,
        root: Path,
        *,
        default_group: str = "Default_Group",
        default_file: str = "Default_File.json",
        secondary_group: str = "Second_Group",
        seed_document: Any = None,
    ) -> None:
        self.resolver = PathResolver(root)
        self.default_group = default_group
        self.default_file = default_file
        self.secondary_group = secondary_group
        self.seed_document = SAMPLE_TREE if seed_document is None else seed_document

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DocumentStore":
        seed_document = None
        if settings.seed_file is not None:
            seed_document = load_seed_document(settings.seed_file)
        return cls(
            settings.storage_root,
            default_group=settings.default_group,
            default_file=settings.default_file,
            secondary_group=settings.secondary_group,
            seed_document=seed_document,
        )

    @property
    def root(self) -> Path:
        return self.resolver.root

    # ------------------------------------------------------------------ seed
    def ensure_seeded(self) -> None:
        """Create the storage root and the demo groups; never overwrites."""
        default_path = self.resolver.resolve(self.default_group, self.default_file)
        self.root.mkdir(parents=True, exist_ok=True)
        default_path.parent.mkdir(parents=True, exist_ok=True)

        if default_path.exists():
            logger.info("File %s already exists. Skipping sample data creation.", default_path)
        else:
            logger.info("Creating sample file at %s", default_path)
            default_path.write_text(
                json.dumps(self.seed_document, indent=SEED_INDENT, ensure_ascii=False),
                encoding="utf-8",
            )

        self.resolver.resolve_group(self.secondary_group).mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------- API
    def list_groups(self) -> list[GroupSummary]:
        try:
            names = self._scan_groups()
        except UninitializedStore:
            logger.warning("Storage root %s is missing; seeding it.", self.root)
            try:
                self.ensure_seeded()
            except (OSError, TypeError, ValueError) as exc:
                raise StorageReadFailed(f"Could not initialise {self.root}: {exc}") from exc
            names = [self.default_group, self.secondary_group]
        return [GroupSummary(name=name) for name in names]

    def load_document(self, group: Optional[str], file: Optional[str]) -> LoadResult:
        if not group or not file:
            try:
                document = self._read(self.default_group, self.default_file)
            except (InvalidName, StorageReadFailed) as exc:
                logger.warning("Default document unavailable: %s", exc)
                return LoadResult(missing_default_document(), LoadStatus.DEFAULT_UNAVAILABLE)
            return LoadResult(document, LoadStatus.DEFAULT)

        try:
            document = self._read(group, file)
        except (InvalidName, StorageReadFailed) as exc:
            logger.warning("Failed to load %s/%s, sending placeholder: %s", group, file, exc)
            return LoadResult(load_error_document(group, file), LoadStatus.FALLBACK)
        return LoadResult(document, LoadStatus.LOADED)

    def save_document(self, group: Optional[str], file: Optional[str], content: Any) -> Path:
        missing = [name for name, value in (("group", group), ("file", file)) if not value]
        if is_missing_content(content):
            missing.append("content")
        if missing:
            raise MissingField(missing)

        try:
            target = self.resolver.resolve(group, file)
        except InvalidName as exc:
            raise StorageWriteFailed(str(exc)) from exc

        try:
            payload = json.dumps(content, indent=SAVE_INDENT, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StorageWriteFailed(f"Content for {group}/{file} is not serialisable: {exc}") from exc

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            self._replace(target, payload)
        except (OSError, ValueError) as exc:
            logger.exception("Failed to save %s", target)
            raise StorageWriteFailed(f"Could not write {group}/{file}: {exc}") from exc

        logger.info("Data successfully saved to %s", target)
        return target

    # ----------------------------------------------------------------- utils
    def _scan_groups(self) -> list[str]:
        try:
            entries = sorted(self.root.iterdir(), key=lambda entry: entry.name)
            return [entry.name for entry in entries if entry.is_dir()]
        except FileNotFoundError as exc:
            raise UninitializedStore(str(self.root)) from exc
        except OSError as exc:
            raise StorageReadFailed(f"Could not list groups in {self.root}: {exc}") from exc

    def _read(self, group: str, file: str) -> Any:
        path = self.resolver.resolve(group, file)
        try:
            with path.open("r", encoding="utf-8") as fh:
                document = json.load(fh)
        except (OSError, ValueError) as exc:
            raise StorageReadFailed(f"Could not read {path}: {exc}") from exc
        logger.info("Data successfully loaded from %s", path)
        return document

    @staticmethod
    def _replace(target: Path, payload: str) -> None:
        # mode follows the umask, same as the seed file
        tmp = target.with_name(f".{target.name}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp.open("x", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp, target)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

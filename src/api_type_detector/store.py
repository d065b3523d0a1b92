"""Declaration storage and persistence using YAML files."""

import logging
import os
import re
import tempfile
from pathlib import Path

import yaml
from anyio import to_thread
from pydantic import ValidationError

from .config import get_config_dir
from .exceptions import StoreError
from .inference.models import GeneratedDeclaration
from .inference.signature import fnv1a_hash

logger = logging.getLogger(__name__)


def _slugify_route_id(route_id: str) -> str:
    """Convert an arbitrary route id into a stable filesystem-safe slug."""
    slug = route_id.strip().lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    slug = re.sub(r"-{2,}", "-", slug).strip("-")
    return slug or "route"


def _atomic_write_text(path: Path, content: str) -> None:
    """Atomically write text to `path` using temp + fsync + os.replace."""
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.tmp.", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        try:
            tmp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def get_default_store_dir() -> Path:
    """Get the default declarations directory."""
    return get_config_dir() / "declarations"


class DeclarationStore:
    """Keeps the latest generated declaration for each route in a YAML file."""

    def __init__(self, directory: str | Path | None = None):
        """Initialize declaration store.

        Args:
            directory: Path to declarations directory. If None, uses default.
        """
        if directory:
            self.directory = Path(directory).expanduser()
        else:
            self.directory = get_default_store_dir()

        self.directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Declarations directory: {self.directory}")

    def _path(self, route_id: str) -> Path:
        # The hash suffix keeps ids that slugify alike ("a/b", "a-b") apart
        return self.directory / f"{_slugify_route_id(route_id)}-{fnv1a_hash(route_id)}.yaml"

    def _read(self, path: Path) -> GeneratedDeclaration:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise StoreError(f"Cannot read declaration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise StoreError(f"Declaration file {path} does not contain a mapping")
        try:
            return GeneratedDeclaration.from_dict(data)
        except ValidationError as e:
            raise StoreError(f"Invalid declaration in {path}: {e}") from e

    def load(self, route_id: str) -> GeneratedDeclaration | None:
        """Load the declaration for a route.

        Returns:
            The declaration, or None if the route has none or the file is invalid
        """
        path = self._path(route_id)
        if not path.exists():
            return None

        try:
            declaration = self._read(path)
        except StoreError as e:
            logger.error(str(e))
            return None

        if declaration.route_id != route_id:
            logger.warning(f"Declaration file {path} belongs to route {declaration.route_id!r}, not {route_id!r}")
            return None
        return declaration

    async def load_async(self, route_id: str) -> GeneratedDeclaration | None:
        """Async wrapper for load() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.load, route_id)

    def signature_for(self, route_id: str) -> str | None:
        """Signature of the stored declaration, if any."""
        declaration = self.load(route_id)
        return declaration.signature if declaration else None

    def save(self, declaration: GeneratedDeclaration) -> Path:
        """Replace the stored declaration for its route.

        Returns:
            Path to saved file
        """
        path = self._path(declaration.route_id)
        content = yaml.safe_dump(declaration.to_dict(), default_flow_style=False, sort_keys=False, allow_unicode=True)
        if not content.endswith("\n"):
            content += "\n"
        _atomic_write_text(path, content)

        logger.info(f"Saved declaration {declaration.type_name} for route {declaration.route_id} to {path}")
        return path

    async def save_async(self, declaration: GeneratedDeclaration) -> Path:
        """Async wrapper for save() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.save, declaration)

    def delete(self, route_id: str) -> bool:
        """Delete a route's declaration.

        Returns:
            True if deleted, False if not found
        """
        path = self._path(route_id)
        if not path.exists():
            return False

        path.unlink()
        logger.info(f"Deleted declaration for route: {route_id}")
        return True

    async def delete_async(self, route_id: str) -> bool:
        """Async wrapper for delete() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.delete, route_id)

    def list_all(self) -> list[GeneratedDeclaration]:
        """List all stored declarations, sorted by route id."""
        declarations = []

        for path in self.directory.glob("*.yaml"):
            try:
                declarations.append(self._read(path))
            except StoreError as e:
                logger.warning(f"Skipping declaration file: {e}")
                continue

        return sorted(declarations, key=lambda d: d.route_id)

    async def list_all_async(self) -> list[GeneratedDeclaration]:
        """Async wrapper for list_all() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.list_all)

    def exists(self, route_id: str) -> bool:
        return self._path(route_id).exists()

    async def exists_async(self, route_id: str) -> bool:
        """Async wrapper for exists() to avoid blocking the event loop."""
        return await to_thread.run_sync(self.exists, route_id)

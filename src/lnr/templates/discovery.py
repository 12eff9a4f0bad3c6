"""Template file discovery."""

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator

from lnr.core.exceptions import NotFoundError
from lnr.core.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_SUFFIX = ".toml"

# Build manifests share the .toml suffix but are never issue templates
RESERVED_MANIFESTS = frozenset({"Cargo.toml", "pyproject.toml"})


def is_template_file(path: Path) -> bool:
    """Check whether a discovered file looks like an issue template."""
    return path.suffix == TEMPLATE_SUFFIX and path.name not in RESERVED_MANIFESTS


def walk_files(root: Path) -> Iterator[Path]:
    """Yield every regular file below ``root``."""
    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            logger.warning("Skipping unreadable directory", path=directory, error=e.strerror)
            continue

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                stack.append(Path(entry.path))
            elif entry.is_file():
                yield Path(entry.path)


class TemplateDiscovery:
    """Restartable, lexicographically ordered sequence of template paths.

    Nothing touches the filesystem until the sequence is iterated, and every
    iteration walks the tree again.
    """

    def __init__(
        self,
        path: str | Path,
        predicate: Callable[[Path], bool] = is_template_file,
    ):
        self.path = Path(path)
        self._predicate = predicate

    def candidates(self) -> Iterable[Path]:
        """Every file under the root, before filtering."""
        if self.path.is_dir():
            return walk_files(self.path)
        return [self.path]

    def __iter__(self) -> Iterator[Path]:
        if not self.path.exists():
            raise NotFoundError(f"Path not found: {self.path}", path=self.path)

        if not self.path.is_dir():
            # An explicitly named file is used as-is
            yield self.path
            return

        yield from sorted(filter(self._predicate, self.candidates()), key=str)

    def __repr__(self) -> str:
        return f"TemplateDiscovery({str(self.path)!r})"


def discover(path: str | Path) -> TemplateDiscovery:
    """Discover template files at ``path``.

    Raises:
        NotFoundError: If ``path`` does not exist
    """
    discovery = TemplateDiscovery(path)
    if not discovery.path.exists():
        raise NotFoundError(f"Path not found: {discovery.path}", path=discovery.path)
    return discovery

"""Temporary classpath files handed to forked Retrolambda processes."""

import atexit
import os
import tempfile
from collections.abc import Generator, Iterable
from contextlib import contextmanager
from pathlib import Path

from retrolambda_runner.core.exceptions.errors import ClasspathFileError
from retrolambda_runner.core.logger.logger import get_logger

logger = get_logger(__name__)

# Files still on disk; removed at interpreter exit if a run never cleaned up.
_pending: set[Path] = set()


def _remove_pending() -> None:
    for path in list(_pending):
        delete_classpath_file(path)


atexit.register(_remove_pending)


def write_classpath_file(entries: Iterable[str], directory: Path | None = None) -> Path:
    """Write one classpath entry per line to a new temporary file.

    Raises:
        ClasspathFileError: If the file cannot be created or written. A
            partially written file is removed first.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="retrolambda", suffix="classpath", dir=directory)
    except OSError as e:
        raise ClasspathFileError(f"Failed to create classpath file: {e}") from e

    path = Path(name)
    _pending.add(path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write("\n".join(entries))
    except (OSError, UnicodeError) as e:
        delete_classpath_file(path)
        raise ClasspathFileError(
            f"Failed to write classpath file: {e}",
            path=str(path),
        ) from e
    return path


def delete_classpath_file(path: Path) -> bool:
    """Delete a classpath file, logging a warning instead of failing."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Unable to delete {path}: {e}")
        return False
    _pending.discard(path)
    return True


@contextmanager
def classpath_file(
    entries: Iterable[str],
    directory: Path | None = None,
) -> Generator[Path, None, None]:
    """Provide a classpath file that is removed when the block exits.

    Args:
        entries: Classpath entries, written one per line.
        directory: Where to create the file (default: system temp dir).

    Yields:
        Path to the classpath file.
    """
    path = write_classpath_file(entries, directory)
    try:
        yield path
    finally:
        delete_classpath_file(path)

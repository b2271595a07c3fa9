"""All-or-nothing output files."""

import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path

from ..errors import DestinationUnwritable

logger = logging.getLogger(__name__)


@contextmanager
def atomic_destination(path):
    """
    Open a temporary file next to ``path`` and move it into place on success.

    The temporary file is closed on every exit path and removed if the body
    raises, so a failed export never leaves a file at ``path``. OSErrors
    raised while writing surface as DestinationUnwritable.

    The finished file keeps the mode of the file it replaces. A new file
    gets 0666 masked by the process umask, as open() would give it.

    Yields:
        File object opened in binary write mode

    Raises:
        DestinationUnwritable: If the file cannot be created, written or renamed
    """
    path = Path(path)
    directory = path.parent

    try:
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=f'.{path.name}.', suffix='.tmp')
    except OSError as e:
        raise DestinationUnwritable(f"Cannot create output file in '{directory}': {e}") from e

    try:
        with os.fdopen(fd, 'wb') as f:
            yield f
        os.chmod(tmp_path, _target_mode(path))
        os.replace(tmp_path, path)
    except DestinationUnwritable:
        _discard(tmp_path)
        raise
    except OSError as e:
        _discard(tmp_path)
        raise DestinationUnwritable(f"Cannot write '{path}': {e}") from e
    except BaseException:
        _discard(tmp_path)
        raise

    logger.debug("Wrote %s", path)


def _discard(tmp_path: str) -> None:
    try:
        os.remove(tmp_path)
    except FileNotFoundError:
        pass


def _target_mode(path: Path) -> int:
    """Permission bits for the finished file."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        pass
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask

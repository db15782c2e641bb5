"""Helper functions used throughout nobuild."""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def make_sure_path_exists(path: "os.PathLike[str]") -> None:
    """Ensure that a directory exists.

    :param path: A directory tree path for creation.
    """
    logger.debug('Making sure path exists (creates tree if not exist): %s', path)
    Path(path).mkdir(parents=True, exist_ok=True)


def remove_file(path: "os.PathLike[str]") -> bool:
    """Remove a file if it exists.

    :param path: Path of the file to remove.
    :return: True if a file was removed.
    """
    if not os.path.exists(path):
        return False
    logger.debug('Removing %s', path)
    os.unlink(path)
    return True

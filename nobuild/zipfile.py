"""Utility functions for extracting templates from repo archives in zip format."""
import logging
import os
import shutil
import zlib
from typing import Optional
from zipfile import BadZipFile, ZipFile, ZipInfo

from nobuild.exceptions import InvalidZipRepository, TemplateExtractionFailed
from nobuild.utils import make_sure_path_exists

logger = logging.getLogger(__name__)

# Template selector meaning "the whole archive, wrapper folder included"
EXTRACT_ALL = '.'

# Used when an entry carries no Unix permission bits
DEFAULT_FILE_MODE = 0o644


def template_path(name: str, template: str) -> Optional[str]:
    """Return the relative output path of archive entry ``name``.

    Archives served by the hosting API wrap everything in a single
    ``<repo>-<sha>/`` folder, so an entry belongs to ``template`` when its
    second path segment is the template name. The wrapper segment is dropped
    from the output path.

    :param name: Entry name as stored in the archive.
    :param template: Template selector, or ``EXTRACT_ALL``.
    :returns: Path relative to the output directory, or None if the entry is
        not part of the template.
    """
    if template == EXTRACT_ALL:
        return name
    segments = name.split('/')
    if len(segments) > 1 and segments[1] == template:
        return os.path.join(*segments[1:])
    return None


def entry_mode(info: ZipInfo) -> int:
    """Return the permission bits recorded for a zip entry."""
    return (info.external_attr >> 16) & 0o777 or DEFAULT_FILE_MODE


def _safe_target(output_dir: str, relative_path: str, name: str) -> str:
    root = os.path.abspath(output_dir)
    target = os.path.abspath(os.path.join(root, relative_path))
    if os.path.commonpath([root, target]) != root:
        raise InvalidZipRepository(f'Archive entry {name} points outside of {root}.')
    return target


def _extract_file(zip_file: ZipFile, info: ZipInfo, target: str) -> None:
    make_sure_path_exists(os.path.dirname(target))
    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, 'O_BINARY', 0)
    with zip_file.open(info) as source:
        with os.fdopen(os.open(target, flags, entry_mode(info)), 'wb') as out:
            shutil.copyfileobj(source, out)


def extract_template(
    zip_path: 'os.PathLike[str]', template: str, output_dir: 'os.PathLike[str]' = '.'
) -> int:
    """Extract ``template`` from the archive at ``zip_path`` into ``output_dir``.

    Existing files are overwritten. A template that matches no entry is not
    an error: nothing is written and 0 is returned.

    :param zip_path: Path of a previously downloaded repository archive.
    :param template: Name of the template folder, or ``EXTRACT_ALL``.
    :param output_dir: Directory the template is written into.
    :returns: The number of files written.
    """
    written = 0
    try:
        with ZipFile(zip_path) as zip_file:
            for info in zip_file.infolist():
                relative_path = template_path(info.filename, template)
                if relative_path is None:
                    continue
                target = _safe_target(output_dir, relative_path, info.filename)
                if info.is_dir():
                    make_sure_path_exists(target)
                    continue
                logger.debug('Extracting %s to %s', info.filename, target)
                _extract_file(zip_file, info, target)
                written += 1
    except BadZipFile as e:
        raise InvalidZipRepository(f'The file at {zip_path} is not a valid zip file: {e}') from e
    except (zlib.error, RuntimeError, NotImplementedError, EOFError) as e:
        raise InvalidZipRepository(f'Unable to read {zip_path}: {e}') from e
    except OSError as e:
        raise TemplateExtractionFailed(str(e)) from e

    if not written:
        logger.debug('No files in %s matched template %s', zip_path, template)
    else:
        logger.debug('Extracted %d files of template %s', written, template)
    return written

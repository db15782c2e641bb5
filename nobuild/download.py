"""Fetch a repository archive from the hosting API."""
import logging
import os

import requests
from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)

from nobuild.exceptions import RepositoryDownloadFailed

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _progress():
    console = Console(stderr=True)
    return Progress(
        TextColumn('[progress.description]{task.description}'),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
        disable=not console.is_terminal,
    )


def _content_length(response):
    value = response.headers.get('Content-Length')
    try:
        return int(value) or None
    except (TypeError, ValueError):
        if value is not None:
            logger.debug('Ignoring malformed Content-Length %r', value)
        return None


def download_file(url: str, path: 'os.PathLike[str]') -> 'os.PathLike[str]':
    """Download ``url`` and write the response body to ``path``.

    An existing file at ``path`` is overwritten. A file left behind by a
    failed transfer is not removed; that is up to the caller.

    :param url: The URL to fetch.
    :param path: Destination of the downloaded bytes.
    :returns: ``path``
    """
    logger.debug('Downloading %s to %s', url, path)
    try:
        response = requests.get(url, stream=True)
        try:
            response.raise_for_status()
            total = _content_length(response)
            with open(path, 'wb') as out, _progress() as progress:
                task = progress.add_task('Downloading', total=total)
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    out.write(chunk)
                    progress.update(task, advance=len(chunk))
        finally:
            response.close()
    except requests.exceptions.RequestException as e:
        raise RepositoryDownloadFailed(str(e)) from e
    except OSError as e:
        raise RepositoryDownloadFailed(f'Unable to write {path}: {e}') from e

    logger.debug('Saved %s to %s', url, path)
    return path

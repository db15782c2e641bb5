"""
Main entry point for the `nobuild` command.

The code in this module is also a good example of how to use nobuild as a
library rather than a script.
"""
import logging
import os

from nobuild.config import get_user_config
from nobuild.download import download_file
from nobuild.repository import zipball_url
from nobuild.utils import remove_file
from nobuild.zipfile import extract_template

logger = logging.getLogger(__name__)


def download_template(template, repo=None, config_file=None, default_config=False):
    """
    Download a repository archive and extract one template from it.

    The archive is stored in the current working directory while the
    template is extracted, and removed afterwards whether or not the
    download or the extraction succeeded.

    :param template: Name of the template folder, or ``.`` for the whole
        archive.
    :param repo: Repository locator ``owner/name``. Defaults to the
        configured ``default_repo``.
    :param config_file: User configuration file path.
    :param default_config: Use default values rather than a config file.
    :returns: The number of files extracted.
    """
    config_dict = get_user_config(
        config_file=config_file,
        default_config=default_config,
    )
    repo = repo or config_dict['default_repo']
    url = zipball_url(repo, config_dict['api_url'])
    archive = os.path.abspath(config_dict['archive_name'])

    logger.debug('Fetching template %s from %s', template, repo)
    try:
        download_file(url, archive)
        return extract_template(archive, template, output_dir=os.getcwd())
    finally:
        try:
            remove_file(archive)
        except OSError as e:
            logger.warning('Unable to remove %s: %s', archive, e)

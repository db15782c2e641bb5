"""Main `nobuild` CLI."""
import os
import sys

import click

from nobuild import __version__
from nobuild.exceptions import (
    ConfigDoesNotExistException,
    InvalidConfiguration,
    RepositoryDownloadFailed,
    TemplateExtractionFailed,
)
from nobuild.log import configure_logger
from nobuild.main import download_template

USAGE = 'Usage: nobuild <template> or nobuild <repo> <template>'


def version_msg():
    """Return the nobuild version, location and Python powering it."""
    python_version = sys.version
    location = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return f"nobuild {__version__} from {location} (Python {python_version})"


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.version_option(__version__, '-V', '--version', message=version_msg())
@click.argument('args', nargs=-1, metavar='[REPO] TEMPLATE')
@click.option(
    '-v', '--verbose', is_flag=True, help='Print debug information', default=False
)
@click.option(
    '--config-file', type=click.Path(), default=None, help='User configuration file'
)
@click.option(
    '--default-config',
    is_flag=True,
    help='Do not load a config file. Use the defaults instead',
)
@click.option(
    '--debug-file',
    type=click.Path(),
    default=None,
    help='File to be used as a stream for DEBUG logging',
)
def main(args, verbose, config_file, default_config, debug_file):
    """Extract a template folder from a repository archive.

    TEMPLATE names a top-level folder of the repository, or is "." to
    extract the whole archive. REPO is an "owner/name" locator and defaults
    to the configured repository.
    """
    if not args:
        click.echo(USAGE)
        sys.exit(1)
    if len(args) == 1:
        repo, template = None, args[0]
    else:
        repo, template = args[0], args[1]

    configure_logger(
        stream_level='DEBUG' if verbose else 'INFO',
        debug_file=debug_file,
    )

    try:
        download_template(
            template,
            repo=repo,
            config_file=config_file,
            default_config=default_config,
        )
    except RepositoryDownloadFailed as e:
        click.echo(f'Error downloading repository: {e}')
        sys.exit(1)
    except TemplateExtractionFailed as e:
        click.echo(f'Error extracting template: {e}')
        sys.exit(1)
    except (ConfigDoesNotExistException, InvalidConfiguration) as e:
        click.echo(f'Error: {e}')
        sys.exit(1)

    click.echo(f"Template '{template}' downloaded successfully.")


if __name__ == "__main__":
    main()

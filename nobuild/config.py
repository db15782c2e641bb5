"""Global configuration handling."""
import copy
import logging
import os

import yaml

from nobuild.exceptions import ConfigDoesNotExistException, InvalidConfiguration

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = os.path.expanduser('~/.nobuildrc')

DEFAULT_CONFIG = {
    'default_repo': 'debdut/no-build',
    'api_url': 'https://api.github.com',
    'archive_name': 'repo.zip',
}


def get_config(config_path):
    """Retrieve the config from the specified path, returning a config dict."""
    if not os.path.exists(config_path):
        raise ConfigDoesNotExistException(f'Config file {config_path} does not exist.')

    logger.debug('config_path is %s', config_path)
    with open(config_path, encoding='utf-8') as file_handle:
        try:
            yaml_dict = yaml.safe_load(file_handle) or {}
        except yaml.YAMLError as e:
            raise InvalidConfiguration(
                f'Unable to parse YAML file {config_path}.'
            ) from e
        if not isinstance(yaml_dict, dict):
            raise InvalidConfiguration(
                f'Top-level element of YAML file {config_path} should be an object.'
            )

    config_dict = copy.copy(DEFAULT_CONFIG)
    for key, value in yaml_dict.items():
        if key in DEFAULT_CONFIG:
            if not isinstance(value, str) or not value:
                raise InvalidConfiguration(
                    f'{key} in {config_path} should be a non-empty string, got {value!r}.'
                )
            config_dict[key] = value
        else:
            logger.debug('Ignoring unknown config key %s', key)
    return config_dict


def get_user_config(config_file=None, default_config=False):
    """Return the user config as a dict.

    If ``default_config`` is True, ignore ``config_file`` and return default
    values for the config parameters.

    If a path to a ``config_file`` is given, that is different from the default
    location, load the user config from that.

    Otherwise look up the config file path in the ``NOBUILD_CONFIG``
    environment variable. If set, load the config from this path. This will
    raise an error if the specified path is not valid.

    If the environment variable is not set, try the default config file path
    before falling back to the default config values.
    """
    if default_config:
        logger.debug('Force ignoring user config with default_config switch.')
        return copy.copy(DEFAULT_CONFIG)

    # Load the given config file
    if config_file and config_file != USER_CONFIG_PATH:
        logger.debug('Loading custom config from %s.', config_file)
        return get_config(config_file)

    try:
        # Does the user set up a config environment variable?
        env_config_file = os.environ['NOBUILD_CONFIG']
    except KeyError:
        # Load an optional user config if it exists
        # otherwise return the defaults
        if os.path.exists(USER_CONFIG_PATH):
            logger.debug('Loading config from %s.', USER_CONFIG_PATH)
            return get_config(USER_CONFIG_PATH)
        logger.debug('User config not found. Loading default config.')
        return copy.copy(DEFAULT_CONFIG)
    else:
        # There is a config environment variable. Try to load it.
        # Do not check for existence, so invalid file paths raise an error.
        logger.debug('User config not found or not specified. Loading %s.', env_config_file)
        return get_config(env_config_file)

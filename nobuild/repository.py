"""Functions for turning a source locator into a download URL."""

ZIPBALL_URL = '{api_url}/repos/{repo}/zipball'


def zipball_url(repo, api_url='https://api.github.com'):
    """Build the URL of the zip archive for ``repo``.

    :param repo: Repository locator of the form ``owner/name``.
    :param api_url: Base URL of the hosting API.
    """
    return ZIPBALL_URL.format(api_url=api_url.rstrip('/'), repo=repo)

"""All exceptions used in the nobuild code base are defined here."""


class NoBuildException(Exception):
    """
    Base exception class.

    All nobuild-specific exceptions should subclass this class.
    """


class ConfigDoesNotExistException(NoBuildException):
    """
    Exception for missing config file.

    Raised when get_config() is passed a path to a config file, but no file
    is found at that path.
    """


class InvalidConfiguration(NoBuildException):
    """
    Exception for invalid configuration file.

    Raised if the global configuration file is not valid YAML or is
    badly constructed.
    """


class RepositoryDownloadFailed(NoBuildException):
    """
    Exception for a failed repository download.

    Raised when the archive cannot be fetched from the hosting API or
    cannot be written to the local archive file.
    """


class TemplateExtractionFailed(NoBuildException):
    """
    Exception for a failed template extraction.

    Raised when a directory or file of the template cannot be written.
    """


class InvalidZipRepository(TemplateExtractionFailed):
    """
    Exception for bad zip repo.

    Raised when the downloaded archive is not a valid zip file, or holds
    entries that would be written outside the output directory.
    """

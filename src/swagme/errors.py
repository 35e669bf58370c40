"""Errors raised by the project/config layer.

Extractors never raise on source text; these cover the files around them.
"""


class SwagmeError(Exception):
    """Base class for errors shown to the user."""


class ConfigError(SwagmeError):
    """The swagme config file is missing or invalid."""


class ProjectError(SwagmeError):
    """The scanned project is missing something swagme needs."""

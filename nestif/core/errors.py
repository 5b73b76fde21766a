class NestifError(Exception):
    """Base class for errors raised while checking Go sources."""


class ParseError(NestifError):
    """A file could not be read or contains syntax errors."""


class GeneratedFileError(NestifError):
    """A file carries the generated-code marker and is not checked."""


class PackageNotFoundError(NestifError):
    """An import path could not be resolved to a directory."""


class ConfigError(NestifError):
    """Invalid configuration value or command-line option."""

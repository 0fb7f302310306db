class EmptyDocumentError(ValueError):
    """Raised when the document handed to the parser is None or empty."""

    pass


class BlobDecodeError(Exception):
    """Raised when an embedded byte blob cannot be mapped one byte per character."""

    pass


class UnterminatedBlobError(BlobDecodeError):
    """Raised when an embedded byte blob has no closing '>' before the record ends."""

    pass


class DocumentReadError(Exception):
    """Raised when there is an error reading a schedule file from disk."""

    pass


class ConfigError(ValueError):
    """Raised when a configuration file or value is invalid."""

    pass


# Mapping of custom exceptions to CLI exit codes
EXIT_CODES = {
    EmptyDocumentError: 2,
    DocumentReadError: 3,
    ConfigError: 4,
}

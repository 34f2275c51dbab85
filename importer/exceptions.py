class ParserError(Exception):
    """Base class for faults raised while turning an export into records."""


class ReadInputError(ParserError):
    """Raised when the XML input cannot be read, or is not well formed XML."""


class MalformedDocumentError(ParserError):
    """Raised when the sequence of XML events does not nest properly, for
    example an end tag with no open element or input that ends inside an
    element."""


class MissingIdentifierError(ParserError):
    """Raised when a business element closes without a scalar ``hjid``."""


class SerialiseError(ParserError):
    """Raised when a normalised element cannot be serialised to JSON."""

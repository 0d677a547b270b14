"""Custom exceptions for the ZLS data generator."""


class ZlsGenError(Exception):
    """Base exception for generator errors."""

    pass


class DocumentStructureError(ZlsGenError):
    """Langref markup does not follow the expected directive grammar.

    The document format has changed upstream and the extractor needs updating.
    """

    pass


class RenderError(ZlsGenError):
    """HTML fragment could not be converted to markdown."""

    pass


class UnsupportedTagError(RenderError):
    """HTML tag outside the supported set."""

    pass


class InvalidTagError(RenderError):
    """Tag is missing its closing angle bracket or has a malformed attribute."""

    pass


class MissingEndTagError(RenderError):
    """No matching closing tag was found."""

    pass


class MalformedSignatureError(ZlsGenError):
    """Signature has no parameter list."""

    pass


class DownloadError(ZlsGenError):
    """Langref download failed."""

    pass


class UnsupportedTypeError(ZlsGenError):
    """Config option type has no JSON schema equivalent."""

    pass


class ReadmeSectionNotFoundError(ZlsGenError):
    """README is missing the auto-generated section markers."""

    pass

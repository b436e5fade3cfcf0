"""Exceptions raised while decoding Gemini responses"""  # noqa: D415


class GeminiResponseError(Exception):
    """Base exception for gemini_response errors"""  # noqa: D415


class ResponseDecodeError(GeminiResponseError):
    """Raised when a response document cannot be decoded.

    Attributes:
        path: Dotted location of the failing node, e.g. ``candidates[0].content``.
            Empty string for the document root.
    """

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class MissingEnvelopeDataError(ResponseDecodeError):
    """Raised when neither 'candidates' nor 'promptFeedback' is present"""  # noqa: D415


class DocumentShapeError(ResponseDecodeError):
    """Raised when a structural node has the wrong JSON type"""  # noqa: D415


class LeafDecodeError(ResponseDecodeError):
    """Raised when a required field of a leaf record is absent or mistyped"""  # noqa: D415

    def __init__(
        self, message: str, *, record: str, field: str | None = None, path: str = ""
    ) -> None:
        self.record = record
        self.field = field
        super().__init__(message, path=path)


class InvalidCandidateError(ResponseDecodeError):
    """Base for candidate content failures; keeps the original shape error."""

    def __init__(
        self, message: str, *, underlying_error: Exception, path: str = ""
    ) -> None:
        self.underlying_error = underlying_error
        super().__init__(message, path=path)


class MalformedContentError(InvalidCandidateError):
    """Raised when a candidate's content does not have the expected shape"""  # noqa: D415


class EmptyContentError(InvalidCandidateError):
    """Raised when a candidate's content is the empty object ``{}``.

    This is a known service-side encoding defect, kept separate from
    ``MalformedContentError`` so callers can treat it as "no output".
    """

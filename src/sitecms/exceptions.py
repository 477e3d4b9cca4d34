"""Exception taxonomy for document ingestion and persistence errors."""


class SiteCMSError(Exception):
    """Base class for sitecms errors."""

    pass


class DocumentParseError(SiteCMSError):
    """A document could not be converted into a ParsedDocument.

    Raised for any failure while decoding, converting, or walking a document.
    The original exception is chained as __cause__; no partial result exists.
    """

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Failed to parse {_KIND_LABELS.get(kind, kind)} document")


class PersistenceError(SiteCMSError):
    """A write to the content database failed; the message is user-facing."""

    pass


_KIND_LABELS = {
    "word": "Word",
    "pdf": "PDF",
    "text": "text",
    "markdown": "Markdown",
}

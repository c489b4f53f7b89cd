"""Adopted texts: document type and resolution body."""

from bs4 import BeautifulSoup

from .errors import FetchFailure, InvalidArgument
from .fetcher import DocumentFetcher
from .models import Document, DocumentType
from .settings import settings

RESOLUTION_START = "The European Parliament"
RESOLUTION_END = "Instructs its President to forward this resolution"

DOCUMENT_TYPE_PREFIXES = {
    "A": DocumentType.REPORT,
    "B": DocumentType.MOTION,
}


def document_url(document_id: str) -> str:
    return f"{settings.DOCUMENT_SITE_URL}/{document_id}_EN.html"


def classify_document(document_id: str) -> DocumentType:
    """Map a document id to its type by its series letter.

    A-series ids are committee reports, B-series ids are motions for
    resolutions; every other id is DocumentType.OTHER.
    """
    return DOCUMENT_TYPE_PREFIXES.get((document_id or "")[:1], DocumentType.OTHER)


def extract_resolution_text(html: str) -> str:
    """Return the resolution body of a document page as plain text."""
    text = BeautifulSoup(html, "html.parser").get_text()
    start = text.find(RESOLUTION_START)
    if start != -1:
        text = text[start:]
    end = text.find(RESOLUTION_END)
    if end != -1:
        text = text[:end]
    return text


async def fetch_and_parse_document(document_id: str, fetcher: DocumentFetcher) -> Document:
    if not document_id:
        raise InvalidArgument("Invalid id")
    url = document_url(document_id)
    status, body = await fetcher.fetch(url)
    if not 200 <= status < 300:
        raise FetchFailure(f"HTTP error {status}", status=status, url=url)
    return Document(
        id=document_id,
        url=url,
        type=classify_document(document_id),
        content=extract_resolution_text(body),
    )

"""Access to the vote tables of a rendered RCV document.

This module is the only place that walks the BeautifulSoup tree. Everything
downstream works on VoteBlock through child_tables_at, rows_of and
cell_text.
"""

import logging

from bs4 import BeautifulSoup, Tag

from .errors import ParseSkip

logger = logging.getLogger(__name__)

VOTE_BLOCK_CLASS = "doc_box_header"


class VoteBlock:
    """One doc_box_header table: a title table and three result tables."""

    def __init__(self, element: Tag) -> None:
        self.element = element

    def child_tables_at(self, index: int) -> Tag:
        tables = self.element.find_all("table")
        if index >= len(tables):
            raise ParseSkip(f"Vote block has {len(tables)} tables, expected table {index}")
        return tables[index]

    def rows_of(self, table: Tag) -> list[Tag]:
        return table.find_all("tr")

    def cell_text(self, row: Tag, index: int) -> str:
        cells = row.find_all("td")
        if index >= len(cells):
            raise ParseSkip(f"Row has {len(cells)} cells, expected cell {index}")
        return cells[index].get_text(" ", strip=True)

    def texts_of(self, table: Tag, tag_name: str) -> list[str]:
        return [node.get_text(" ", strip=True) for node in table.find_all(tag_name)]


def extract_vote_blocks(html: str | None) -> list[VoteBlock]:
    """Return every vote block of the page in document order.

    Never raises: empty or unparsable input gives an empty list.
    """
    if not html:
        return []
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        logger.warning(f"Could not parse document html: {e}")
        return []
    return [VoteBlock(table) for table in soup.find_all("table", class_=VOTE_BLOCK_CLASS)]

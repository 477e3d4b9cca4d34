"""HTML element-to-ContentBlock conversion for converted documents"""

from bs4 import BeautifulSoup, Tag

from sitecms.core.models import BlockTypeEnum, ContentBlock


HEADING_TAGS = {'h1', 'h2', 'h3', 'h4', 'h5', 'h6'}
LIST_TAGS = {'ul', 'ol'}
TITLE_SELECTOR = 'h1, h2, h3, strong'


def make_soup(html: str) -> BeautifulSoup:
    """Parse converter output into a navigable tree."""
    return BeautifulSoup(html, 'lxml')


def find_title(soup: BeautifulSoup, default: str) -> str:
    """Return the text of the first h1/h2/h3/strong element, else default."""
    element = soup.select_one(TITLE_SELECTOR)
    title = element.get_text().strip() if element else ''
    return title or default


def element_to_block(element: Tag) -> ContentBlock | None:
    """Classify a single element into at most one ContentBlock."""
    tag = element.name.lower() if element.name else ''
    text = element.get_text().strip()

    if not text and tag != 'img':
        return None

    if tag in HEADING_TAGS:
        return ContentBlock(type=BlockTypeEnum.heading, level=int(tag[1]), content=text)
    if tag == 'p':
        return ContentBlock(type=BlockTypeEnum.paragraph, content=text)
    if tag in LIST_TAGS:
        items = [li.get_text().strip() for li in element.find_all('li')]
        if not items:
            return None
        return ContentBlock(type=BlockTypeEnum.list, content=tag, items=items, ordered=tag == 'ol')
    if tag == 'img':
        src = element.get('src')
        return ContentBlock(type=BlockTypeEnum.image, content=src) if src else None
    if tag == 'table':
        return ContentBlock(type=BlockTypeEnum.table, content=str(element))
    return None


def html_to_blocks(soup: BeautifulSoup) -> list[ContentBlock]:
    """Walk every element in document order and collect typed blocks."""
    blocks: list[ContentBlock] = []
    for element in soup.find_all(True):
        block = element_to_block(element)
        if block is not None:
            blocks.append(block)
    return blocks

"""Unit tests for core/extract/blocks.py"""

import pytest

from sitecms.core.extract.blocks import element_to_block, find_title, html_to_blocks, make_soup
from sitecms.core.models import BlockTypeEnum


def _blocks(html: str):
    return html_to_blocks(make_soup(html))


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_heading_levels(level):
    """h1-h6 map to heading blocks carrying their level."""
    blocks = _blocks(f"<h{level}>Title</h{level}>")
    assert len(blocks) == 1
    assert blocks[0].type == BlockTypeEnum.heading
    assert blocks[0].level == level
    assert blocks[0].content == "Title"


def test_one_heading_n_paragraphs_in_order():
    """One heading and N paragraphs yield exactly those blocks in source order."""
    html = "<h1>Head</h1>" + "".join(f"<p>Para {i}</p>" for i in range(4))
    blocks = _blocks(html)
    assert [b.type for b in blocks] == [BlockTypeEnum.heading] + [BlockTypeEnum.paragraph] * 4
    assert [b.content for b in blocks[1:]] == [f"Para {i}" for i in range(4)]


def test_empty_paragraph_skipped():
    """Paragraphs without text produce no block."""
    assert _blocks("<p>   </p><p></p>") == []


def test_unordered_and_ordered_lists():
    """ul/ol become list blocks with stripped item text and the right style."""
    blocks = _blocks("<ul><li> One </li><li>Two</li></ul><ol><li>Step</li></ol>")
    assert [b.type for b in blocks] == [BlockTypeEnum.list, BlockTypeEnum.list]
    assert blocks[0].items == ["One", "Two"]
    assert blocks[0].ordered is False
    assert blocks[1].items == ["Step"]
    assert blocks[1].ordered is True


def test_list_items_are_not_separate_blocks():
    """li elements themselves are not classified."""
    blocks = _blocks("<ul><li>Only</li></ul>")
    assert len(blocks) == 1


def test_image_kept_without_text():
    """img with src is kept even though it has no text; the wrapping p is skipped."""
    blocks = _blocks('<p><img src="a.png" /></p>')
    assert len(blocks) == 1
    assert blocks[0].type == BlockTypeEnum.image
    assert blocks[0].content == "a.png"


def test_image_without_src_dropped():
    """img without a src attribute produces nothing."""
    assert _blocks("<img alt='x' />") == []


def test_table_kept_verbatim():
    """Tables are one opaque block holding their markup."""
    blocks = _blocks("<table><tr><td>A</td><td>B</td></tr></table>")
    assert len(blocks) == 1
    assert blocks[0].type == BlockTypeEnum.table
    assert blocks[0].content.startswith("<table>")
    assert "<td>A</td>" in blocks[0].content


def test_unclassified_elements_ignored():
    """div/span/strong and friends are not blocks themselves."""
    assert _blocks("<div><span>loose text</span></div>") == []


def test_element_to_block_none_for_text_wrapper():
    """element_to_block returns None for tags outside the closed set."""
    soup = make_soup("<section>hello</section>")
    assert element_to_block(soup.find("section")) is None


def test_title_prefers_first_match_in_document_order():
    """The first h1/h2/h3/strong in the document wins."""
    soup = make_soup("<p><strong>Bold lead</strong> text</p><h1>Later heading</h1>")
    assert find_title(soup, "Untitled Document") == "Bold lead"


def test_title_ignores_deeper_headings():
    """h4-h6 are not title candidates."""
    soup = make_soup("<h4>Minor</h4><p>Body.</p>")
    assert find_title(soup, "Untitled Document") == "Untitled Document"


def test_title_empty_element_uses_default():
    """A matching but empty element still falls back to the default."""
    soup = make_soup("<h1>  </h1>")
    assert find_title(soup, "Fallback") == "Fallback"

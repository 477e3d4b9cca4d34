"""Shared fixtures for core unit tests"""

import pytest

from sitecms.crud.database import Backend


SAMPLE_HTML = """\
<h1>Quarterly Report</h1>
<p>The first paragraph explains the report.</p>
<p><img src="chart-1.png" /></p>
<h2>Results</h2>
<ul><li>Revenue up</li><li>Costs down</li></ul>
<p>A second paragraph.</p>
<ol><li>First</li><li>Second</li></ol>
<p><img src="chart-2.png" /></p>
<table><tr><td>Q1</td><td>10</td></tr></table>
<p></p>
<p><img src="chart-3.png" /></p>
"""

SAMPLE_TEXT = "My Title\nShort Line\nThis is a longer paragraph that ends with a period."

SAMPLE_MD = """\
# Launch Notes

We are shipping the new dashboard today.

## Highlights

- faster loading
- dark mode
"""


@pytest.fixture(name="sample_html")
def sample_html_fixture():
    return SAMPLE_HTML


@pytest.fixture(name="sample_text")
def sample_text_fixture():
    return SAMPLE_TEXT


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="backend")
def backend_fixture():
    """Open Backend on a private in-memory SQLite database."""
    backend = Backend("sqlite://").open()
    yield backend
    backend.close()

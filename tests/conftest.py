import pytest

from htmlharvest import FetchError, parse
from htmlharvest.fetchers import BaseFetcher, FetchedPage


WIKI_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Web scraping - Wikipedia</title></head>
<body>
<h1 id="firstHeading" class="firstHeading" lang="en">Web scraping</h1>
<div id="mw-content-text">
<p>Web scraping is data scraping used for
extracting data from websites.^[1]</p>
<h2><span id="Techniques">Techniques</span></h2>
<p>Human copy-and-paste.</p>
<div class="div-col">
<ul>
<li>Data wrangling</li>
<li>Importer</li>

<li>Job wrapping</li>
</ul>
</div>
<table class="wikitable">
<tr><th>Tool</th><th>Language</th></tr>
<tr><td> rvest </td><td>R</td></tr>
<tr><td>Beautiful Soup</td><td>Python</td></tr>
</table>
</div>
<div id="p-lang">
<ul>
<li class="interlanguage-link"><a href="https://ar.wikipedia.org/wiki/x" title="تقشير الويب – Arabic" lang="ar" hreflang="ar" class="interlanguage-link-target">العربية</a></li>
<li class="interlanguage-link"><a href="https://ca.wikipedia.org/wiki/Web_scraping" title="Web scraping – Catalan" lang="ca" hreflang="ca" class="interlanguage-link-target">Català</a></li>
</ul>
</div>
</body>
</html>
"""


def listings_html(count=25, missing=(11,)):
    cards = []
    for i in range(1, count + 1):
        lot = '' if i in missing else f'<span class="lot-size">{i * 100} sqft</span>'
        cards.append(
            f'<div class="listing" data-id="{i}">'
            f'<a href="/homes/{i}">Home {i}</a>'
            f'<span class="price">${i},000</span>{lot}</div>'
        )
    return '<html><body><section>' + ''.join(cards) + '</section></body></html>'


@pytest.fixture
def wiki_doc():
    return parse(WIKI_PAGE, url="https://en.wikipedia.org/wiki/Web_scraping")


@pytest.fixture
def listings_doc():
    return parse(listings_html(), url="https://homes.example.com/search")


class StubFetcher(BaseFetcher):
    """Serves canned pages; any other URL fails with HTTP 404."""

    def __init__(self, pages=None):
        self.pages = pages or {"https://example.com/ok": "<html><body><p>ok page</p></body></html>"}
        self.requested = []

    def fetch(self, url):
        self.requested.append(url)
        if url not in self.pages:
            raise FetchError(url, "not found", status_code=404)
        return FetchedPage(url=url, content=self.pages[url].encode("utf-8"), encoding="utf-8", status_code=200)


@pytest.fixture
def stub_fetcher():
    return StubFetcher()

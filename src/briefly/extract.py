from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

import trafilatura
from bs4 import BeautifulSoup

from briefly.errors import ExtractFailed
from briefly.models import ExtractedDocument

log = logging.getLogger("briefly.extract")

UNTITLED_PAGE = "Untitled page"
PARAGRAPH_SEP = "\n\n"

# Regions likely to hold article or recipe bodies, tried in this order
CONTENT_SELECTORS: Tuple[str, ...] = (
    "article",
    "main",
    '[class*="recipe"]',
    '[id*="recipe"]',
    ".content",
    ".entry-content",
    ".post",
    ".post-content",
    ".recipe-card",
    ".wprm-recipe-container",
    ".tasty-recipes",
    ".instructions",
    ".ingredients",
)

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")


def _soup(html: str) -> BeautifulSoup:
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    return soup


def _page_title(soup: BeautifulSoup) -> Optional[str]:
    if soup.title and soup.title.string:
        title = soup.title.string.strip()
        if title:
            return title
    h1 = soup.find("h1")
    if h1:
        title = h1.get_text(" ", strip=True)
        if title:
            return title
    return None


def extract_primary(html: str, url: str, min_chars: int = 500) -> Optional[ExtractedDocument]:
    """
    Readability-style extraction of the main content region.

    - trafilatura.extract (main text, no comments/tables, precision favored)
    - trafilatura.extract_metadata for the title, <title>/<h1> as fallback

    Returns None, not an error, when nothing usable comes out or the text is
    shorter than min_chars; the caller moves on to the fallback extractor.
    """
    try:
        extracted = trafilatura.extract(
            html,
            url=url,
            include_comments=False,
            include_tables=False,
            favor_precision=True,
            output_format="txt",
        )
    except Exception as e:
        log.debug("trafilatura failed on %s: %s", url, e)
        return None

    text = (extracted or "").strip()
    if len(text) < min_chars:
        log.debug("Primary extraction too short for %s (%d chars)", url, len(text))
        return None

    title: Optional[str] = None
    try:
        meta = trafilatura.extract_metadata(html, default_url=url)
        if meta and getattr(meta, "title", None):
            title = meta.title.strip() or None
    except Exception as e:
        log.debug("trafilatura metadata failed on %s: %s", url, e)

    if not title:
        title = _page_title(_soup(html))

    return ExtractedDocument(title=title or UNTITLED_PAGE, content=text, strategy="primary")


def _select_content_blocks(soup: BeautifulSoup) -> str:
    blocks: List[str] = []
    seen = set()
    for selector in CONTENT_SELECTORS:
        for el in soup.select(selector):
            text = el.get_text("\n", strip=True)
            if text and text not in seen:
                seen.add(text)
                blocks.append(text)
    return PARAGRAPH_SEP.join(blocks).strip()


def _paragraph_blocks(soup: BeautifulSoup) -> str:
    paragraphs = [p.get_text(" ", strip=True) for p in soup.find_all("p")]
    return PARAGRAPH_SEP.join(t for t in paragraphs if t).strip()


Strategy = Callable[[BeautifulSoup], str]
Candidate = Tuple[str, Callable[[], Optional[ExtractedDocument]]]

FALLBACK_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("selectors", _select_content_blocks),
    ("paragraphs", _paragraph_blocks),
)


def _fallback_candidates(html: str) -> List[Candidate]:
    # The page is parsed once, and only if a fallback strategy actually runs
    parsed: List[BeautifulSoup] = []

    def soup() -> BeautifulSoup:
        if not parsed:
            parsed.append(_soup(html))
        return parsed[0]

    def candidate(name: str, strategy: Strategy) -> Callable[[], Optional[ExtractedDocument]]:
        def run() -> Optional[ExtractedDocument]:
            content = strategy(soup())
            if not content:
                return None
            return ExtractedDocument(title=_page_title(soup()) or UNTITLED_PAGE, content=content, strategy=name)

        return run

    return [(name, candidate(name, strategy)) for name, strategy in FALLBACK_STRATEGIES]


def _require_words(doc: Optional[ExtractedDocument], min_words: int) -> ExtractedDocument:
    if doc is None:
        raise ExtractFailed("Could not extract readable article content")
    if doc.word_count < min_words:
        raise ExtractFailed(
            f"Could not extract readable article content ({doc.word_count} words < {min_words})"
        )
    return doc


def _first_sufficient(candidates: List[Candidate], min_words: int, url: str) -> ExtractedDocument:
    """
    Try candidates in order; the first with at least min_words wins.
    A short result does not stop the chain, later strategies still run.
    """
    first_short: Optional[ExtractedDocument] = None
    for name, run in candidates:
        doc = run()
        if doc is None:
            log.debug("Extractor %s found nothing on %s", name, url)
            continue
        if doc.word_count >= min_words:
            log.info("Extracted %d chars from %s using %s", len(doc.content), url, doc.strategy)
            return doc
        log.debug("Extractor %s found only %d words on %s", name, doc.word_count, url)
        if first_short is None:
            first_short = doc

    return _require_words(first_short, min_words)


def extract_fallback(html: str, min_words: int = 30, url: str = "") -> ExtractedDocument:
    """
    Permissive extraction used when the primary extractor gives up.

    First strategy with enough words wins:
      1) text of known content containers (article, main, recipe plugins...),
         identical blocks de-duplicated
      2) every <p> in document order

    Raises ExtractFailed when neither yields min_words.
    """
    return _first_sufficient(_fallback_candidates(html), min_words, url)


def extract_document(
    html: str,
    url: str,
    *,
    min_primary_chars: int = 500,
    min_words: int = 30,
) -> ExtractedDocument:
    """
    Run the extractor chain in order and stop at the first acceptable result:
    primary (needs min_primary_chars), then the fallback strategies.
    """
    candidates: List[Candidate] = [
        ("primary", lambda: extract_primary(html, url, min_chars=min_primary_chars)),
    ]
    candidates.extend(_fallback_candidates(html))

    return _first_sufficient(candidates, min_words, url)

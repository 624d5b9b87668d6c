#!/usr/bin/env python3
import logging
import re
import sys

import requests
from bs4 import BeautifulSoup, NavigableString, Tag

from config import HarmonyConfig

logger = logging.getLogger(__name__)

# --- REGEX PATTERNS ---
# The API prints "3:1" plus a non-breaking space ahead of a chapter's first verse.
VERSE_ONE_LABEL = re.compile(r'\d+:1&nbsp;')
WHITESPACE = re.compile(r'\s')
# ASCII only; a leading &nbsp; is passage text.
LEADING_WHITESPACE = re.compile(r'^[ \t\r\f\v]*')
BLANK = " \t\r\f\v"

PASSAGE_FLAGS = "&".join(f"{flag}=false" for flag in [
    "include-passage-references",
    "include-first-verse-numbers",
    "include-verse-numbers",
    "include-footnotes",
    "include-short-copyright",
    "include-headings",
    "include-subheadings",
])

ROOT_CLASS = "esv-text"


def encode_reference(reference):
    # The passage API wants '+' for spaces and an escaped colon.
    return WHITESPACE.sub("+", reference).replace(":", "%3A")


def strip_verse_one_labels(text):
    return VERSE_ONE_LABEL.sub("", text)


def passage_url(reference, config):
    return f"{config.passage_url}?key={config.api_key}&passage={encode_reference(reference)}&{PASSAGE_FLAGS}"


def _document_root(soup):
    """
    Returns the single top-level element, wrapping the content in a
    new <div> when the markup has no element or more than one at the top.
    """
    elements = [node for node in soup.contents if isinstance(node, Tag)]
    stray_text = [node for node in soup.contents if isinstance(node, NavigableString) and node.strip()]
    if len(elements) == 1 and not stray_text:
        return elements[0]

    root = soup.new_tag("div")
    for node in list(soup.contents):
        root.append(node.extract())
    soup.append(root)
    return root


def _remove(nodes):
    for node in nodes:
        if not node.decomposed:
            node.decompose()


def _reindent(markup):
    lines = [line for line in markup.split("\n") if line.strip(BLANK)]
    return "\n".join(LEADING_WHITESPACE.sub("    ", line, count=1) for line in lines)


def sanitize_passage(html, style="indented-embed"):
    """
    Normalizes passage markup into an embeddable fragment.

    Indented block <div>s become <blockquote>s, indentation spans (and,
    for indented-embed, chapter numbers and the inner esv-text wrapper)
    are dropped, every class/id is stripped and the root is tagged
    class="esv-text". The steps run in a fixed order; changing it
    changes the output. Running this on its own output is a no-op.
    """
    indented = style == "indented-embed"
    soup = BeautifulSoup(html, 'html.parser')
    root = _document_root(soup)

    for div in root.find_all(class_="block-indent"):
        blockquote = soup.new_tag("blockquote")
        for child in list(div.contents):
            blockquote.append(child.extract())
        div.replace_with(blockquote)

    if indented:
        for wrapper in root.find_all(class_="esv-text"):
            wrapper.unwrap()

    _remove(root.find_all(class_=["indent", "chapter-num"] if indented else "indent"))

    for tag in [root] + root.find_all(True):
        tag.attrs.pop('class', None)
        tag.attrs.pop('id', None)

    root['class'] = ROOT_CLASS

    markup = str(root)
    return _reindent(markup) if indented else markup


def _dump(path, reference, html):
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"OUTPUTTING ({reference}):\n{BeautifulSoup(html, 'html.parser')}\n\n\n")


def get_passage(reference, config, debug_log=None):
    """
    Fetches one reference from the passage API and returns sanitized markup.
    A failed request degrades to an empty fragment; it never raises.
    """
    html = ""

    try:
        response = requests.get(passage_url(reference, config))
        if response.status_code == 200:
            html = strip_verse_one_labels(response.text)
        else:
            logger.warning("Passage request for %s failed with HTTP %s", reference, response.status_code)
            if debug_log is not None: debug_log.append(f"[{reference}] HTTP {response.status_code}, using empty passage")
    except requests.RequestException as e:
        logger.warning("Passage request for %s failed: %s", reference, e)
        if debug_log is not None: debug_log.append(f"[{reference}] Error: {e}")

    if config.debug_dump:
        _dump(config.debug_dump, reference, html)

    fragment = sanitize_passage(html, config.style)
    if debug_log is not None and html: debug_log.append(f"[{reference}] {len(html)} bytes")
    return fragment


def main():
    if len(sys.argv) < 2:
        print("Usage: ./bible.py \"Passage Name\" [\"Passage Name\" ...]")
        return

    config = HarmonyConfig.from_env()

    for passage in sys.argv[1:]:
        print(f"--- {passage} ({config.style}) ---")
        print(get_passage(passage, config))
        print("-" * 40 + "\n")

if __name__ == "__main__":
    main()

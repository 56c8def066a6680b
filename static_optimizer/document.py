"""
Document adapter: turns markup into a read-only tree the rules can query.

The rule engine only ever talks to this class. It needs four capabilities:
  query_all   : every element matching a tag name and/or attribute predicate
  text_content: entity-decoded text of a node
  attribute   : optional attribute value of a node
  head        : the <head> element, if the parser produced one

Parsing is the only step that can fail; it raises ParseError and the engine
is never invoked on that input.
"""

import re
from typing import Iterable, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .exceptions import ParseError
from .logger import get_module_logger

logger = get_module_logger("document")

# --- Parser fallback chain: html5lib → lxml → html.parser ---
# html5lib implements the WHATWG algorithm (same tree a browser builds: it
# always synthesizes <head> and <body>). lxml is fast and tolerant. The
# built-in html.parser needs no extra install but may leave <head> out.
PARSER_CHAIN = ("html5lib", "lxml", "html.parser")

# WHATWG encoding spec: browsers silently remap these charset labels.
# https://encoding.spec.whatwg.org/#names-and-labels
WHATWG_CHARSET_MAP = {
    'iso-8859-1': 'windows-1252',
    'iso8859-1': 'windows-1252',
    'iso88591': 'windows-1252',
    'latin-1': 'windows-1252',
    'latin1': 'windows-1252',
    'us-ascii': 'windows-1252',
    'ascii': 'windows-1252',
    'iso-8859-9': 'windows-1254',
    'iso-8859-11': 'windows-874',
}

AttrSpec = dict[str, Union[bool, str]]


def _inside_template(element, stop: Optional[Tag] = None) -> bool:
    """True if a <template> encloses `element`, checking ancestors up to `stop`."""
    for parent in element.parents:
        if parent.name == "template":
            return True
        if parent is stop:
            return False
    return False


def detect_charset_from_bytes(raw_bytes: bytes) -> str:
    """
    Detect the declared charset in the first 2048 bytes of an HTML document.

    Looks for <meta charset=...> first, then the legacy
    <meta http-equiv="Content-Type" content="...; charset=...">, and maps the
    label the way browsers do. Returns 'utf-8' when nothing is declared.
    """
    head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

    charset = None
    m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
    if m:
        charset = m.group(1).strip().lower()

    if not charset:
        m = re.search(
            r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)',
            head_str, re.IGNORECASE
        )
        if m:
            charset = m.group(1).strip().lower()

    if not charset:
        return 'utf-8'
    return WHATWG_CHARSET_MAP.get(charset, charset)


def decode_markup(raw_bytes: bytes) -> str:
    """Decode raw HTML bytes with their declared charset, falling back to UTF-8."""
    charset = detect_charset_from_bytes(raw_bytes)
    try:
        return raw_bytes.decode(charset, errors='replace')
    except LookupError:
        logger.warning(f"Unknown charset '{charset}', decoding as utf-8")
        return raw_bytes.decode('utf-8', errors='replace')


class Document:
    """
    Read-only view over a parsed HTML tree.

    Build one with Document.parse(). Nothing in this class modifies the
    underlying soup after construction, so one Document can be evaluated any
    number of times, from any number of threads.
    """

    def __init__(self, soup: BeautifulSoup, parser: str, warnings: Optional[list[str]] = None):
        self._soup = soup
        self.parser = parser                 # Builder that produced the tree
        self.warnings = warnings or []       # Fallbacks taken while parsing

    @classmethod
    def parse(cls, markup: Union[str, bytes], parser: Optional[str] = None) -> "Document":
        """
        Parse markup into a Document.

        Args:
            markup: HTML as text, or raw bytes (decoded via the declared charset)
            parser: Restrict parsing to one builder; default tries PARSER_CHAIN in order

        Raises:
            ParseError: input is not markup, is blank, or no builder could parse it
        """
        if isinstance(markup, bytes):
            markup = decode_markup(markup)
        if not isinstance(markup, str):
            raise ParseError(
                f"Expected HTML text or bytes, got {type(markup).__name__}",
                details={"type": type(markup).__name__}
            )
        if not markup.strip():
            raise ParseError("No HTML provided")

        if parser is None:
            chain = PARSER_CHAIN
        elif parser in PARSER_CHAIN:
            chain = (parser,)
        else:
            raise ParseError(
                f"Unknown parser '{parser}'",
                details={"parser": parser, "available": list(PARSER_CHAIN)}
            )

        warnings = []
        failures = {}
        for builder in chain:
            try:
                soup = BeautifulSoup(markup, builder)
            except Exception as e:
                logger.warning(f"{builder} parsing failed: {e}")
                warnings.append(f"{builder} parsing failed: {e}")
                failures[builder] = str(e)
                continue
            logger.debug(f"Parsed {len(markup)} chars with {builder}")
            return cls(soup, parser=builder, warnings=warnings)

        raise ParseError("Failed to parse HTML", details={"failures": failures})

    # --- Query capability ---

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    @property
    def head(self) -> Optional[Tag]:
        """First <head> element, or None when the parser did not produce one."""
        return self._soup.find("head")

    def _matcher(self, name, attrs):
        if isinstance(name, str):
            names = {name}
        elif name is None:
            names = None
        else:
            names = set(name)
        attrs = attrs or {}

        def matches(tag: Tag) -> bool:
            if names is not None and tag.name not in names:
                return False
            for key, expected in attrs.items():
                if not tag.has_attr(key):
                    return False
                if expected is not True and self.attribute(tag, key) != expected:
                    return False
            # Template contents are inert
            return not _inside_template(tag)

        return matches

    def query_all(
        self,
        name: Union[str, Iterable[str], None] = None,
        attrs: Optional[AttrSpec] = None,
        within: Optional[Tag] = None
    ) -> list[Tag]:
        """
        Return every element under `within` (default: whole document) that matches.

        Elements nested inside a <template> are never returned.

        Args:
            name: Tag name, or several tag names; None matches any tag
            attrs: attribute → True (must be present, any value including "")
                   or attribute → str (value must be exactly equal)
            within: Scope the search to this node's descendants

        Returns:
            Matching elements in document order
        """
        scope = within if within is not None else self._soup
        return scope.find_all(self._matcher(name, attrs))

    def first(
        self,
        name: Union[str, Iterable[str], None] = None,
        attrs: Optional[AttrSpec] = None,
        within: Optional[Tag] = None
    ) -> Optional[Tag]:
        scope = within if within is not None else self._soup
        return scope.find(self._matcher(name, attrs))

    def exists(
        self,
        name: Union[str, Iterable[str], None] = None,
        attrs: Optional[AttrSpec] = None,
        within: Optional[Tag] = None
    ) -> bool:
        return self.first(name, attrs, within) is not None

    # --- Node accessors ---

    @staticmethod
    def text_content(node: Tag) -> str:
        """
        Concatenated text of every descendant text node, untrimmed.

        Entities were already decoded by the parser. Script and style bodies
        are raw text, so their content comes back exactly as written.
        Comments, doctypes and processing instructions are not text, and
        neither is anything inside a <template>.
        """
        return "".join(
            str(child) for child in node.descendants
            if isinstance(child, NavigableString)
            and not isinstance(child, PreformattedString)
            and not _inside_template(child, stop=node)
        )

    @staticmethod
    def attribute(node: Tag, name: str) -> Optional[str]:
        """Attribute value, or None if absent. Multi-valued attributes (class, rel) are space-joined."""
        value = node.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return value

    @staticmethod
    def has_attribute(node: Tag, name: str) -> bool:
        return node.has_attr(name)

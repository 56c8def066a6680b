"""
Rule-based checkers, one function per group.

Each group takes a Document and returns its issues in rule order. Groups
share no state and never look at each other's output, so any of them can
be called on its own. A missing element is a normal branch here, not an
error: no checker raises.
"""

import re

from .document import Document
from .schemas import Category, Issue, Severity

# --- Thresholds ---
TITLE_MIN_LENGTH = 10
TITLE_MAX_LENGTH = 70
INLINE_STYLE_LIMIT = 10
IMAGE_COUNT_LIMIT = 30
INLINE_SCRIPT_MAX_LENGTH = 2000

# Link texts that say nothing about the destination. Exact match after
# trimming and lowercasing: "click here now" is fine.
GENERIC_LINK_TEXTS = ("click here", "read more", "more", "link", "here")

# Landmark elements in lookup order; the first one found ends the search.
LANDMARK_TAGS = ("main", "nav", "header", "footer", "aside")

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

# Whitespace plus U+FEFF, the set a browser trims
_EDGE_SPACE = re.compile(r"^[\s\ufeff]+|[\s\ufeff]+$")


def trim(text: str) -> str:
    """Strip leading and trailing whitespace and byte order marks."""
    return _EDGE_SPACE.sub("", text)


def check_seo(doc: Document) -> list[Issue]:
    """Title, meta description and viewport checks."""
    issues = []

    title = doc.first("title")
    if title is None:
        issues.append(Issue(
            category=Category.SEO,
            severity=Severity.ERROR,
            title="Missing <title> tag",
            description="The document does not have a <title> element.",
            suggestion="Add a <title> element to the <head> section."
        ))
    else:
        title_length = len(trim(doc.text_content(title)))
        if title_length < TITLE_MIN_LENGTH:
            issues.append(Issue(
                category=Category.SEO,
                severity=Severity.WARNING,
                title="Title too short",
                description=f"Title is only {title_length} characters long.",
                suggestion="Expand your title to be descriptive (aim for 30-60 characters)."
            ))
        elif title_length > TITLE_MAX_LENGTH:
            issues.append(Issue(
                category=Category.SEO,
                severity=Severity.WARNING,
                title="Title too long",
                description=f"Title is {title_length} characters long.",
                suggestion="Shorten your title to ensure it displays fully in search results (max ~60-70 chars)."
            ))

    if not doc.exists("meta", {"name": "description"}):
        issues.append(Issue(
            category=Category.SEO,
            severity=Severity.ERROR,
            title="Missing Meta Description",
            description='No <meta name="description"> tag found.',
            suggestion="Add a meta description to summarize your page for search engines."
        ))

    if not doc.exists("meta", {"name": "viewport"}):
        issues.append(Issue(
            category=Category.SEO,
            severity=Severity.ERROR,
            title="Missing Viewport Meta Tag",
            description='No <meta name="viewport"> tag found.',
            suggestion='Add <meta name="viewport" content="width=device-width, initial-scale=1.0"> '
                       'for mobile responsiveness.'
        ))

    # Canonical link is looked up but produces no issue
    doc.exists("link", {"rel": "canonical"})

    return issues


def check_accessibility(doc: Document) -> list[Issue]:
    """Alt text, generic link text and landmark checks."""
    issues = []

    # Presence only: alt="" counts as present
    missing_alt = sum(1 for img in doc.query_all("img") if not doc.has_attribute(img, "alt"))
    if missing_alt > 0:
        issues.append(Issue(
            category=Category.ACCESSIBILITY,
            severity=Severity.ERROR,
            title="Images missing Alt text",
            description=f"Found {missing_alt} <img> tag(s) without an alt attribute.",
            suggestion="Add descriptive alt attributes to all images for screen readers."
        ))

    generic_links = sum(
        1 for link in doc.query_all("a")
        if trim(doc.text_content(link)).lower() in GENERIC_LINK_TEXTS
    )
    if generic_links > 0:
        issues.append(Issue(
            category=Category.ACCESSIBILITY,
            severity=Severity.WARNING,
            title="Non-descriptive Link Text",
            description=f'Found {generic_links} link(s) satisfying generic text like "click here".',
            suggestion='Use descriptive text for links that explains their destination '
                       '(e.g., "Read more about pricing").'
        ))

    if not any(doc.exists(tag) for tag in LANDMARK_TAGS):
        issues.append(Issue(
            category=Category.ACCESSIBILITY,
            severity=Severity.INFO,
            title="No Semantic Landmarks Found",
            description="Document does not use <main>, <nav>, <header>, or <footer>.",
            suggestion="Use semantic HTML5 landmark elements to improve navigation for screen readers."
        ))

    return issues


def has_skipped_heading_level(doc: Document) -> bool:
    """
    True if any heading jumps more than one level below the previous one.

    Headings are read in flat document order, not by nesting. The baseline
    is level 0, so a document whose first heading is h3 (or h2) skips too.
    Scanning stops at the first skip.
    """
    previous_level = 0
    for heading in doc.query_all(HEADING_TAGS):
        current_level = int(heading.name[1])
        if current_level > previous_level + 1:
            return True
        previous_level = current_level
    return False


def check_structure(doc: Document) -> list[Issue]:
    """H1 count, heading order and inline style checks."""
    issues = []

    h1_count = len(doc.query_all("h1"))
    if h1_count == 0:
        issues.append(Issue(
            category=Category.STRUCTURE,
            severity=Severity.ERROR,
            title="Missing H1 Heading",
            description="No <h1> tag found on the page.",
            suggestion="Add exactly one <h1> tag to describe the main topic of the page."
        ))
    elif h1_count > 1:
        issues.append(Issue(
            category=Category.STRUCTURE,
            severity=Severity.WARNING,
            title="Multiple H1 Headings",
            description=f"Found {h1_count} <h1> tags.",
            suggestion="Best practice is to have only one <h1> per page representing the main title."
        ))

    if has_skipped_heading_level(doc):
        issues.append(Issue(
            category=Category.STRUCTURE,
            severity=Severity.WARNING,
            title="Skipped Heading Levels",
            description="Heading levels should not be skipped (e.g., going from H2 to H4).",
            suggestion="Ensure your heading hierarchy is sequential (e.g., H2 → H3)."
        ))

    styled = len(doc.query_all(attrs={"style": True}))
    if styled > INLINE_STYLE_LIMIT:
        issues.append(Issue(
            category=Category.STRUCTURE,
            severity=Severity.INFO,
            title="Heavy use of Inline Styles",
            description=f"Found {styled} elements with inline 'style' attributes.",
            suggestion="Move styles to valid CSS classes or an external stylesheet for better maintainability."
        ))

    return issues


def check_performance(doc: Document) -> list[Issue]:
    """Image volume, inline script size and render-blocking script checks."""
    issues = []

    image_count = len(doc.query_all("img"))
    if image_count > IMAGE_COUNT_LIMIT:
        issues.append(Issue(
            category=Category.PERFORMANCE,
            severity=Severity.WARNING,
            title="High Image Count",
            description=f"Page contains {image_count} images.",
            suggestion="Lazy load images and consider if all are necessary for the initial view."
        ))

    # Raw text length, untrimmed
    large_scripts = sum(
        1 for script in doc.query_all("script")
        if not doc.has_attribute(script, "src")
        and len(doc.text_content(script)) > INLINE_SCRIPT_MAX_LENGTH
    )
    if large_scripts > 0:
        issues.append(Issue(
            category=Category.PERFORMANCE,
            severity=Severity.INFO,
            title="Large Inline Scripts",
            description=f"Found {large_scripts} large inline script block(s).",
            suggestion="Move large JavaScript logic to external .js files to take advantage of browser caching."
        ))

    head = doc.head
    head_scripts = doc.query_all("script", {"src": True}, within=head) if head is not None else []
    blocking = sum(
        1 for script in head_scripts
        if not doc.has_attribute(script, "async") and not doc.has_attribute(script, "defer")
    )
    if blocking > 0:
        issues.append(Issue(
            category=Category.PERFORMANCE,
            severity=Severity.WARNING,
            title="Render-blocking Scripts",
            description=f"Found {blocking} script(s) in <head> that are not async or defer.",
            suggestion='Add "defer" or "async" attributes to scripts in the <head> to prevent blocking page render.'
        ))

    return issues

"""
HTML post-processing filters for notification emails.

Mail clients ignore <style> blocks and cannot resolve site-relative links, so
rendered bodies go through:
- absolutize_urls(): rewrite relative href/src attributes against the site URL
- inline_css(): copy stylesheet declarations onto each element's style attribute
"""

import os
import re
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

CSS_PATH = os.path.join(os.path.dirname(__file__), "../config/notification_mail.css")

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_RULE_RE = re.compile(r"([^{}]+)\{([^{}]*)\}")

# Cache for the mail stylesheet
_MAIL_CSS: str | None = None


def load_mail_css() -> str:
    """Load and cache the notification mail stylesheet."""
    global _MAIL_CSS
    if _MAIL_CSS is not None:
        return _MAIL_CSS

    try:
        with open(CSS_PATH, "r", encoding="utf-8") as f:
            _MAIL_CSS = f.read()
    except OSError as e:
        print(f"  ⚠️  Could not load mail stylesheet: {e}")
        _MAIL_CSS = ""

    return _MAIL_CSS


def parse_css(css: str) -> list[tuple[str, list[tuple[str, str]]]]:
    """
    Parse a flat stylesheet into (selector, declarations) pairs.

    At-rules (@media, @font-face) are dropped since they cannot be inlined.
    Grouped selectors ("h1, h2") produce one entry each, in source order.
    """
    css = _COMMENT_RE.sub("", css or "")
    css = re.sub(r"@[^{;]+\{(?:[^{}]*\{[^{}]*\})*[^{}]*\}", "", css)
    css = re.sub(r"@[^{;]+;", "", css)

    rules = []
    for selectors, body in _RULE_RE.findall(css):
        declarations = _parse_declarations(body)
        if not declarations:
            continue
        for selector in selectors.split(","):
            selector = selector.strip()
            if selector:
                rules.append((selector, declarations))
    return rules


def _parse_declarations(body: str) -> list[tuple[str, str]]:
    declarations = []
    for part in body.split(";"):
        name, sep, value = part.partition(":")
        if sep and name.strip() and value.strip():
            declarations.append((name.strip().lower(), value.strip()))
    return declarations


def inline_css(html: str, css: str | None = None) -> str:
    """
    Inline stylesheet rules into element style attributes.

    Embedded <style> blocks are consumed and removed, then `css` is applied
    on top. Later rules override earlier ones; declarations already present
    in an element's style attribute always win. Pseudo-class selectors
    (":hover") cannot be inlined and are skipped.

    Args:
        html: Rendered HTML document or fragment
        css: Extra stylesheet text to apply

    Returns:
        HTML with inlined styles
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    stylesheet = []
    for style in soup.find_all("style"):
        stylesheet.append(style.get_text())
        style.decompose()
    if css:
        stylesheet.append(css)

    computed: dict[int, tuple] = {}
    for selector, declarations in parse_css("\n".join(stylesheet)):
        if ":" in selector:
            continue
        try:
            matches = soup.select(selector)
        except Exception as e:
            print(f"  ⚠️  Skipping CSS selector '{selector}': {e}")
            continue

        for element in matches:
            _, styles = computed.setdefault(id(element), (element, {}))
            styles.update(declarations)

    for element, styles in computed.values():
        existing = dict(_parse_declarations(element.get("style", "")))
        styles.update(existing)
        element["style"] = "; ".join(f"{name}: {value}" for name, value in styles.items())

    return str(soup)


def absolutize_urls(html: str, base_url: str) -> str:
    """
    Rewrite relative href/src attributes to absolute URLs.

    Absolute URLs, other schemes (mailto:, tel:) and in-page fragments are
    left untouched.
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    base = base_url.rstrip("/") + "/"

    for attr in ("href", "src"):
        for element in soup.find_all(attrs={attr: True}):
            value = element[attr].strip()
            if not value or value.startswith("#"):
                continue
            if urlparse(value).scheme:
                continue
            element[attr] = urljoin(base, value)

    return str(soup)

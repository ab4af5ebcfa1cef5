"""
Allow-list sanitizer for legacy rich-markup bodies.
"""
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = {
    "p", "br", "strong", "em", "u", "s", "code", "pre", "blockquote",
    "h1", "h2", "h3", "ul", "ol", "li", "a", "img", "div", "figure",
    "figcaption", "span", "iframe", "video", "source",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "target", "rel"},
    "img": {"src", "alt", "title", "width", "data-align"},
    "div": {"class", "data-columns"},
    "figure": {"class"},
    "figcaption": {"class"},
    "code": {"class"},
    "iframe": {"src", "allow", "allowfullscreen", "title", "frameborder"},
    "video": {"controls", "poster"},
    "source": {"src", "type"},
}

URL_ATTRIBUTES = {"href", "src", "poster"}
ALLOWED_SCHEMES = {"http", "https", "mailto"}

ALLOWED_IFRAME_HOSTS = {
    "www.youtube.com",
    "youtube.com",
    "www.youtube-nocookie.com",
}

# Dropped together with their text content
DISCARDED_TAGS = {"script", "style", "textarea", "option", "noscript", "head", "title"}


def _url_allowed(value: str) -> bool:
    scheme = urlparse(value.strip()).scheme.lower()
    return not scheme or scheme in ALLOWED_SCHEMES


def _iframe_allowed(src: str) -> bool:
    parsed = urlparse(src.strip())
    return parsed.scheme in ("http", "https") and parsed.hostname in ALLOWED_IFRAME_HOSTS


def sanitize_rich_text(html: str) -> str:
    soup = BeautifulSoup(html or "", "html.parser")

    for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
        comment.extract()

    for tag in soup.find_all(sorted(DISCARDED_TAGS)):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue

        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        if tag.name == "iframe" and not _iframe_allowed(tag.get("src", "")):
            tag.decompose()
            continue

        allowed = ALLOWED_ATTRIBUTES.get(tag.name, set())
        for attr in list(tag.attrs):
            value = tag.attrs[attr]
            if attr not in allowed:
                del tag.attrs[attr]
            elif attr in URL_ATTRIBUTES and isinstance(value, str) and not _url_allowed(value):
                del tag.attrs[attr]

        if tag.name == "a":
            tag["rel"] = "noreferrer"
            tag["target"] = "_blank"

    return str(soup)

from urllib.parse import urlsplit
from bs4 import BeautifulSoup, Comment
from markupsafe import escape
from subpage.models.course_section import FORMAT_HTML, FORMAT_PLAIN

# Removed together with their content
DROPPED_TAGS = (
    "script", "style", "iframe", "frame", "frameset", "object", "embed",
    "applet", "form", "input", "button", "textarea", "select", "meta",
    "link", "base", "svg", "math", "template", "noscript",
)

ALLOWED_TAGS = {
    "a", "abbr", "b", "blockquote", "br", "caption", "code", "dd", "div",
    "dl", "dt", "em", "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img",
    "li", "ol", "p", "pre", "s", "small", "span", "strong", "sub", "sup",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "u", "ul",
}

ALLOWED_ATTRIBUTES = {
    "*": {"title", "lang", "dir"},
    "a": {"href", "target", "rel"},
    "img": {"src", "alt", "width", "height"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan", "scope"},
}

URL_ATTRIBUTES = {"href", "src"}
ALLOWED_SCHEMES = {"", "http", "https", "mailto"}


def _safe_url(value) -> bool:
    compact = "".join(ch for ch in str(value) if ch.isprintable() and not ch.isspace())
    try:
        scheme = urlsplit(compact).scheme
    except ValueError:
        return False
    return scheme.lower() in ALLOWED_SCHEMES


def _parse(value) -> BeautifulSoup:
    soup = BeautifulSoup(str(value), "html.parser")
    tag = soup.find(DROPPED_TAGS)
    while tag is not None:
        tag.decompose()
        tag = soup.find(DROPPED_TAGS)
    return soup


def clean_html(value) -> str:
    """
    Reduces HTML to an allow-list of tags and attributes.

    Unknown tags are unwrapped (their text stays), event handler attributes
    and non-web URLs are dropped. Text is re-serialized escaped, so markup
    hidden in text can never come back as a tag.
    """
    soup = _parse(value)

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
            continue

        allowed = ALLOWED_ATTRIBUTES["*"] | ALLOWED_ATTRIBUTES.get(tag.name, set())
        for attr in list(tag.attrs):
            if attr not in allowed:
                del tag[attr]
            elif attr in URL_ATTRIBUTES and not _safe_url(tag[attr]):
                del tag[attr]

    return str(soup)


def format_string(value) -> str:
    """
    Single-line display string: tags dropped, whitespace collapsed, escaped.
    """
    if not value:
        return ""
    text = _parse(value).get_text()
    text = " ".join(text.split())
    return str(escape(text))


def format_text(value, text_format=FORMAT_HTML) -> str:
    """
    Rich text for a summary. HTML is cleaned down to safe markup;
    plain text is escaped and line breaks become <br />.
    """
    if not value:
        return ""
    if text_format == FORMAT_PLAIN:
        return str(escape(value)).replace("\r\n", "\n").replace("\n", "<br />\n")
    return clean_html(value)

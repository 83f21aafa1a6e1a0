"""Sanitization of pasted HTML.

Two halves live here:

- basic_sanitize() is a generic cleaner standing in for the host editor's own
  sanitizer (the in-memory editor and the CLI use it).
- repair_markup() patches the *serialized* output of whatever sanitizer the
  host provides. It is regex based because that output is opaque text, not a
  tree this package controls.
"""

import re

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, ProcessingInstruction

# Elements removed together with their content
DROP_TAGS = ["script", "style", "meta", "link", "title", "head", "xml"]

# Elements replaced by their content
UNWRAP_TAGS = frozenset(["font", "html", "body"])

# Remove "type" from list tags, keeping any other attributes.
LIST_TYPE_RE = re.compile(r'(<[ou]l\b[^>]*?)\s+type=(["\'])[^"\']*\2', re.IGNORECASE)
# bs4 writes style='...' when the value holds a double quote, so the style
# patterns accept either quote and never run past the closing one.
# Remove line-height:normal.
LINE_HEIGHT_RE = re.compile(
    r'(<[^>]+?\sstyle=(["\'])(?:(?!\2)[\s\S])*?)(?<![\w-])line-height:\s*normal\s*;?', re.IGNORECASE
)
# Remove tab-stops left behind by the sanitizer.
TAB_STOPS_RE = re.compile(r'(<[^>]+?\sstyle=(["\'])(?:(?!\2)[\s\S])*?)(?<![\w-])tab-stops:[^;"\']*;?', re.IGNORECASE)
# Remove empty style attributes.
EMPTY_STYLE_RE = re.compile(r'(<[^>]+?)\s+style=(["\'])[\s;]*\2', re.IGNORECASE)
# Style attribute values, for quote normalization.
STYLE_VALUE_RE = re.compile(r'(<[^>]+?\sstyle=)(["\'])((?:(?!\2)[\s\S])+)\2', re.IGNORECASE)


def repair_markup(html: str) -> str:
    """Patch sanitizer output that still carries Word leftovers.

    - Drops type attributes from ul/ol
    - Drops line-height:normal and tab-stops declarations
    - Drops style attributes left empty
    - Replaces &quot; inside style values with the quote the value is not
      wrapped in, since an escaped quote there breaks later attribute parsing
    """
    if not html:
        return ""

    html = LIST_TYPE_RE.sub(r"\1", html)
    html = LINE_HEIGHT_RE.sub(r"\1", html)
    html = TAB_STOPS_RE.sub(r"\1", html)
    html = EMPTY_STYLE_RE.sub(r"\1", html)
    html = STYLE_VALUE_RE.sub(_unescape_style_quotes, html)
    return html


def _unescape_style_quotes(match: re.Match) -> str:
    prefix, quote, value = match.groups()
    replacement = "'" if quote == '"' else '"'
    value = re.sub("&quot;", replacement, value, flags=re.IGNORECASE)
    return f"{prefix}{quote}{value}{quote}"


def basic_sanitize(html: str) -> str:
    """Generic HTML cleanup of the kind a host editor applies to any paste.

    - Removes comments, conditional sections and doctypes
    - Removes script/style/meta/link/title/head/xml elements entirely
    - Unwraps font tags and namespaced Office tags (o:p, v:shape, w:...)
    - Removes on* handlers, javascript: URLs, lang attributes and Mso* classes
    """
    if not html or not html.strip():
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for node in soup.find_all(string=_is_markup_noise):
        node.extract()

    for tag in soup.find_all(DROP_TAGS):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if ":" in tag.name or tag.name in UNWRAP_TAGS:
            tag.unwrap()
            continue
        _clean_attributes(tag)

    return soup.decode()


def _is_markup_noise(text) -> bool:
    return isinstance(text, (Comment, Declaration, Doctype, ProcessingInstruction))


def _clean_attributes(tag) -> None:
    for attr in list(tag.attrs.keys()):
        low = attr.lower()
        if low.startswith("on") or low in ("lang", "xml:lang"):
            del tag[attr]
            continue
        if low in ("href", "src"):
            value = tag[attr]
            if isinstance(value, list):
                value = value[0] if value else ""
            if value.strip().lower().startswith("javascript:"):
                del tag[attr]
            continue
        if low == "class":
            classes = tag[attr]
            if isinstance(classes, str):
                classes = classes.split()
            kept = [c for c in classes if not c.lower().startswith("mso")]
            if kept:
                tag[attr] = kept
            else:
                del tag[attr]

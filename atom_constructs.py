"""
Atom constructs shared by feeds and entries: text, person, category, link
and generator.

Each construct validates its fields on assignment and knows how to fill in a
caller-supplied XML element (render_into). Optional fields raise NotPresent
when read while unset; use the matching has_<field>() query to check first.
"""
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Optional

from atom_errors import InvalidInput, NotPresent
from atom_validation import (
    XHTML_NAMESPACE,
    is_language_tag,
    is_mime_type,
    parse_xhtml_div,
    require_email,
    require_language_tag,
    require_length,
    require_mime_type,
    require_non_empty,
    require_string,
)


# Prefix for embedded xhtml divs instead of a generated ns0
ET.register_namespace('xhtml', XHTML_NAMESPACE)


class TextType(str, Enum):
    """Encoding of a text construct or of inline content."""
    TEXT = 'text'
    HTML = 'html'
    XHTML = 'xhtml'


def to_text_type(field: str, value, allowed=tuple(TextType)) -> TextType:
    try:
        text_type = TextType(value)
    except ValueError:
        raise InvalidInput(field, value, "is not a valid encoding type") from None
    if text_type not in allowed:
        raise InvalidInput(field, value, "is not an allowed encoding type")
    return text_type


class Text:
    """Human readable text: title, subtitle, summary, rights.

    xhtml text must be a single div; it is embedded as markup, not escaped.

    https://tools.ietf.org/html/rfc4287#section-3.1
    """

    def __init__(self, text: str, type=TextType.TEXT):
        self._type = TextType.TEXT
        self.text = text
        self.type = type

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, text: str):
        if self._type is TextType.XHTML:
            parse_xhtml_div('text', text)
        self._text = require_string('text', text)

    @property
    def type(self) -> TextType:
        return self._type

    @type.setter
    def type(self, type):
        text_type = to_text_type('type', type)
        if text_type is TextType.XHTML:
            parse_xhtml_div('text', self._text)
        self._type = text_type

    def render_into(self, element: ET.Element) -> ET.Element:
        if self.type is TextType.XHTML:
            element.append(parse_xhtml_div('text', self.text))
        else:
            element.text = self.text
        if self.type is not TextType.TEXT:
            element.set('type', self.type.value)
        return element

    def __repr__(self):
        return f"Text({self.text!r}, type={self.type.value!r})"


class Person:
    """An author or contributor."""

    def __init__(self, name: str, uri: Optional[str] = None, email: Optional[str] = None):
        self.name = name
        self.uri = uri
        self.email = email

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str):
        self._name = require_non_empty('name', name)

    @property
    def uri(self) -> str:
        if not self.has_uri():
            raise NotPresent('Person', 'uri')
        return self._uri

    @uri.setter
    def uri(self, uri: Optional[str]):
        self._uri = None if uri is None else require_non_empty('uri', uri)

    def has_uri(self) -> bool:
        return self._uri is not None

    @property
    def email(self) -> str:
        if not self.has_email():
            raise NotPresent('Person', 'email')
        return self._email

    @email.setter
    def email(self, email: Optional[str]):
        self._email = None if email is None else require_email('email', email)

    def has_email(self) -> bool:
        return self._email is not None

    def render_into(self, element: ET.Element) -> ET.Element:
        ET.SubElement(element, 'name').text = self.name
        if self.has_uri():
            ET.SubElement(element, 'uri').text = self.uri
        if self.has_email():
            ET.SubElement(element, 'email').text = self.email
        return element

    def __repr__(self):
        return f"Person({self.name!r}, uri={self._uri!r}, email={self._email!r})"


class Category:
    """A category the feed or entry belongs to."""

    def __init__(self, term: str, scheme: Optional[str] = None, label: Optional[str] = None):
        self.term = term
        self.scheme = scheme
        self.label = label

    @property
    def term(self) -> str:
        return self._term

    @term.setter
    def term(self, term: str):
        self._term = require_non_empty('term', term)

    @property
    def scheme(self) -> str:
        if not self.has_scheme():
            raise NotPresent('Category', 'scheme')
        return self._scheme

    @scheme.setter
    def scheme(self, scheme: Optional[str]):
        self._scheme = None if scheme is None else require_non_empty('scheme', scheme)

    def has_scheme(self) -> bool:
        return self._scheme is not None

    @property
    def label(self) -> str:
        if not self.has_label():
            raise NotPresent('Category', 'label')
        return self._label

    @label.setter
    def label(self, label: Optional[str]):
        self._label = None if label is None else require_non_empty('label', label)

    def has_label(self) -> bool:
        return self._label is not None

    def render_into(self, element: ET.Element) -> ET.Element:
        element.set('term', self.term)
        if self.has_scheme():
            element.set('scheme', self.scheme)
        if self.has_label():
            element.set('label', self.label)
        return element

    def __repr__(self):
        return f"Category({self.term!r}, scheme={self._scheme!r}, label={self._label!r})"


class Link:
    """A reference from a feed or entry to a web resource.

    Any non-empty relation is accepted: besides the registered names below,
    RFC 4287 allows IRIs and future IANA-registered relation types.
    """

    REL_ALTERNATE = 'alternate'
    REL_ENCLOSURE = 'enclosure'
    REL_RELATED = 'related'
    REL_SELF = 'self'
    REL_VIA = 'via'

    def __init__(self, href: str, rel: Optional[str] = None, type: Optional[str] = None,
                 hreflang: Optional[str] = None, title: Optional[str] = None,
                 length: Optional[int] = None):
        self.href = href
        self.rel = rel
        self.type = type
        self.hreflang = hreflang
        self.title = title
        self.length = length

    @property
    def href(self) -> str:
        return self._href

    @href.setter
    def href(self, href: str):
        self._href = require_non_empty('href', href)

    @property
    def rel(self) -> str:
        if not self.has_rel():
            raise NotPresent('Link', 'rel')
        return self._rel

    @rel.setter
    def rel(self, rel: Optional[str]):
        self._rel = None if rel is None else require_non_empty('rel', rel)

    def has_rel(self) -> bool:
        return self._rel is not None

    @property
    def type(self) -> str:
        """MIME media type of the linked resource"""
        if not self.has_type():
            raise NotPresent('Link', 'type')
        return self._type

    @type.setter
    def type(self, type: Optional[str]):
        self._type = None if type is None else require_mime_type('type', type)

    def has_type(self) -> bool:
        return is_mime_type(self._type)

    @property
    def hreflang(self) -> str:
        """Language of the linked resource"""
        if not self.has_hreflang():
            raise NotPresent('Link', 'hreflang')
        return self._hreflang

    @hreflang.setter
    def hreflang(self, hreflang: Optional[str]):
        self._hreflang = None if hreflang is None else require_language_tag('hreflang', hreflang)

    def has_hreflang(self) -> bool:
        return is_language_tag(self._hreflang)

    @property
    def title(self) -> str:
        if not self.has_title():
            raise NotPresent('Link', 'title')
        return self._title

    @title.setter
    def title(self, title: Optional[str]):
        self._title = None if title is None else require_non_empty('title', title)

    def has_title(self) -> bool:
        return self._title is not None

    @property
    def length(self) -> int:
        """Advisory length of the linked content in octets"""
        if not self.has_length():
            raise NotPresent('Link', 'length')
        return self._length

    @length.setter
    def length(self, length: Optional[int]):
        self._length = None if length is None else require_length('length', length)

    def has_length(self) -> bool:
        return self._length is not None

    def render_into(self, element: ET.Element) -> ET.Element:
        element.set('href', self.href)
        if self.has_rel():
            element.set('rel', self.rel)
        if self.has_type():
            element.set('type', self.type)
        if self.has_hreflang():
            element.set('hreflang', self.hreflang)
        if self.has_title():
            element.set('title', self.title)
        if self.has_length():
            element.set('length', str(self.length))
        return element

    def __repr__(self):
        return f"Link({self.href!r}, rel={self._rel!r}, type={self._type!r})"


class Generator:
    """The agent used to generate a feed."""

    def __init__(self, name: str, uri: Optional[str] = None, version: Optional[str] = None):
        self.name = name
        self.uri = uri
        self.version = version

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str):
        self._name = require_non_empty('name', name)

    @property
    def uri(self) -> str:
        if not self.has_uri():
            raise NotPresent('Generator', 'uri')
        return self._uri

    @uri.setter
    def uri(self, uri: Optional[str]):
        self._uri = None if uri is None else require_non_empty('uri', uri)

    def has_uri(self) -> bool:
        return self._uri is not None

    @property
    def version(self) -> str:
        if not self.has_version():
            raise NotPresent('Generator', 'version')
        return self._version

    @version.setter
    def version(self, version: Optional[str]):
        self._version = None if version is None else require_non_empty('version', version)

    def has_version(self) -> bool:
        return self._version is not None

    def render_into(self, element: ET.Element) -> ET.Element:
        element.text = self.name
        if self.has_uri():
            element.set('uri', self.uri)
        if self.has_version():
            element.set('version', self.version)
        return element

    def __repr__(self):
        return f"Generator({self.name!r}, uri={self._uri!r}, version={self._version!r})"

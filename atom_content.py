"""
Entry content: inline text, html, xhtml or arbitrary (base64) payloads, or a
reference to content stored elsewhere.

https://tools.ietf.org/html/rfc4287#section-4.1.3
"""
import base64
import binascii
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Optional, Union

from atom_constructs import TextType, to_text_type
from atom_errors import InvalidInput, NotPresent
from atom_validation import (
    is_mime_type,
    parse_xhtml_div,
    require_mime_type,
    require_non_empty,
    require_string,
)


class Content(ABC):
    """Base of all content variants; not instantiable on its own."""

    @property
    @abstractmethod
    def type(self):
        ...

    @abstractmethod
    def has_type(self) -> bool:
        ...

    @abstractmethod
    def render_into(self, element: ET.Element) -> ET.Element:
        """Write this content's attributes and text into a content element"""


class InlineContent(Content):
    """Content embedded in the feed document."""

    @property
    def content(self):
        return self._content

    def render_into(self, element: ET.Element) -> ET.Element:
        element.text = self._content
        if self.has_type() and self.type != TextType.TEXT:
            content_type = self.type
            if isinstance(content_type, TextType):
                content_type = content_type.value
            element.set('type', content_type)
        return element


class TextContent(InlineContent):
    """Plain text or escaped HTML."""

    def __init__(self, content: str, type=TextType.TEXT):
        self.content = content
        self.type = type

    @InlineContent.content.setter
    def content(self, content: str):
        self._content = require_string('content', content)

    @property
    def type(self) -> TextType:
        return self._type

    @type.setter
    def type(self, type):
        self._type = to_text_type('type', type, allowed=(TextType.TEXT, TextType.HTML))

    def has_type(self) -> bool:
        return True

    def __repr__(self):
        return f"TextContent({self._content!r}, type={self._type.value!r})"


class XhtmlContent(InlineContent):
    """A single XHTML div, embedded in the content element as markup.

    The div is checked to be well-formed when assigned. Un-namespaced
    elements are placed in the XHTML namespace when rendered.

    The type is always xhtml. Assigning 'xhtml' is accepted and changes
    nothing, any other value is rejected.
    """

    def __init__(self, content: str):
        self.content = content

    @InlineContent.content.setter
    def content(self, content: str):
        parse_xhtml_div('content', content)
        self._content = content

    @property
    def type(self) -> TextType:
        return TextType.XHTML

    @type.setter
    def type(self, type):
        to_text_type('type', type, allowed=(TextType.XHTML,))

    def has_type(self) -> bool:
        return True

    def render_into(self, element: ET.Element) -> ET.Element:
        element.append(parse_xhtml_div('content', self._content))
        element.set('type', TextType.XHTML.value)
        return element

    def __repr__(self):
        return f"XhtmlContent({self._content!r})"


class OtherContent(InlineContent):
    """Arbitrary inline payload, kept base64 encoded."""

    def __init__(self, content: Union[bytes, str], type: str, is_base64_encoded: bool = False):
        self.type = type
        self.set_content(content, is_base64_encoded)

    def get_content(self, base64_decode: bool = True) -> Union[bytes, str]:
        """Return the raw payload, or its base64 form when base64_decode is False"""
        if base64_decode:
            return base64.b64decode(self._content)
        return self._content

    def set_content(self, content: Union[bytes, str], is_base64_encoded: bool = False):
        """Store a payload.

        Args:
            content: Raw bytes (str is UTF-8 encoded), or base64 text
            is_base64_encoded: If True, content is already base64. Line breaks
                and other ASCII whitespace, as in MIME-wrapped base64, are
                removed before it is checked and stored.
        """
        if isinstance(content, (bytes, bytearray)):
            raw = bytes(content)
        elif isinstance(content, str):
            if is_base64_encoded and not content.isascii():
                raise InvalidInput('content', content, "is not valid base64")
            raw = content.encode('utf-8')
        else:
            raise InvalidInput('content', content, "is neither bytes nor str")

        if not is_base64_encoded:
            self._content = base64.b64encode(raw).decode('ascii')
            return

        raw = b''.join(raw.split())
        try:
            base64.b64decode(raw, validate=True)
        except binascii.Error:
            raise InvalidInput('content', content, "is not valid base64") from None
        self._content = raw.decode('ascii')

    content = property(get_content)

    @property
    def type(self) -> str:
        """MIME media type of the payload"""
        if not self.has_type():
            raise NotPresent('OtherContent', 'type')
        return self._type

    @type.setter
    def type(self, type: str):
        self._type = require_mime_type('type', type)

    def has_type(self) -> bool:
        return is_mime_type(self._type)

    def __repr__(self):
        return f"OtherContent({self._content!r}, type={self._type!r})"


class OutOfLineContent(Content):
    """Content referenced by IRI instead of embedded."""

    def __init__(self, src: str, type: Optional[str] = None):
        self.src = src
        self.type = type

    @property
    def src(self) -> str:
        return self._src

    @src.setter
    def src(self, src: str):
        self._src = require_non_empty('src', src)

    @property
    def type(self) -> str:
        if not self.has_type():
            raise NotPresent('OutOfLineContent', 'type')
        return self._type

    @type.setter
    def type(self, type: Optional[str]):
        self._type = None if type is None else require_mime_type('type', type)

    def has_type(self) -> bool:
        return is_mime_type(self._type)

    def render_into(self, element: ET.Element) -> ET.Element:
        element.set('src', self.src)
        if self.has_type():
            element.set('type', self.type)
        return element

    def __repr__(self):
        return f"OutOfLineContent({self._src!r}, type={self._type!r})"

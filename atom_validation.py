"""
Field-level acceptance rules shared by the Atom constructs.
"""
import re
import xml.etree.ElementTree as ET
from datetime import datetime

from email_validator import EmailNotValidError, validate_email

from atom_errors import InvalidInput

_MIME_TOKEN = r"[A-Za-z0-9!#$&.+\-^_]{1,127}"
MIME_PATTERN = re.compile(rf"^{_MIME_TOKEN}/{_MIME_TOKEN}$")
LANG_PATTERN = re.compile(r"^[A-Za-z]{1,8}(-[A-Za-z0-9]{1,8})?$")
# Everything outside the XML 1.0 Char production, lone surrogates included
NON_XML_CHARS = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')

XHTML_NAMESPACE = 'http://www.w3.org/1999/xhtml'


def require_string(field: str, value) -> str:
    """Accept any str XML can hold, including the empty one"""
    if not isinstance(value, str):
        raise InvalidInput(field, value, "is not a string")
    if NON_XML_CHARS.search(value):
        raise InvalidInput(field, value, "contains characters not allowed in XML")
    return value


def require_non_empty(field: str, value) -> str:
    require_string(field, value)
    if value == "":
        raise InvalidInput(field, value, "must not be empty")
    return value


def is_mime_type(value) -> bool:
    return isinstance(value, str) and MIME_PATTERN.fullmatch(value) is not None


def require_mime_type(field: str, value) -> str:
    if not is_mime_type(value):
        raise InvalidInput(field, value, "is not a valid MIME type")
    return value


def is_language_tag(value) -> bool:
    return isinstance(value, str) and LANG_PATTERN.fullmatch(value) is not None


def require_language_tag(field: str, value) -> str:
    if not is_language_tag(value):
        raise InvalidInput(field, value, "is not a valid language tag")
    return value


def is_email(value) -> bool:
    if not isinstance(value, str) or value == "":
        return False
    try:
        # Syntax only: no DNS lookups, special-use domains such as .test allowed
        validate_email(value, check_deliverability=False, globally_deliverable=False,
                       test_environment=True)
    except EmailNotValidError:
        return False
    return True


def require_email(field: str, value) -> str:
    if not is_email(value):
        raise InvalidInput(field, value, "is not a valid email address")
    return value


def require_length(field: str, value) -> int:
    # bool is an int subclass but never a byte count
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidInput(field, value, "is not a valid length")
    return value


def require_timestamp(field: str, value) -> datetime:
    """Accept timezone-aware datetimes only"""
    if not isinstance(value, datetime):
        raise InvalidInput(field, value, "is not a datetime")
    if value.tzinfo is None or value.utcoffset() is None:
        raise InvalidInput(field, value, "has no timezone")
    return value


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC 3339 date-time, e.g. 2005-07-31T12:29:29+00:00"""
    return value.replace(microsecond=0).isoformat()


def parse_xhtml_div(field: str, value) -> ET.Element:
    """Parse a single XHTML div, placing un-namespaced elements in the XHTML namespace"""
    require_string(field, value)
    try:
        div = ET.fromstring(value)
    except ET.ParseError:
        raise InvalidInput(field, value, "is not well-formed XML") from None
    if div.tag not in ('div', f'{{{XHTML_NAMESPACE}}}div'):
        raise InvalidInput(field, value, "is not a single div element")
    for element in div.iter():
        if not element.tag.startswith('{'):
            element.tag = f'{{{XHTML_NAMESPACE}}}{element.tag}'
    return div

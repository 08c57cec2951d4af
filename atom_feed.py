"""
Atom feeds and entries, and their serialization to an XML document.

https://tools.ietf.org/html/rfc4287#section-4.1
"""
import logging
import xml.dom.minidom
import xml.etree.ElementTree as ET
from datetime import datetime
from typing import Iterable, Optional

from atom_config import get_render_settings
from atom_constructs import Category, Generator, Link, Person, Text
from atom_content import Content
from atom_errors import InvalidInput, NotPresent
from atom_validation import format_timestamp, require_non_empty, require_timestamp
from object_set import ObjectSet

logger = logging.getLogger(__name__)

ATOM_NAMESPACE = 'http://www.w3.org/2005/Atom'
MIME_TYPE = 'application/atom+xml'


def _require_instance(field: str, value, cls):
    if not isinstance(value, cls):
        raise InvalidInput(field, value, f"is not a {cls.__name__}")
    return value


def _object_set(field: str, items: Optional[Iterable], cls) -> ObjectSet:
    members = ObjectSet()
    for item in items or ():
        members.add(_require_instance(field, item, cls))
    return members


def _append_people(parent: ET.Element, tag: str, people: Iterable[Person]):
    for person in people:
        person.render_into(ET.SubElement(parent, tag))


class _Document:
    """Fields feeds and entries have in common.

    Collections keep insertion order and hold each object at most once.
    """

    _kind = 'Document'

    def _init_common(self, id, title, updated, authors, links, categories, contributors, rights):
        self.id = id
        self.title = title
        self.updated = updated
        self.authors = authors
        self.links = links
        self.categories = categories
        self.contributors = contributors
        self.rights = rights

    @property
    def id(self) -> str:
        """Universally unique and permanent IRI"""
        return self._id

    @id.setter
    def id(self, id: str):
        self._id = require_non_empty('id', id)

    @property
    def title(self) -> Text:
        return self._title

    @title.setter
    def title(self, title: Text):
        self._title = _require_instance('title', title, Text)

    @property
    def updated(self) -> datetime:
        """Last time the document was modified in a significant way"""
        return self._updated

    @updated.setter
    def updated(self, updated: datetime):
        self._updated = require_timestamp('updated', updated)

    @property
    def authors(self) -> ObjectSet:
        return self._authors

    @authors.setter
    def authors(self, authors: Optional[Iterable[Person]]):
        self._authors = _object_set('authors', authors, Person)

    def add_author(self, author: Person):
        self._authors.add(_require_instance('author', author, Person))

    def remove_author(self, author: Person):
        self._authors.discard(author)

    @property
    def links(self) -> ObjectSet:
        return self._links

    @links.setter
    def links(self, links: Optional[Iterable[Link]]):
        self._links = _object_set('links', links, Link)

    def add_link(self, link: Link):
        self._links.add(_require_instance('link', link, Link))

    def remove_link(self, link: Link):
        self._links.discard(link)

    @property
    def categories(self) -> ObjectSet:
        return self._categories

    @categories.setter
    def categories(self, categories: Optional[Iterable[Category]]):
        self._categories = _object_set('categories', categories, Category)

    def add_category(self, category: Category):
        self._categories.add(_require_instance('category', category, Category))

    def remove_category(self, category: Category):
        self._categories.discard(category)

    @property
    def contributors(self) -> ObjectSet:
        return self._contributors

    @contributors.setter
    def contributors(self, contributors: Optional[Iterable[Person]]):
        self._contributors = _object_set('contributors', contributors, Person)

    def add_contributor(self, contributor: Person):
        self._contributors.add(_require_instance('contributor', contributor, Person))

    def remove_contributor(self, contributor: Person):
        self._contributors.discard(contributor)

    @property
    def rights(self) -> Text:
        """Rights held in and over the document, e.g. copyright"""
        if not self.has_rights():
            raise NotPresent(self._kind, 'rights')
        return self._rights

    @rights.setter
    def rights(self, rights: Optional[Text]):
        self._rights = None if rights is None else _require_instance('rights', rights, Text)

    def has_rights(self) -> bool:
        return self._rights is not None

    def _render_head(self, element: ET.Element):
        ET.SubElement(element, 'id').text = self.id
        self.title.render_into(ET.SubElement(element, 'title'))
        ET.SubElement(element, 'updated').text = format_timestamp(self.updated)
        _append_people(element, 'author', self.authors)

    def _render_links(self, element: ET.Element):
        for link in self.links:
            link.render_into(ET.SubElement(element, 'link'))

    def _render_classification(self, element: ET.Element):
        for category in self.categories:
            category.render_into(ET.SubElement(element, 'category'))
        _append_people(element, 'contributor', self.contributors)


class Entry(_Document):
    """A single item of a feed, e.g. one blog post.

    Args:
        id: Universally unique and permanent IRI of the entry
        title: Human readable title
        updated: Last significant modification, timezone aware
        authors, links, categories, contributors: Initial collection members
        content: Content of the entry, inline or out of line
        summary: Short summary, abstract or excerpt
        published: Time of the initial creation or first availability
        source: Metadata of the feed this entry was copied from
        rights: Rights held in and over the entry
    """

    _kind = 'Entry'

    def __init__(self, id: str, title: Text, updated: datetime,
                 authors: Optional[Iterable[Person]] = None, content: Optional[Content] = None,
                 links: Optional[Iterable[Link]] = None, summary: Optional[Text] = None,
                 categories: Optional[Iterable[Category]] = None,
                 contributors: Optional[Iterable[Person]] = None,
                 published: Optional[datetime] = None, source: Optional['Feed'] = None,
                 rights: Optional[Text] = None):
        self._init_common(id, title, updated, authors, links, categories, contributors, rights)
        self.content = content
        self.summary = summary
        self.published = published
        self.source = source

    @property
    def content(self) -> Content:
        if not self.has_content():
            raise NotPresent('Entry', 'content')
        return self._content

    @content.setter
    def content(self, content: Optional[Content]):
        self._content = None if content is None else _require_instance('content', content, Content)

    def has_content(self) -> bool:
        return self._content is not None

    @property
    def summary(self) -> Text:
        if not self.has_summary():
            raise NotPresent('Entry', 'summary')
        return self._summary

    @summary.setter
    def summary(self, summary: Optional[Text]):
        self._summary = None if summary is None else _require_instance('summary', summary, Text)

    def has_summary(self) -> bool:
        return self._summary is not None

    @property
    def published(self) -> datetime:
        if not self.has_published():
            raise NotPresent('Entry', 'published')
        return self._published

    @published.setter
    def published(self, published: Optional[datetime]):
        self._published = None if published is None else require_timestamp('published', published)

    def has_published(self) -> bool:
        return self._published is not None

    @property
    def source(self) -> 'Feed':
        if not self.has_source():
            raise NotPresent('Entry', 'source')
        return self._source

    @source.setter
    def source(self, source: Optional['Feed']):
        self._source = None if source is None else _require_instance('source', source, Feed)

    def has_source(self) -> bool:
        return self._source is not None

    def render_into(self, element: ET.Element) -> ET.Element:
        self._render_head(element)
        if self.has_content():
            self.content.render_into(ET.SubElement(element, 'content'))
        self._render_links(element)
        if self.has_summary():
            self.summary.render_into(ET.SubElement(element, 'summary'))
        self._render_classification(element)
        if self.has_published():
            ET.SubElement(element, 'published').text = format_timestamp(self.published)
        if self.has_source():
            # Metadata only, the source feed's entries are never copied
            self.source.render_metadata_into(ET.SubElement(element, 'source'))
        if self.has_rights():
            self.rights.render_into(ET.SubElement(element, 'rights'))
        return element

    def __repr__(self):
        return f"Entry({self.id!r}, title={self.title!r})"


class Feed(_Document):
    """An Atom feed document: metadata plus an ordered set of entries.

    Args:
        id: Universally unique and permanent IRI of the feed
        title: Human readable title, often the title of the associated website
        updated: Last significant modification of the feed, timezone aware
        authors, links, categories, contributors, entries: Initial collection members
        generator: Agent used to generate the feed
        icon: IRI of a small, square image identifying the feed
        logo: IRI of an image twice as wide as tall identifying the feed
        rights: Rights held in and over the feed
        subtitle: Human readable description of the feed
    """

    _kind = 'Feed'

    def __init__(self, id: str, title: Text, updated: datetime,
                 authors: Optional[Iterable[Person]] = None, links: Optional[Iterable[Link]] = None,
                 categories: Optional[Iterable[Category]] = None,
                 contributors: Optional[Iterable[Person]] = None,
                 generator: Optional[Generator] = None, icon: Optional[str] = None,
                 logo: Optional[str] = None, rights: Optional[Text] = None,
                 subtitle: Optional[Text] = None, entries: Optional[Iterable[Entry]] = None):
        self._init_common(id, title, updated, authors, links, categories, contributors, rights)
        self.generator = generator
        self.icon = icon
        self.logo = logo
        self.subtitle = subtitle
        self.entries = entries

    @property
    def generator(self) -> Generator:
        if not self.has_generator():
            raise NotPresent('Feed', 'generator')
        return self._generator

    @generator.setter
    def generator(self, generator: Optional[Generator]):
        self._generator = None if generator is None else _require_instance('generator', generator, Generator)

    def has_generator(self) -> bool:
        return self._generator is not None

    @property
    def icon(self) -> str:
        if not self.has_icon():
            raise NotPresent('Feed', 'icon')
        return self._icon

    @icon.setter
    def icon(self, icon: Optional[str]):
        self._icon = None if icon is None else require_non_empty('icon', icon)

    def has_icon(self) -> bool:
        return self._icon is not None

    @property
    def logo(self) -> str:
        if not self.has_logo():
            raise NotPresent('Feed', 'logo')
        return self._logo

    @logo.setter
    def logo(self, logo: Optional[str]):
        self._logo = None if logo is None else require_non_empty('logo', logo)

    def has_logo(self) -> bool:
        return self._logo is not None

    @property
    def subtitle(self) -> Text:
        if not self.has_subtitle():
            raise NotPresent('Feed', 'subtitle')
        return self._subtitle

    @subtitle.setter
    def subtitle(self, subtitle: Optional[Text]):
        self._subtitle = None if subtitle is None else _require_instance('subtitle', subtitle, Text)

    def has_subtitle(self) -> bool:
        return self._subtitle is not None

    @property
    def entries(self) -> ObjectSet:
        return self._entries

    @entries.setter
    def entries(self, entries: Optional[Iterable[Entry]]):
        self._entries = _object_set('entries', entries, Entry)

    def add_entry(self, entry: Entry):
        self._entries.add(_require_instance('entry', entry, Entry))

    def remove_entry(self, entry: Entry):
        self._entries.discard(entry)

    def render_metadata_into(self, element: ET.Element) -> ET.Element:
        """Write the feed-level children, everything except the entries"""
        self._render_head(element)
        self._render_links(element)
        self._render_classification(element)
        if self.has_generator():
            self.generator.render_into(ET.SubElement(element, 'generator'))
        if self.has_icon():
            ET.SubElement(element, 'icon').text = self.icon
        if self.has_logo():
            ET.SubElement(element, 'logo').text = self.logo
        if self.has_rights():
            self.rights.render_into(ET.SubElement(element, 'rights'))
        if self.has_subtitle():
            self.subtitle.render_into(ET.SubElement(element, 'subtitle'))
        return element

    def to_xml(self) -> ET.Element:
        """Convert the feed to an XML element tree rooted at <feed>."""
        feed = ET.Element('feed', {'xmlns': ATOM_NAMESPACE})
        self.render_metadata_into(feed)
        for entry in self.entries:
            entry.render_into(ET.SubElement(feed, 'entry'))
        return feed

    def render(self, pretty_print: Optional[bool] = None) -> str:
        """Serialize the feed to an Atom XML document.

        Note that an Atom document should be served as application/atom+xml.

        Args:
            pretty_print: If True, format the XML with indentation. Defaults to
                the ATOM_PRETTY_PRINT setting.

        Returns:
            str: The XML document, including the XML declaration
        """
        settings = get_render_settings()
        if pretty_print is None:
            pretty_print = settings.pretty_print

        logger.debug(f"Rendering feed {self.id} with {len(self.entries)} entries, pretty_print={pretty_print}")
        xml_bytes = ET.tostring(self.to_xml(), encoding='utf-8', xml_declaration=True)

        if pretty_print:
            xml_bytes = xml.dom.minidom.parseString(xml_bytes).toprettyxml(
                indent=settings.indent, encoding='utf-8')

        return xml_bytes.decode('utf-8')

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"Feed({self.id!r}, title={self.title!r}, entries={len(self.entries)})"

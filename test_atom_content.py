"""Unit tests for atom_content."""
import base64
import unittest
import xml.etree.ElementTree as ET

from atom_constructs import TextType
from atom_content import Content, OtherContent, OutOfLineContent, TextContent, XhtmlContent
from atom_errors import InvalidInput, NotPresent

XHTML = "http://www.w3.org/1999/xhtml"


class TestContent(unittest.TestCase):
    def test_base_is_abstract(self):
        with self.assertRaises(TypeError):
            Content()

    def test_text_content(self):
        content = TextContent("Hello")
        self.assertIs(content.type, TextType.TEXT)
        self.assertTrue(content.has_type())
        element = content.render_into(ET.Element('content'))
        self.assertEqual(element.text, "Hello")
        self.assertNotIn('type', element.attrib)

    def test_html_content(self):
        element = TextContent("<p>Hi</p>", "html").render_into(ET.Element('content'))
        self.assertEqual(element.text, "<p>Hi</p>")
        self.assertEqual(element.attrib['type'], "html")

    def test_text_content_rejects_xhtml(self):
        content = TextContent("Hello", TextType.HTML)
        with self.assertRaises(InvalidInput):
            content.type = TextType.XHTML
        self.assertIs(content.type, TextType.HTML)

    def test_xhtml_content(self):
        """Test that the xhtml div is embedded as a child element and always typed xhtml."""
        markup = '<div xmlns="http://www.w3.org/1999/xhtml"><p>Hi</p></div>'
        content = XhtmlContent(markup)
        self.assertIs(content.type, TextType.XHTML)
        self.assertEqual(content.content, markup)
        element = content.render_into(ET.Element('content'))
        self.assertIsNone(element.text)
        self.assertEqual(element.attrib['type'], "xhtml")
        self.assertEqual(len(element), 1)
        div = element[0]
        self.assertEqual(div.tag, f'{{{XHTML}}}div')
        self.assertEqual(div.find(f'{{{XHTML}}}p').text, "Hi")

    def test_xhtml_content_without_namespace(self):
        element = XhtmlContent("<div><p>Hi <b>there</b></p></div>").render_into(ET.Element('content'))
        self.assertEqual([child.tag for child in element.iter()][1:],
                         [f'{{{XHTML}}}div', f'{{{XHTML}}}p', f'{{{XHTML}}}b'])

    def test_xhtml_content_serializes_as_markup(self):
        element = XhtmlContent("<div><p>Hi</p></div>").render_into(ET.Element('content'))
        xml_str = ET.tostring(element, encoding='unicode')
        self.assertNotIn('&lt;', xml_str)
        self.assertIn('<xhtml:p>Hi</xhtml:p>', xml_str)

    def test_xhtml_content_must_be_one_div(self):
        """Test that malformed or non-div markup is rejected on assignment."""
        content = XhtmlContent("<div>ok</div>")
        for value in ["<p>Hi</p>", "<div><p>Hi</div>", "<div/><div/>", "plain text", ""]:
            with self.assertRaises(InvalidInput):
                content.content = value
        self.assertEqual(content.content, "<div>ok</div>")
        with self.assertRaises(InvalidInput):
            XhtmlContent("<span>Hi</span>")

    def test_xhtml_type_is_fixed(self):
        content = XhtmlContent("<div/>")
        content.type = "xhtml"
        self.assertIs(content.type, TextType.XHTML)
        for value in ["html", "text", "image/png"]:
            with self.assertRaises(InvalidInput):
                content.type = value
        self.assertIs(content.type, TextType.XHTML)

    def test_other_content_round_trip(self):
        """Test that raw bytes survive encoding and decoding."""
        payload = bytes(range(256))
        content = OtherContent(payload, "application/octet-stream")
        self.assertEqual(content.get_content(base64_decode=True), payload)
        self.assertEqual(content.get_content(base64_decode=False), base64.b64encode(payload).decode('ascii'))
        self.assertEqual(content.content, payload)

    def test_other_content_already_encoded(self):
        encoded = base64.b64encode(b"\x89PNG").decode('ascii')
        content = OtherContent(encoded, "image/png", is_base64_encoded=True)
        self.assertEqual(content.get_content(base64_decode=False), encoded)
        self.assertEqual(content.get_content(), b"\x89PNG")

    def test_other_content_accepts_wrapped_base64(self):
        """Test that line breaks in MIME-wrapped base64 are dropped."""
        content = OtherContent("aGVs\nbG8=", "text/plain", is_base64_encoded=True)
        self.assertEqual(content.get_content(), b"hello")
        self.assertEqual(content.get_content(base64_decode=False), "aGVsbG8=")
        content.set_content(b"aGVs\r\n bG8=\n", is_base64_encoded=True)
        self.assertEqual(content.get_content(), b"hello")
        element = content.render_into(ET.Element('content'))
        self.assertEqual(element.text, "aGVsbG8=")

    def test_other_content_set_content(self):
        content = OtherContent(b"one", "text/csv")
        content.set_content(b"two")
        self.assertEqual(content.get_content(), b"two")
        content.set_content("dGhyZWU=", is_base64_encoded=True)
        self.assertEqual(content.get_content(), b"three")
        with self.assertRaises(InvalidInput):
            content.set_content("not base64!", is_base64_encoded=True)
        self.assertEqual(content.get_content(), b"three")

    def test_other_content_type(self):
        content = OtherContent(b"x", "image/png")
        self.assertTrue(content.has_type())
        with self.assertRaises(InvalidInput):
            content.type = "png"
        self.assertEqual(content.type, "image/png")
        with self.assertRaises(InvalidInput):
            OtherContent(b"x", None)

    def test_render_other_content(self):
        element = OtherContent(b"hello", "application/octet-stream").render_into(ET.Element('content'))
        self.assertEqual(element.text, "aGVsbG8=")
        self.assertEqual(element.attrib['type'], "application/octet-stream")

    def test_out_of_line_content(self):
        content = OutOfLineContent("https://example.org/video.mp4")
        self.assertFalse(content.has_type())
        with self.assertRaises(NotPresent):
            content.type
        element = content.render_into(ET.Element('content'))
        self.assertEqual(element.attrib, {'src': "https://example.org/video.mp4"})
        self.assertIsNone(element.text)

        content.type = "video/mp4"
        element = content.render_into(ET.Element('content'))
        self.assertEqual(element.attrib, {'src': "https://example.org/video.mp4", 'type': "video/mp4"})

    def test_out_of_line_rejects_invalid(self):
        with self.assertRaises(InvalidInput):
            OutOfLineContent("")
        with self.assertRaises(InvalidInput):
            OutOfLineContent("https://example.org/", type="video")


if __name__ == '__main__':
    unittest.main()

# tests/test_xml_tree.py

"""Tests for the XML to plain-tree conversion."""

import unittest

from lxml import etree

from src.parsers.xml_tree import parse_xml

GOOGLE_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:g="http://base.google.com/ns/1.0">
  <channel>
    <title>Loja</title>
    <item>
      <g:id>00123</g:id>
      <title>Ração Premium 10kg</title>
      <g:price currency="BRL">199.90</g:price>
      <g:availability>in stock</g:availability>
    </item>
    <item>
      <g:id>124</g:id>
      <title><![CDATA[Ração Filhote]]></title>
      <g:price>89,90 BRL</g:price>
    </item>
  </channel>
</rss>
"""


class TestParseXml(unittest.TestCase):
    """parse_xml() unit tests."""

    def setUp(self) -> None:
        self.tree = parse_xml(GOOGLE_FEED)

    def test_root_key_is_root_tag(self) -> None:
        self.assertEqual(list(self.tree), ["rss"])

    def test_root_attributes_prefixed(self) -> None:
        self.assertEqual(self.tree["rss"]["@_version"], 2.0)

    def test_repeated_tags_become_list(self) -> None:
        items = self.tree["rss"]["channel"]["item"]
        self.assertIsInstance(items, list)
        self.assertEqual(len(items), 2)

    def test_namespace_prefix_kept(self) -> None:
        first = self.tree["rss"]["channel"]["item"][0]
        self.assertIn("g:availability", first)
        self.assertEqual(first["g:availability"], "in stock")

    def test_leading_zero_stays_text(self) -> None:
        first = self.tree["rss"]["channel"]["item"][0]
        self.assertEqual(first["g:id"], "00123")

    def test_numeric_text_coerced(self) -> None:
        second = self.tree["rss"]["channel"]["item"][1]
        self.assertEqual(second["g:id"], 124)

    def test_attribute_element_keeps_text(self) -> None:
        first = self.tree["rss"]["channel"]["item"][0]
        self.assertEqual(
            first["g:price"],
            {"@_currency": "BRL", "#text": 199.9},
        )

    def test_cdata_text_read(self) -> None:
        second = self.tree["rss"]["channel"]["item"][1]
        self.assertEqual(second["title"], "Ração Filhote")

    def test_document_order_preserved(self) -> None:
        first = self.tree["rss"]["channel"]["item"][0]
        self.assertEqual(
            list(first),
            ["g:id", "title", "g:price", "g:availability"],
        )

    def test_empty_element_is_empty_string(self) -> None:
        tree = parse_xml("<items><item><name/></item></items>")
        self.assertEqual(tree["items"]["item"]["name"], "")

    def test_malformed_xml_raises(self) -> None:
        with self.assertRaises(etree.XMLSyntaxError):
            parse_xml("<rss><channel></rss>")

    def test_comment_inside_text_keeps_text(self) -> None:
        tree = parse_xml(
            "<rss><channel><item>"
            "<title><!-- promo -->Racao X</title><price>10</price>"
            "</item></channel></rss>"
        )
        item = tree["rss"]["channel"]["item"]
        self.assertEqual(item["title"], "Racao X")
        self.assertEqual(item["price"], 10)

    def test_internal_entity_expanded(self) -> None:
        tree = parse_xml(
            '<!DOCTYPE items [<!ENTITY reg "&#174;">]>'
            "<items><item><title>Acme&reg; Racao</title></item></items>"
        )
        self.assertEqual(tree["items"]["item"]["title"], "Acme® Racao")

    def test_mixed_content_keeps_all_text(self) -> None:
        tree = parse_xml(
            "<items><item><title>Acme <b>Gold</b> Racao</title></item></items>"
        )
        title = tree["items"]["item"]["title"]
        self.assertEqual(title, {"b": "Gold", "#text": "Acme Racao"})

    def test_byte_order_mark_ignored(self) -> None:
        tree = parse_xml("\ufeff<products><product/></products>")
        self.assertIn("products", tree)


if __name__ == "__main__":
    unittest.main()

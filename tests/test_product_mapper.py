# tests/test_product_mapper.py

"""Tests for mapping raw feed items to Product objects."""

import math
import unittest

from src.parsers.product_mapper import first_value, map_item, map_items
from src.parsers.xml_tree import parse_xml


class TestMapItem(unittest.TestCase):
    """map_item() unit tests."""

    def test_google_merchant_item(self) -> None:
        item = {
            "g:id": "SKU-1",
            "g:title": "Ração Premium",
            "g:link": "https://loja.example/p/1",
            "g:price": "199.90 BRL",
            "g:availability": "in stock",
            "g:brand": "Acme",
            "g:gtin": 7891234567890,
            "g:image_link": "https://loja.example/1.jpg",
            "g:product_type": "Pet > Ração",
        }
        product = map_item(item)
        self.assertEqual(product.id, "SKU-1")
        self.assertEqual(product.title, "Ração Premium")
        self.assertEqual(product.link, "https://loja.example/p/1")
        self.assertEqual(product.price, 199.9)
        self.assertTrue(product.in_stock)
        self.assertEqual(product.brand, "Acme")
        self.assertEqual(product.gtin, "7891234567890")
        self.assertEqual(product.image, "https://loja.example/1.jpg")
        self.assertEqual(product.category, "Pet > Ração")
        self.assertIs(product.raw_source, item)

    def test_generic_item_aliases(self) -> None:
        item = {
            "sku": 42,
            "name": "Coleira",
            "url": "https://x/42",
            "sale_price": 15.5,
            "stock_status": "available",
            "image_url": "https://x/42.png",
            "category": "Acessórios",
        }
        product = map_item(item)
        self.assertEqual(product.id, "42")
        self.assertEqual(product.title, "Coleira")
        self.assertEqual(product.link, "https://x/42")
        self.assertEqual(product.price, 15.5)
        self.assertTrue(product.in_stock)
        self.assertEqual(product.image, "https://x/42.png")
        self.assertEqual(product.category, "Acessórios")

    def test_alias_priority(self) -> None:
        """Plain tags win over their g: counterparts."""
        item = {"g:title": "Google", "title": "Plain"}
        self.assertEqual(map_item(item).title, "Plain")

    def test_empty_value_falls_through(self) -> None:
        item = {"title": "  ", "g:title": "", "name": "Fallback"}
        self.assertEqual(map_item(item).title, "Fallback")

    def test_zero_price_is_a_value(self) -> None:
        item = {"price": 0, "sale_price": 9.9}
        self.assertEqual(map_item(item).price, 0.0)

    def test_missing_fields(self) -> None:
        product = map_item({"unrelated": "x"})
        self.assertIsNone(product.title)
        self.assertIsNone(product.id)
        self.assertTrue(math.isnan(product.price))
        self.assertFalse(product.in_stock)

    def test_attribute_node_text(self) -> None:
        item = {
            "title": {"#text": "Com atributo", "@_lang": "pt"},
            "price": {"#text": 10, "@_currency": "BRL"},
        }
        product = map_item(item)
        self.assertEqual(product.title, "Com atributo")
        self.assertEqual(product.price, 10.0)

    def test_repeated_tag_uses_first(self) -> None:
        item = {"title": "X", "image_link": ["https://a", "https://b"]}
        self.assertEqual(map_item(item).image, "https://a")

    def test_non_dict_item(self) -> None:
        product = map_item(3)
        self.assertIsNone(product.title)
        self.assertTrue(math.isnan(product.price))
        self.assertEqual(product.raw_source, 3)

    def test_title_whitespace_stripped(self) -> None:
        self.assertEqual(map_item({"title": "  Osso  "}).title, "Osso")

    def test_map_items_preserves_order(self) -> None:
        products = map_items([{"title": "A"}, {"title": "B"}])
        self.assertEqual([p.title for p in products], ["A", "B"])

    def test_title_survives_comment_in_feed(self) -> None:
        tree = parse_xml(
            "<rss><channel><item>"
            "<title><!-- promo -->Racao X</title><price>10</price>"
            "</item></channel></rss>"
        )
        product = map_item(tree["rss"]["channel"]["item"])
        self.assertEqual(product.title, "Racao X")
        self.assertEqual(product.price, 10.0)


class TestFirstValue(unittest.TestCase):
    """first_value() unit tests."""

    def test_returns_none_when_all_empty(self) -> None:
        self.assertIsNone(
            first_value({"a": "", "b": {}, "c": []}, ["a", "b", "c"])
        )

    def test_false_is_a_value(self) -> None:
        self.assertIs(first_value({"a": False}, ["a"]), False)


if __name__ == "__main__":
    unittest.main()

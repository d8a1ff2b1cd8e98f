"""
Tests for cookie/consent banner detection over parsed HTML.
"""

from bs4 import BeautifulSoup

from price_scanner.services.consent import is_consent_node


def find(html, name, **attrs):
    return BeautifulSoup(html, "html.parser").find(name, **attrs)


class TestConsentNode:
    """Attribute hits, or text hits backed by an action control."""

    def test_none_node(self):
        assert is_consent_node(None) is False

    def test_attribute_hit_on_ancestor(self):
        node = find('<div id="cookie-banner"><p>Hello</p></div>', "p")
        assert is_consent_node(node) is True

    def test_attribute_hit_in_class_list(self):
        node = find('<div class="cc-window cookieyes-banner"><span>Hi</span></div>', "span")
        assert is_consent_node(node) is True

    def test_text_with_button(self):
        html = '<div class="modal"><p>Używamy plików cookies</p><button>Rozumiem</button></div>'
        assert is_consent_node(find(html, "p")) is True

    def test_text_with_aria_label_link(self):
        html = '<div><p>We value your privacy</p><a href="#" aria-label="Accept cookies">x</a></div>'
        assert is_consent_node(find(html, "p")) is True

    def test_text_with_submit_input(self):
        html = '<form><span>Cookie settings</span><input type="submit" value="OK"></form>'
        assert is_consent_node(find(html, "span")) is True

    def test_text_without_action(self):
        html = '<div><p>Read our privacy policy</p></div>'
        assert is_consent_node(find(html, "p")) is False

    def test_unrelated_product_box(self):
        html = '<div class="product"><p>Cena 99,00 zł</p><button>Kup teraz</button></div>'
        assert is_consent_node(find(html, "p")) is False

    def test_ancestor_depth_limit(self):
        html = '<section id="onetrust-banner"><div><div><div><p>x</p></div></div></div></section>'
        node = find(html, "p")
        assert is_consent_node(node) is False
        assert is_consent_node(node, depth=4) is True

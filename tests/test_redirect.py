# tests/test_redirect.py

"""Tests for redirect-wrapped listing link decoding."""

import unittest

from src.scrapers.redirect import (
    RedirectDecodeError,
    decode_detail_url,
    has_redirect_marker,
    is_absolute_url,
)


class TestDecodeDetailUrl(unittest.TestCase):
    """decode_detail_url behaviour."""

    def test_wrapped_link_is_decoded(self) -> None:
        """The part after 'r=' is percent-decoded."""
        link = ".../p/foo?r=https%3A%2F%2Fexample.com%2Fbar"
        self.assertEqual(
            decode_detail_url(link), "https://example.com/bar"
        )

    def test_direct_link_unchanged(self) -> None:
        """Links without the marker come back untouched."""
        link = "https://www.tokopedia.com/shop/phone-x?extParam=ivf%3Dfalse"
        self.assertEqual(decode_detail_url(link), link)

    def test_decoding_is_identity_on_decoded_output(self) -> None:
        """Decoding an already-decoded URL without the marker is a no-op."""
        once = decode_detail_url(
            "https://ta.example.com/click?r=https%3A%2F%2Fexample.com%2Fbar"
        )
        self.assertEqual(decode_detail_url(once), once)

    def test_first_marker_wins(self) -> None:
        """Everything after the first 'r=' is the wrapped target."""
        link = (
            "https://ta.example.com/v1/clicks?r="
            "https%3A%2F%2Fshop.example.com%2Fp%3Fr%3D1"
        )
        self.assertEqual(
            decode_detail_url(link), "https://shop.example.com/p?r=1"
        )

    def test_plus_decodes_to_space(self) -> None:
        """Query-unescape semantics turn '+' into a space."""
        link = "x?r=https%3A%2F%2Fexample.com%2Fa+b"
        self.assertEqual(
            decode_detail_url(link), "https://example.com/a b"
        )

    def test_malformed_escape_raises(self) -> None:
        """A '%' without two hex digits is a decode error."""
        with self.assertRaises(RedirectDecodeError):
            decode_detail_url("x?r=https%3A%2F%2Fexample.com%2")

    def test_non_hex_escape_raises(self) -> None:
        """'%zz' is not a valid escape."""
        with self.assertRaises(RedirectDecodeError):
            decode_detail_url("x?r=https%zz%2F%2Fexample.com")

    def test_empty_target_raises(self) -> None:
        """A marker with nothing after it is not navigable."""
        with self.assertRaises(RedirectDecodeError):
            decode_detail_url("https://ta.example.com/click?r=")

    def test_relative_target_raises(self) -> None:
        """The decoded target must be an absolute URL."""
        with self.assertRaises(RedirectDecodeError):
            decode_detail_url("x?r=%2Fp%2Ffoo")

    def test_invalid_utf8_raises(self) -> None:
        """Escapes that decode to invalid UTF-8 are rejected."""
        with self.assertRaises(RedirectDecodeError):
            decode_detail_url("x?r=https%3A%2F%2Fexample.com%2F%FF")

    def test_decode_error_is_value_error(self) -> None:
        """RedirectDecodeError subclasses ValueError."""
        self.assertTrue(issubclass(RedirectDecodeError, ValueError))


class TestHasRedirectMarker(unittest.TestCase):
    """has_redirect_marker behaviour."""

    def test_detects_marker(self) -> None:
        self.assertTrue(has_redirect_marker("a?r=b"))

    def test_no_marker(self) -> None:
        self.assertFalse(has_redirect_marker("https://example.com/p"))


class TestIsAbsoluteUrl(unittest.TestCase):
    """is_absolute_url behaviour."""

    def test_scheme_and_host(self) -> None:
        self.assertTrue(is_absolute_url("https://www.tokopedia.com/shop/a"))

    def test_relative_path_rejected(self) -> None:
        self.assertFalse(is_absolute_url("/shop/phone-a"))

    def test_scheme_relative_rejected(self) -> None:
        """A host without a scheme is not directly navigable."""
        self.assertFalse(is_absolute_url("//www.tokopedia.com/shop/a"))


if __name__ == "__main__":
    unittest.main()

"""Tests for input sanitization."""

from newsecho.shared.utils import InputSanitizer, sanitize_file_name


def test_sanitize_text_strips_all_markup() -> None:
    assert InputSanitizer.sanitize_text("<b>Bold</b> news") == "Bold news"
    assert InputSanitizer.sanitize_text("<script>alert(1)</script>Hello") == "Hello"
    assert InputSanitizer.sanitize_text("") == ""


def test_sanitize_text_keeps_plain_text_as_typed() -> None:
    assert InputSanitizer.sanitize_text("Tom & Jerry") == "Tom & Jerry"
    assert InputSanitizer.sanitize_text("a < b & c") == "a < b & c"
    once = InputSanitizer.sanitize_text("News & <i>Views</i>")
    assert once == "News & Views"
    assert InputSanitizer.sanitize_text(once) == once


def test_sanitize_rich_text_keeps_safe_formatting() -> None:
    cleaned = InputSanitizer.sanitize_rich_text('<p onclick="steal()">Hi <strong>there</strong></p>')
    assert cleaned == "<p>Hi <strong>there</strong></p>"


def test_sanitize_file_name() -> None:
    assert sanitize_file_name("my  photo (1).png") == "my-photo-1-.png"

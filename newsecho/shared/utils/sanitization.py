"""Markup stripping with nh3 before user input is stored.

Titles, reply messages and profile text are plain text: every tag goes and
the entities nh3 emits are decoded again, so "Tom & Jerry" is stored as
typed. Newsletter bodies are rich text and keep nh3's default safe
allowlist (paragraphs, emphasis, links, lists, images).
"""

import html
import re

import nh3

_FILE_NAME_UNSAFE = re.compile(r"[^a-zA-Z0-9.-]+")


class InputSanitizer:
    @staticmethod
    def sanitize_text(value: str) -> str:
        if not value:
            return value
        return html.unescape(nh3.clean(value, tags=set(), attributes={}))

    @staticmethod
    def sanitize_rich_text(value: str) -> str:
        if not value:
            return value
        return nh3.clean(value)


def sanitize_file_name(name: str) -> str:
    """Image upload public id: runs of characters outside [a-zA-Z0-9.-] become one '-'."""
    return re.sub("-+", "-", _FILE_NAME_UNSAFE.sub("-", name))

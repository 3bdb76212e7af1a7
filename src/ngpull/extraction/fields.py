"""
Label/value extraction from sibling-laid-out definition lists.

Statistics blocks on audio pages look like::

    <dl class="sidestats">
      <dt>Listens:</dt> <dd>12,345</dd>
      <dt>Uploaded</dt> <dd>Jun 5, 2023</dd> <dd>12:34 PM EDT</dd>
      <dt>Tags</dt> <dd class="tags"><ul><li>rock</li><li>chill</li></ul></dd>
    </dl>

No element wraps a label with its values, so values are found by walking
forward from each label until the next label or the end of the container.
"""

from __future__ import annotations

import copy
import logging
import re
from collections.abc import Iterable
from typing import Optional

from bs4 import Tag

from .protocols import RawFieldMap

logger = logging.getLogger(__name__)

LABEL_TAG = "dt"
VALUE_TAG = "dd"
TAGS_KEY = "tags"
TAGS_CLASS = "tags"
TAGS_SEPARATOR = ", "

_WHITESPACE = re.compile(r"\s+")


def normalize_key(label: str) -> str:
    """
    Turn label text into a field key.

    ``" File Info: "`` becomes ``"file_info"``.
    """
    key = label.strip().lower().rstrip(":").strip()
    return _WHITESPACE.sub("_", key)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def _is_label(node: Tag) -> bool:
    return node.name == LABEL_TAG


def _value_texts(value: Tag) -> list[str]:
    """
    Collect the texts held by one value element.

    Works on a detached copy. Nested list items are returned individually,
    followed by the element's remaining text unless it is a tags container.
    """
    clone = copy.copy(value)

    for script in clone.find_all("script"):
        script.decompose()
    for br in clone.find_all("br"):
        br.replace_with(" ")
    for inline in clone.find_all(["a", "span"]):
        inline.unwrap()

    texts: list[str] = []
    for item in clone.select("ul li"):
        item_text = _collapse(item.get_text())
        if item_text:
            texts.append(item_text)
    for nested_list in clone.find_all("ul"):
        nested_list.decompose()

    remaining = _collapse(clone.get_text())
    if remaining and TAGS_CLASS not in (clone.get("class") or []):
        texts.append(remaining)
    return texts


def collect_values(label: Tag, container: Tag) -> list[str]:
    """
    Gather the value texts that follow ``label`` inside ``container``.

    Stops at the next label or when the cursor leaves the container.
    """
    values: list[str] = []
    cursor: Optional[Tag] = label.find_next_sibling()
    while cursor is not None and cursor.parent is container and not _is_label(cursor):
        if cursor.name == VALUE_TAG:
            values.extend(_value_texts(cursor))
        cursor = cursor.find_next_sibling()
    return values


def walk_definition_list(container: Tag) -> RawFieldMap:
    """
    Build the raw field map for one definition-list container.

    Args:
        container: The ``<dl>`` (or equivalent) element

    Returns:
        Key -> None (no values), a string (one value), or a list (several).
        The ``tags`` key is always one comma-joined string.
    """
    fields: RawFieldMap = {}
    for label in container.find_all(LABEL_TAG):
        key = normalize_key(label.get_text())
        if not key:
            continue

        values = collect_values(label, container)
        if key == TAGS_KEY and values:
            fields[key] = TAGS_SEPARATOR.join(values)
        elif len(values) > 1:
            fields[key] = values
        elif len(values) == 1:
            fields[key] = values[0]
        else:
            fields[key] = None
    return fields


def walk_definition_lists(containers: Iterable[Tag]) -> RawFieldMap:
    """
    Merge the field maps of several containers.

    A key seen in a later container replaces the earlier value.
    """
    fields: RawFieldMap = {}
    for container in containers:
        fields.update(walk_definition_list(container))
    logger.debug(f"Collected {len(fields)} labelled fields")
    return fields

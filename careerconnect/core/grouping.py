"""
Batch labels for sacrificial animals.

Animals of one kind are split into groups of ``items_per_group`` in the order
they were registered. Each animal is labelled ``<group>-<position>``, where the
group is a spreadsheet-style letter (A..Z, AA, AB, ...) and the position is
1-based inside the group.
"""

from __future__ import annotations

import string


def group_label(index: int) -> str:
    """0 -> ``A``, 25 -> ``Z``, 26 -> ``AA``."""
    if index < 0:
        raise ValueError(f"group index must be non-negative, got {index}")
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = string.ascii_uppercase[remainder] + letters
    return letters


def hewan_label(position: int, items_per_group: int) -> str:
    """Label for the animal at 0-based ``position`` in registration order."""
    if items_per_group < 1:
        raise ValueError(f"items_per_group must be at least 1, got {items_per_group}")
    group, offset = divmod(position, items_per_group)
    return f"{group_label(group)}-{offset + 1}"


def parse_group(label: str) -> str:
    """Group part of a label: ``"AB-12"`` -> ``"AB"``."""
    return label.split("-", 1)[0]


def group_index(letters: str) -> int:
    """Inverse of ``group_label``: ``"A"`` -> 0, ``"AA"`` -> 26."""
    letters = letters.strip().upper()
    if not letters or any(ch not in string.ascii_uppercase for ch in letters):
        raise ValueError(f"invalid group label: {letters!r}")
    index = 0
    for ch in letters:
        index = index * 26 + (string.ascii_uppercase.index(ch) + 1)
    return index - 1

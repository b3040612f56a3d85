# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Base types and utilities for serializers."""

from enum import Enum

from designlens.schema import WCAG_AA, WCAG_AA_LARGE, WCAG_AAA


class SerializerFormat(Enum):
    """Output format for serializers."""

    JSON = "json"
    JSON_PRETTY = "json_pretty"
    NATURAL = "natural"


def format_ratio(ratio: float) -> str:
    """Contrast ratio as shown to readers, e.g. "4.6:1"."""
    return f"{ratio:.1f}:1"


def wcag_level(ratio: float) -> str:
    """Highest WCAG 2.x level a contrast ratio reaches for normal text."""
    if ratio >= WCAG_AAA:
        return "AAA"
    if ratio >= WCAG_AA:
        return "AA"
    if ratio >= WCAG_AA_LARGE:
        return "AA large text only"
    return "fails AA"

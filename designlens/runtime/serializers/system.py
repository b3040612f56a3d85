# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
System prompt serializer for critique instructions.

Formats DesignMetrics for injection into the system prompt, giving the
critique writer authoritative measurements before it describes the design.
"""

from __future__ import annotations

import json

from designlens.runtime.serializers.base import SerializerFormat, format_ratio, wcag_level
from designlens.schema import DesignMetrics


def to_system_prompt(
    metrics: DesignMetrics,
    *,
    format: SerializerFormat = SerializerFormat.NATURAL,
    include_layout: bool = True,
    max_palette: int = 5,
    preamble: bool = True,
) -> str:
    """Serialize DesignMetrics for system prompt injection.

    Args:
        metrics: The DesignMetrics to serialize.
        format: NATURAL (human-readable) or JSON.
        include_layout: Include the layout breakdown (balance, symmetry, ...).
        max_palette: Palette entries listed in NATURAL format.
        preamble: Include the section heading.

    Returns:
        String suitable for system prompt injection.

    Example (NATURAL)::

        ## Design Metrics

        **Overall Score:** 74/100

        **Palette:** #FFFFFF, #FFEAA7, #4ECDC4, #3498DB, #333333

        **Dominant Colors:**
        - Background: #FFFFFF
        - Text: #333333 (12.6:1, AAA)
        ...
    """
    if format == SerializerFormat.NATURAL:
        return _to_natural(metrics, include_layout, max_palette, preamble)
    else:
        return _to_json_block(metrics, include_layout, preamble)


def _to_natural(
    metrics: DesignMetrics,
    include_layout: bool,
    max_palette: int,
    preamble: bool,
) -> str:
    """Generate natural language representation."""
    lines: list[str] = []

    if preamble:
        lines.extend([
            "## Design Metrics",
            "",
        ])

    lines.append(f"**Overall Score:** {metrics.overall_score}/100")
    lines.append("")

    palette = ", ".join(c.hex for c in metrics.palette[:max_palette])
    lines.append(f"**Palette:** {palette}")
    lines.append("")

    # Dominant roles with their contrast against the background
    ratios = {c.label.split("/")[0]: c.ratio for c in metrics.contrasts}
    lines.append("**Dominant Colors:**")
    for role, color in metrics.dominant_colors.items():
        ratio = ratios.get(role)
        if ratio is None:
            lines.append(f"- {role.capitalize()}: {color.hex}")
        else:
            lines.append(
                f"- {role.capitalize()}: {color.hex} ({format_ratio(ratio)}, {wcag_level(ratio)})"
            )
    lines.append("")

    lines.append(f"**Text Contrast:** {format_ratio(metrics.contrast_ratio)}")
    lines.append("")

    image_contrast = metrics.image_contrast
    if image_contrast is not None:
        lines.append("**Image Contrast:**")
        lines.append(f"- Overall: {format_ratio(image_contrast.overall)}")
        if image_contrast.text_windows:
            lines.append(
                f"- Text areas: {format_ratio(image_contrast.text)} "
                f"({image_contrast.text_windows} high-contrast windows)"
            )
        else:
            lines.append("- Text areas: no high-contrast windows found")
        lines.append(f"- Elements: {format_ratio(image_contrast.element)}")
        lines.append("")

    if metrics.color_distribution:
        counts = ", ".join(
            f"{c.color.hex} ({c.count})" for c in metrics.color_distribution
        )
        lines.append(f"**Most Frequent Colors:** {counts}")
        lines.append("")

    if include_layout:
        layout = metrics.layout
        lines.append("**Layout:**")
        lines.append(f"- Balance: {layout.balance:.0f}/100")
        lines.append(f"- Symmetry: {layout.symmetry:.0f}/100")
        lines.append(
            f"- Grid alignment: {layout.grid_alignment:.0f}/100 "
            f"({layout.grid_lines} aligned lines)"
        )
        lines.append("")

    text = metrics.text
    if text.has_text:
        lines.append(
            f"**Text-like Regions:** {text.region_count} "
            f"({text.coverage * 100:.1f}% of the image, edge-density estimate)"
        )
    else:
        lines.append("**Text-like Regions:** none detected (edge-density estimate)")
    lines.append("")

    lines.append("**Scores:**")
    for name, value in metrics.scores.items():
        label = name.replace("_", " ").capitalize()
        lines.append(f"- {label}: {value:.0f}/100")
    lines.append("")

    return "\n".join(lines)


def _to_json_block(
    metrics: DesignMetrics,
    include_layout: bool,
    preamble: bool,
) -> str:
    """Generate JSON block representation."""
    lines: list[str] = []

    if preamble:
        lines.extend([
            "## Design Metrics",
            "",
        ])

    data = metrics.to_dict()
    if not include_layout:
        data.pop("layout", None)

    lines.append("```json")
    lines.append(json.dumps(data, indent=2))
    lines.append("```")

    return "\n".join(lines)

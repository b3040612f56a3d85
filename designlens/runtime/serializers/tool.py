# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Tool output serializer for function-calling models.

Formats DesignMetrics as a tool/function result that can be returned to
models supporting tool use. The output is structured JSON that the model
can parse and reason over while writing a critique.
"""

from __future__ import annotations

import json

from designlens.runtime.serializers.base import SerializerFormat
from designlens.schema import DesignMetrics


def to_tool_output(
    metrics: DesignMetrics,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    compact: bool = False,
    include_layout: bool = True,
    image_id: str | None = None,
) -> str:
    """Serialize DesignMetrics as tool output JSON.

    The metrics are returned as if they were the result of a
    ``get_design_metrics`` tool call.

    Args:
        metrics: The DesignMetrics to serialize.
        format: Output format (JSON or JSON_PRETTY).
        compact: Minimal representation: hex palette, role hexes, rounded
            scores, no quadrant weights.
        include_layout: Include layout metrics.
        image_id: Optional image identifier for multi-image contexts.

    Returns:
        JSON string suitable for tool output.

    Example (compact=True)::

        {
          "tool": "designlens_metrics",
          "overall_score": 74,
          "palette": ["#FFFFFF", "#4ECDC4", "#333333"],
          "dominant": {"background": "#FFFFFF", "text": "#333333", ...},
          "contrast": 12.6,
          "scores": {"text_readability": 82, "color": 90, ...}
        }
    """
    if compact:
        data = _build_compact_data(metrics, include_layout=include_layout, image_id=image_id)
    else:
        data = _build_tool_data(metrics, include_layout=include_layout, image_id=image_id)

    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    else:
        return json.dumps(data, separators=(",", ":"))


def _build_compact_data(
    metrics: DesignMetrics,
    include_layout: bool,
    image_id: str | None = None,
) -> dict:
    """Build the minimal tool output."""
    result: dict = {
        "tool": "designlens_metrics",
    }

    if image_id:
        result["image_id"] = image_id

    result["overall_score"] = metrics.overall_score
    result["palette"] = [c.hex for c in metrics.palette]
    result["dominant"] = metrics.dominant_colors.to_dict()
    result["contrast"] = round(metrics.contrast_ratio, 1)
    result["scores"] = {name: round(value) for name, value in metrics.scores.items()}

    if include_layout:
        result["layout"] = {
            "balance": round(metrics.layout.balance),
            "symmetry": round(metrics.layout.symmetry),
            "grid_alignment": round(metrics.layout.grid_alignment),
        }

    return result


def _build_tool_data(
    metrics: DesignMetrics,
    include_layout: bool,
    image_id: str | None = None,
) -> dict:
    """Build the full tool output data structure."""
    result: dict = {
        "tool": "designlens_metrics",
    }

    if image_id:
        result["image_id"] = image_id

    result["version"] = metrics.version
    result["overall_score"] = metrics.overall_score
    result["palette"] = [c.hex for c in metrics.palette]
    result["dominant"] = metrics.dominant_colors.to_dict()
    result["contrasts"] = [
        {
            "label": c.label,
            "ratio": round(c.ratio, 2),
            "aa": c.passes_aa,
            "aa_large": c.passes_aa_large,
            "aaa": c.passes_aaa,
        }
        for c in metrics.contrasts
    ]

    if include_layout:
        result["layout"] = metrics.layout.to_dict()

    result["text"] = metrics.text.to_dict()
    if metrics.image_contrast is not None:
        result["image_contrast"] = {
            "overall": round(metrics.image_contrast.overall, 2),
            "text": round(metrics.image_contrast.text, 2),
            "element": round(metrics.image_contrast.element, 2),
        }
    result["color_distribution"] = [c.to_dict() for c in metrics.color_distribution]
    result["scores"] = metrics.scores.to_dict()
    result["weights"] = metrics.weights.to_dict()

    if metrics.image_hash:
        result["image_hash"] = metrics.image_hash

    return result

# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
DesignMetrics v1.0: canonical schema for design metric extraction.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same input + same seed → same metrics
- Objective: Metrics are pixel statistics, not judgements of taste
- Serializable: JSON-ready for downstream critique generation

Score Scale:
    Every sub-score and the overall score live on a 0–100 scale, where 50
    is the neutral value used whenever an input is missing or degenerate.

Color Conventions:
- RGB channels are integers 0–255
- Hex strings are uppercase "#RRGGBB"
- Lightness is the HSL lightness on a 0–100 scale
- Luminance is WCAG 2.x relative luminance on a 0–1 scale
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from typing import Optional


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0"


# =============================================================================
# Parsing Helpers
# =============================================================================

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def _check_score(name: str, value: float) -> None:
    if not math.isfinite(value) or not 0.0 <= value <= 100.0:
        raise ValueError(f"{name} must be 0-100, got {value}")


# =============================================================================
# Core Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    A single sRGB color.

    This is the canonical representation for every color in DesignLens:
    reference palette entries, dominant roles and palette members.

    Attributes:
        r: Red channel (0-255)
        g: Green channel (0-255)
        b: Blue channel (0-255)
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are within 0-255."""
        for name, value in (("r", self.r), ("g", self.g), ("b", self.b)):
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    @property
    def hex(self) -> str:
        """Uppercase hex string like "#3498DB"."""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def lightness(self) -> float:
        """HSL lightness on a 0-100 scale."""
        from designlens.measure.colorspace import lightness
        return lightness(self.rgb)

    @property
    def luminance(self) -> float:
        """WCAG relative luminance on a 0-1 scale."""
        from designlens.measure.colorspace import relative_luminance
        return relative_luminance(self.rgb)

    def complement(self) -> RGBColor:
        """Bitwise RGB complement (255 - channel)."""
        return RGBColor(255 - self.r, 255 - self.g, 255 - self.b)

    def to_dict(self) -> str:
        """Serialize to a hex string (the wire form of a color)."""
        return self.hex

    @classmethod
    def from_hex(cls, hex_color: str) -> RGBColor:
        """Parse "#RRGGBB" or "RRGGBB" (case-insensitive)."""
        m = _HEX_RE.match(hex_color.strip())
        if not m:
            raise ValueError(f"Invalid hex color: {hex_color!r}")
        return cls(int(m.group(1), 16), int(m.group(2), 16), int(m.group(3), 16))

    @classmethod
    def from_dict(cls, data: str) -> RGBColor:
        """Deserialize from a hex string."""
        return cls.from_hex(data)

    def __str__(self) -> str:
        return self.hex


WHITE = RGBColor(255, 255, 255)
BLACK = RGBColor(0, 0, 0)


# =============================================================================
# Dominant Colors
# =============================================================================


@dataclass(frozen=True, slots=True)
class DominantColorSet:
    """
    The five dominant-role colors of a design.

    Roles are assigned by frequency and contrast rules, not by
    declaration order. Background and text are always distinct;
    primary, secondary and accent are best-effort and may be synthesized
    when the image offered too few distinct colors.
    """
    background: RGBColor
    text: RGBColor
    primary: RGBColor
    secondary: RGBColor
    accent: RGBColor

    def __post_init__(self) -> None:
        if self.background == self.text:
            raise ValueError(
                f"Background and text colors must differ, both are {self.background.hex}"
            )

    def items(self) -> tuple[tuple[str, RGBColor], ...]:
        """Role/color pairs in canonical role order."""
        return (
            ("background", self.background),
            ("text", self.text),
            ("primary", self.primary),
            ("secondary", self.secondary),
            ("accent", self.accent),
        )

    def to_dict(self) -> dict:
        return {role: color.to_dict() for role, color in self.items()}

    @classmethod
    def from_dict(cls, data: dict) -> DominantColorSet:
        return cls(
            background=RGBColor.from_dict(data["background"]),
            text=RGBColor.from_dict(data["text"]),
            primary=RGBColor.from_dict(data["primary"]),
            secondary=RGBColor.from_dict(data["secondary"]),
            accent=RGBColor.from_dict(data["accent"]),
        )


# =============================================================================
# Contrast
# =============================================================================

# WCAG 2.x success-criterion thresholds
WCAG_AA = 4.5
WCAG_AA_LARGE = 3.0
WCAG_AAA = 7.0


@dataclass(frozen=True, slots=True)
class ContrastMeasurement:
    """
    WCAG contrast ratio between two colors.

    The ratio is always >= 1 because the brighter color's luminance is
    the numerator; which color is called "foreground" carries no weight
    in the computation.

    Attributes:
        label: What was compared (e.g. "text/background")
        foreground: Foreground color
        background: Background color
        ratio: Contrast ratio in [1, 21]
    """
    label: str
    foreground: RGBColor
    background: RGBColor
    ratio: float

    def __post_init__(self) -> None:
        if not self.ratio >= 1.0:
            raise ValueError(f"Contrast ratio must be >= 1, got {self.ratio}")

    @property
    def passes_aa(self) -> bool:
        return self.ratio >= WCAG_AA

    @property
    def passes_aa_large(self) -> bool:
        return self.ratio >= WCAG_AA_LARGE

    @property
    def passes_aaa(self) -> bool:
        return self.ratio >= WCAG_AAA

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "foreground": self.foreground.to_dict(),
            "background": self.background.to_dict(),
            "ratio": self.ratio,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ContrastMeasurement:
        return cls(
            label=data["label"],
            foreground=RGBColor.from_dict(data["foreground"]),
            background=RGBColor.from_dict(data["background"]),
            ratio=data["ratio"],
        )


# =============================================================================
# Layout Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class QuadrantWeights:
    """
    Visual weight accumulated in each of the four fixed image quadrants.

    Visual weight of a pixel is luminance × (1 + saturation). All four
    quadrants always exist; an untouched quadrant holds 0.0.

        ┌──────────┬───────────┐
        │ top_left │ top_right │
        ├──────────┼───────────┤
        │ bot_left │ bot_right │
        └──────────┴───────────┘
    """
    top_left: float = 0.0
    top_right: float = 0.0
    bottom_left: float = 0.0
    bottom_right: float = 0.0

    def __post_init__(self) -> None:
        for name in ("top_left", "top_right", "bottom_left", "bottom_right"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0.0:
                raise ValueError(f"Quadrant weight {name} must be >= 0, got {value}")

    @property
    def left(self) -> float:
        return self.top_left + self.bottom_left

    @property
    def right(self) -> float:
        return self.top_right + self.bottom_right

    @property
    def top(self) -> float:
        return self.top_left + self.top_right

    @property
    def bottom(self) -> float:
        return self.bottom_left + self.bottom_right

    @property
    def total(self) -> float:
        return self.top + self.bottom

    def as_tuple(self) -> tuple[float, float, float, float]:
        """(top_left, top_right, bottom_left, bottom_right)"""
        return (self.top_left, self.top_right, self.bottom_left, self.bottom_right)

    def to_dict(self) -> dict:
        return {
            "top_left": self.top_left,
            "top_right": self.top_right,
            "bottom_left": self.bottom_left,
            "bottom_right": self.bottom_right,
        }

    @classmethod
    def from_dict(cls, data: dict) -> QuadrantWeights:
        return cls(
            top_left=data.get("top_left", 0.0),
            top_right=data.get("top_right", 0.0),
            bottom_left=data.get("bottom_left", 0.0),
            bottom_right=data.get("bottom_right", 0.0),
        )


@dataclass(frozen=True, slots=True)
class LayoutMeasurement:
    """
    Layout balance, symmetry and alignment derived from quadrant weights.

    Attributes:
        quadrants: Raw per-quadrant visual weight
        balance: Horizontal/vertical weight balance (0-100)
        symmetry: Top-left quadrant compared against the other three (0-100)
        grid_alignment: Vertical alignment-line heuristic (0-100)
        visual_hierarchy: 100 minus normalized quadrant-share variance (0-100)
        grid_lines: Number of vertical sample lines that qualified
    """
    quadrants: QuadrantWeights
    balance: float
    symmetry: float
    grid_alignment: float
    visual_hierarchy: float
    grid_lines: int = 0

    def __post_init__(self) -> None:
        _check_score("Balance", self.balance)
        _check_score("Symmetry", self.symmetry)
        _check_score("Grid alignment", self.grid_alignment)
        _check_score("Visual hierarchy", self.visual_hierarchy)

    def to_dict(self) -> dict:
        return {
            "quadrants": self.quadrants.to_dict(),
            "balance": self.balance,
            "symmetry": self.symmetry,
            "grid_alignment": self.grid_alignment,
            "visual_hierarchy": self.visual_hierarchy,
            "grid_lines": self.grid_lines,
        }

    @classmethod
    def from_dict(cls, data: dict) -> LayoutMeasurement:
        return cls(
            quadrants=QuadrantWeights.from_dict(data["quadrants"]),
            balance=data["balance"],
            symmetry=data["symmetry"],
            grid_alignment=data["grid_alignment"],
            visual_hierarchy=data["visual_hierarchy"],
            grid_lines=data.get("grid_lines", 0),
        )


# =============================================================================
# Image Contrast
# =============================================================================


@dataclass(frozen=True, slots=True)
class ImageContrast:
    """
    Image-level luminance contrast, independent of the role colors.

    Attributes:
        overall: Mean contrast of random pixel pairs, clamped to [1, 21]
        text: Mean local contrast of lattice windows above 3:1
            (4.5 when no window qualifies)
        element: 0.8 * overall + 0.2 * text
        sample_pairs: Pixel pairs drawn for ``overall``
        text_windows: Lattice windows that qualified for ``text``
    """
    overall: float
    text: float
    element: float
    sample_pairs: int = 0
    text_windows: int = 0

    def __post_init__(self) -> None:
        for name in ("overall", "text", "element"):
            value = getattr(self, name)
            if not 1.0 <= value <= 21.0:
                raise ValueError(f"{name} contrast must be 1-21, got {value}")
        if self.sample_pairs < 0 or self.text_windows < 0:
            raise ValueError("Image contrast counts must be >= 0")

    def to_dict(self) -> dict:
        return {
            "overall": self.overall,
            "text": self.text,
            "element": self.element,
            "sample_pairs": self.sample_pairs,
            "text_windows": self.text_windows,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ImageContrast:
        return cls(
            overall=data["overall"],
            text=data["text"],
            element=data["element"],
            sample_pairs=data.get("sample_pairs", 0),
            text_windows=data.get("text_windows", 0),
        )


# =============================================================================
# Color Distribution
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorCount:
    """A reference color and how many region samples quantized to it."""
    color: RGBColor
    count: int

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"Color count must be >= 1, got {self.count}")

    def to_dict(self) -> dict:
        return {"color": self.color.hex, "count": self.count}

    @classmethod
    def from_dict(cls, data: dict) -> ColorCount:
        return cls(color=RGBColor.from_hex(data["color"]), count=data["count"])


# =============================================================================
# Text Presence (edge-density proxy, never OCR)
# =============================================================================


@dataclass(frozen=True, slots=True)
class TextPresence:
    """
    Aggregate of edge-dense connected regions.

    This is a coarse density proxy for "how much text-like structure is
    present". It is NOT character recognition and carries no text content.

    Attributes:
        region_count: Number of kept regions (>= min region size)
        region_pixels: Total pixels across kept regions
        coverage: region_pixels / image pixels (0-1)
        largest_region: Pixel count of the largest kept region
        edge_pixels: Total edge-flagged pixels before region filtering
        scope: What was measured ("edge_density_proxy")
    """
    region_count: int = 0
    region_pixels: int = 0
    coverage: float = 0.0
    largest_region: int = 0
    edge_pixels: int = 0
    scope: str = "edge_density_proxy"

    def __post_init__(self) -> None:
        if self.region_count < 0 or self.region_pixels < 0 or self.edge_pixels < 0:
            raise ValueError("Text presence counts must be >= 0")
        if not 0.0 <= self.coverage <= 1.0:
            raise ValueError(f"Coverage must be 0-1, got {self.coverage}")

    @property
    def has_text(self) -> bool:
        return self.region_count > 0

    def to_dict(self) -> dict:
        return {
            "scope": self.scope,
            "region_count": self.region_count,
            "region_pixels": self.region_pixels,
            "coverage": self.coverage,
            "largest_region": self.largest_region,
            "edge_pixels": self.edge_pixels,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TextPresence:
        return cls(
            region_count=data.get("region_count", 0),
            region_pixels=data.get("region_pixels", 0),
            coverage=data.get("coverage", 0.0),
            largest_region=data.get("largest_region", 0),
            edge_pixels=data.get("edge_pixels", 0),
            scope=data.get("scope", "edge_density_proxy"),
        )


# =============================================================================
# Scores
# =============================================================================


@dataclass(frozen=True, slots=True)
class SubScores:
    """The five 0-100 sub-scores that feed the overall score."""
    text_readability: float
    color: float
    layout: float
    visual_hierarchy: float
    spacing: float

    def __post_init__(self) -> None:
        for name, value in self.items():
            _check_score(name, value)

    def items(self) -> tuple[tuple[str, float], ...]:
        return (
            ("text_readability", self.text_readability),
            ("color", self.color),
            ("layout", self.layout),
            ("visual_hierarchy", self.visual_hierarchy),
            ("spacing", self.spacing),
        )

    def to_dict(self) -> dict:
        return dict(self.items())

    @classmethod
    def from_dict(cls, data: dict) -> SubScores:
        return cls(
            text_readability=data["text_readability"],
            color=data["color"],
            layout=data["layout"],
            visual_hierarchy=data["visual_hierarchy"],
            spacing=data["spacing"],
        )


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """
    Weights of the five sub-scores in the overall score.

    Defaults are the documented fixed weights; weights must sum to 1.0.
    """
    text_readability: float = 0.20
    color: float = 0.25
    layout: float = 0.30
    visual_hierarchy: float = 0.15
    spacing: float = 0.10

    def __post_init__(self) -> None:
        values = (
            self.text_readability, self.color, self.layout,
            self.visual_hierarchy, self.spacing,
        )
        if any(v < 0.0 for v in values):
            raise ValueError(f"Score weights must be >= 0, got {values}")
        total = sum(values)
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Score weights must sum to 1.0, got {total:.4f}")

    @classmethod
    def equal(cls) -> ScoreWeights:
        """Equal-weight variant (plain average of the five sub-scores)."""
        return cls(0.2, 0.2, 0.2, 0.2, 0.2)

    def to_dict(self) -> dict:
        return {
            "text_readability": self.text_readability,
            "color": self.color,
            "layout": self.layout,
            "visual_hierarchy": self.visual_hierarchy,
            "spacing": self.spacing,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ScoreWeights:
        return cls(**data)


# =============================================================================
# Image Metadata
# =============================================================================


@dataclass(frozen=True, slots=True)
class ImageInfo:
    """
    Facts about the analyzed raster.

    Attributes:
        width, height: Working resolution after downscale
        source_width, source_height: Decoded resolution before downscale
        sample_count: Color samples that survived alpha/gray filtering
        mime_type: Declared or detected MIME type, if known
    """
    width: int
    height: int
    source_width: int
    source_height: int
    sample_count: int = 0
    mime_type: Optional[str] = None

    @property
    def downscaled(self) -> bool:
        return (self.width, self.height) != (self.source_width, self.source_height)

    def to_dict(self) -> dict:
        d = {
            "width": self.width,
            "height": self.height,
            "source_width": self.source_width,
            "source_height": self.source_height,
            "sample_count": self.sample_count,
        }
        if self.mime_type is not None:
            d["mime_type"] = self.mime_type
        return d

    @classmethod
    def from_dict(cls, data: dict) -> ImageInfo:
        return cls(
            width=data["width"],
            height=data["height"],
            source_width=data.get("source_width", data["width"]),
            source_height=data.get("source_height", data["height"]),
            sample_count=data.get("sample_count", 0),
            mime_type=data.get("mime_type"),
        )


# =============================================================================
# Top-Level Metrics Container
# =============================================================================


@dataclass(frozen=True, slots=True)
class DesignMetrics:
    """
    Complete metric record for one analyzed design.

    This is the top-level container produced by DesignLens. It is a plain
    immutable value: collaborators that render reports or ask a language
    model for prose consume it without knowing how it was computed.

    Attributes:
        palette: Up to 12 distinct colors, descending lightness
        dominant_colors: Background/text/primary/secondary/accent
        contrasts: Role colors measured against the background
        contrast_ratio: Background/text contrast (the headline ratio)
        layout: Quadrant weights, balance, symmetry, alignment, hierarchy
        text: Edge-region density proxy
        image_contrast: Image-level pixel-pair and local-window contrast
        color_distribution: Most frequent reference colors with sample counts
        scores: The five sub-scores
        weights: Weights used for the overall score
        overall_score: Weighted combination, rounded, 0-100
        image: Working and source resolution, sample count
        seed: Sampling seed, when the run was seeded
        image_hash: Optional hash of the working buffer
        version: Schema version
    """
    palette: tuple[RGBColor, ...]
    dominant_colors: DominantColorSet
    contrasts: tuple[ContrastMeasurement, ...]
    contrast_ratio: float
    layout: LayoutMeasurement
    text: TextPresence
    scores: SubScores
    overall_score: int
    image: ImageInfo
    image_contrast: Optional[ImageContrast] = None
    color_distribution: tuple[ColorCount, ...] = ()
    weights: ScoreWeights = field(default_factory=ScoreWeights)
    seed: Optional[int] = None
    image_hash: Optional[str] = None
    version: str = field(default=SCHEMA_VERSION)

    def __post_init__(self) -> None:
        """Validate metric structure."""
        if not self.palette:
            raise ValueError("Palette cannot be empty")
        if len(self.palette) > 12:
            raise ValueError(f"Palette holds at most 12 colors, got {len(self.palette)}")
        if len(set(self.palette)) != len(self.palette):
            raise ValueError("Palette colors must be distinct")
        if not 0 <= self.overall_score <= 100:
            raise ValueError(f"Overall score must be 0-100, got {self.overall_score}")
        if not self.contrast_ratio >= 1.0:
            raise ValueError(f"Contrast ratio must be >= 1, got {self.contrast_ratio}")
        counts = [c.count for c in self.color_distribution]
        if counts != sorted(counts, reverse=True):
            raise ValueError("Color distribution must be ordered by descending count")

    @property
    def text_contrast(self) -> ContrastMeasurement:
        """The text/background measurement."""
        for c in self.contrasts:
            if c.label == "text/background":
                return c
        raise KeyError("No text/background contrast measurement")

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON output.

        This is the primary serialization method for downstream consumers.
        """
        result = {
            "version": self.version,
            "palette": [c.to_dict() for c in self.palette],
            "dominant_colors": self.dominant_colors.to_dict(),
            "contrasts": [c.to_dict() for c in self.contrasts],
            "contrast_ratio": self.contrast_ratio,
            "layout": self.layout.to_dict(),
            "text": self.text.to_dict(),
            "color_distribution": [c.to_dict() for c in self.color_distribution],
            "scores": self.scores.to_dict(),
            "weights": self.weights.to_dict(),
            "overall_score": self.overall_score,
            "image": self.image.to_dict(),
        }
        if self.image_contrast is not None:
            result["image_contrast"] = self.image_contrast.to_dict()
        if self.seed is not None:
            result["seed"] = self.seed
        if self.image_hash is not None:
            result["image_hash"] = self.image_hash
        return result

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def to_prompt(self) -> str:
        """
        Serialize to the human-readable block used in critique prompts.

        Example output:
            ## Design Metrics

            **Overall Score:** 74/100
            ...
        """
        # Import here to avoid circular imports
        from designlens.runtime.serializers.system import to_system_prompt
        return to_system_prompt(self)

    @classmethod
    def from_dict(cls, data: dict) -> DesignMetrics:
        """Deserialize from dictionary."""
        return cls(
            version=data.get("version", SCHEMA_VERSION),
            palette=tuple(RGBColor.from_dict(c) for c in data["palette"]),
            dominant_colors=DominantColorSet.from_dict(data["dominant_colors"]),
            contrasts=tuple(ContrastMeasurement.from_dict(c) for c in data["contrasts"]),
            contrast_ratio=data["contrast_ratio"],
            layout=LayoutMeasurement.from_dict(data["layout"]),
            text=TextPresence.from_dict(data["text"]),
            image_contrast=(
                ImageContrast.from_dict(data["image_contrast"])
                if data.get("image_contrast") else None
            ),
            color_distribution=tuple(
                ColorCount.from_dict(c) for c in data.get("color_distribution", ())
            ),
            scores=SubScores.from_dict(data["scores"]),
            weights=(
                ScoreWeights.from_dict(data["weights"])
                if data.get("weights") else ScoreWeights()
            ),
            overall_score=data["overall_score"],
            image=ImageInfo.from_dict(data["image"]),
            seed=data.get("seed"),
            image_hash=data.get("image_hash"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> DesignMetrics:
        """Deserialize from JSON string."""
        return cls.from_dict(json.loads(json_str))

# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""Analysis configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from designlens.schema import ScoreWeights


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunable constants of one analysis run. Defaults are the documented values."""

    # Longer side of the working raster (px)
    max_dimension: int = 800

    # Region sampling
    samples_per_region: int = 800
    alpha_floor: int = 128       # alpha <= floor is invisible
    gray_threshold: int = 20     # all channel deltas below this → gray

    # Palette
    top_n: int = 10
    palette_cap: int = 12

    # Roles
    background_min_lightness: float = 60.0  # HSL lightness, 0-100
    min_text_contrast: float = 3.0          # WCAG ratio floor for text

    # Layout
    layout_stride: int = 2
    grid_line_spacing: int = 10
    grid_edge_threshold: float = 30.0       # 0-255 luminance delta
    grid_run_fraction: float = 0.1          # of image height
    grid_line_bonus: float = 5.0
    grid_bonus_cap: float = 30.0

    # Text heuristic
    text_edge_threshold: float = 50.0       # 0-255 luminance delta
    min_region_pixels: int = 10

    # Image-level contrast and color distribution
    contrast_pairs: int = 100
    distribution_size: int = 5

    weights: ScoreWeights = field(default_factory=ScoreWeights)

    # Run the measurement passes on worker threads
    parallel: bool = True

    def __post_init__(self) -> None:
        for name in (
            "max_dimension", "samples_per_region", "top_n", "palette_cap",
            "layout_stride", "grid_line_spacing", "min_region_pixels",
            "contrast_pairs", "distribution_size",
        ):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be >= 1, got {value}")
        if self.palette_cap > 12:
            raise ValueError(f"palette_cap must be <= 12, got {self.palette_cap}")
        if not 0 <= self.alpha_floor <= 255:
            raise ValueError(f"alpha_floor must be 0-255, got {self.alpha_floor}")
        if not 0.0 < self.grid_run_fraction <= 1.0:
            raise ValueError(f"grid_run_fraction must be in (0, 1], got {self.grid_run_fraction}")
        # Black or white always reaches 4.58:1 against any background
        if not 1.0 <= self.min_text_contrast <= 4.5:
            raise ValueError(f"min_text_contrast must be 1-4.5, got {self.min_text_contrast}")

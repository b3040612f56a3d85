# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Measurement core for DesignLens.

This module turns a raster image into deterministic design metrics.
All operations are pixel statistics; nothing here judges taste.
"""

from designlens.measure.analyze import analyze
from designlens.measure.config import AnalysisConfig
from designlens.measure.ingest import IngestionError, RasterImage, load_image

__all__ = ["analyze", "AnalysisConfig", "IngestionError", "RasterImage", "load_image"]

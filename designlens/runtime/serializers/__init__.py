# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Serializers for DesignMetrics delivery.

Each serializer formats DesignMetrics for a specific injection method.
All serializers preserve the metrics exactly -- no modification or inference.
"""

from designlens.runtime.serializers.base import SerializerFormat
from designlens.runtime.serializers.system import to_system_prompt
from designlens.runtime.serializers.tool import to_tool_output

__all__ = [
    "SerializerFormat",
    "to_tool_output",
    "to_system_prompt",
]

# Copyright (c) 2026 DesignLens
# SPDX-License-Identifier: MIT

"""
Delivery runtime for DesignLens.

Serialization of DesignMetrics for the critique writer. Supports two
delivery mechanisms:

1. Tool Output -- For tool-use / function-calling models
2. System Prompt -- Injection into system instructions

The delivery layer never modifies metric content.
"""

from designlens.runtime.serializers import (
    SerializerFormat,
    to_system_prompt,
    to_tool_output,
)

__all__ = [
    "to_tool_output",
    "to_system_prompt",
    "SerializerFormat",
]

"""
Core Module - Foundational Components

Provides:
- Canonical JSON serialization
- Output gate (validates results before they are reported)
"""

from .canonical_json import canonical_dumps, canonical_hash
from .output_gate import MinimizationResult, OutputGate

__all__ = [
    'canonical_dumps',
    'canonical_hash',
    'MinimizationResult',
    'OutputGate',
]

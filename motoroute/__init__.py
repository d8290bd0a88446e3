"""
Motoroute backend: trip lifecycle and publication gate.
"""

__version__ = "1.0.0"

"""
Huecraft Colors Module

Provides color space conversions, color-theory palette generation and
ranked palette variations.
"""

__version__ = "1.0.0"

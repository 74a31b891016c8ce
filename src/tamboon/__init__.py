"""
tamboon - Rot128 file decoder and donation charging pipeline
"""

__version__ = "0.1.0"

"""
FX Converter.

Interactive historical currency conversion with a local conversion log.
"""

__version__ = "0.1.0"

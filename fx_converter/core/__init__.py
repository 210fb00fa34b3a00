"""
Core modules for FX Converter.

This package contains input validation, conversion arithmetic,
and the per-run conversion session.
"""

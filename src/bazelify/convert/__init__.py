"""Conversion policy shared with upstream target renderers."""

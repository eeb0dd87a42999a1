#!/usr/bin/env python3
# braillefb/version.py
"""
Version metadata for braillefb.
"""

__version__ = "1.0.0"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"braillefb v{__version__}"

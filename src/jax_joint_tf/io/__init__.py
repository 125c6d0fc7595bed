"""I/O utilities for loading robot descriptions.

This module provides the URDF joint parser and the retrieval helper that
fetches description text from a URL.
"""

from .retrieval import fetch_text
from .urdf_parser import load_urdf, parse_urdf

__all__ = ["fetch_text", "load_urdf", "parse_urdf"]

"""
File input and output for inequality systems and certificates.
"""

from .reader import parse_system, read_system
from .writer import format_certificate, format_vector

__all__ = [
    "parse_system",
    "read_system",
    "format_certificate",
    "format_vector",
]

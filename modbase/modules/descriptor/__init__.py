"""
Descriptor Module - Black Box Interface

Purpose: Static module metadata (name, authors, platforms, references, ...)
Interface: build_descriptor(), merge_info(), Descriptor
Hidden: Default table, field normalization rules

Descriptors are immutable once built, so replicas may share them freely.
"""

from .defaults import RECOGNIZED_KEYS, build_descriptor, default_info, merge_defaults, merge_info
from .models import ALL_PLATFORMS, SITE_URLS, Author, Descriptor, Reference
from .transform import (
    transform_arch,
    transform_authors,
    transform_platforms,
    transform_references,
)

__all__ = [
    "ALL_PLATFORMS",
    "SITE_URLS",
    "RECOGNIZED_KEYS",
    "Author",
    "Descriptor",
    "Reference",
    "build_descriptor",
    "default_info",
    "merge_defaults",
    "merge_info",
    "transform_arch",
    "transform_authors",
    "transform_platforms",
    "transform_references",
]

"""
Descriptor defaulting.

The default table is merged under the caller's metadata: any key the caller
supplies wins, keys it omits (or sets to None) fall back to the table.
"""

from typing import Any, Dict, Mapping, Optional

from .models import Descriptor
from .transform import (
    transform_arch,
    transform_authors,
    transform_platforms,
    transform_references,
)

# Metadata keys the core interprets. Everything else lands in Descriptor.extra.
RECOGNIZED_KEYS = frozenset({
    "Name",
    "Description",
    "Version",
    "Author",
    "Arch",
    "Platform",
    "Ref",
    "References",
    "Privileged",
    "License",
    "Options",
    "AdvancedOptions",
    "EvasionOptions",
})


def default_info(license: str) -> Dict[str, Any]:
    """Return a fresh copy of the default metadata table."""
    return {
        "Name": "No module name",
        "Description": "No module description",
        "Version": "0",
        "Author": None,
        "Arch": None,       # No architectures by default.
        "Platform": [],     # No platforms by default.
        "References": None,
        "Privileged": False,
        "License": license,
    }


def merge_defaults(info: Optional[Mapping[str, Any]], license: str) -> Dict[str, Any]:
    """Overlay caller metadata onto the default table."""
    merged = default_info(license)
    for key, value in (info or {}).items():
        if value is None and key in merged:
            continue
        merged[key] = value

    # "Ref" is accepted as an alias when "References" is not given
    if merged.get("References") is None and merged.get("Ref") is not None:
        merged["References"] = merged["Ref"]
    return merged


def merge_info(info: Optional[Mapping[str, Any]], base: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Layer metadata for subclass constructors.

    Values in ``info`` (supplied by a more derived class or the caller) win
    over ``base``.
    """
    merged = dict(base)
    merged.update(info or {})
    return merged


def build_descriptor(info: Optional[Mapping[str, Any]], license: str) -> Descriptor:
    """Build the immutable Descriptor for a metadata mapping."""
    merged = merge_defaults(info, license)

    return Descriptor(
        name=str(merged["Name"]),
        description=str(merged["Description"]),
        version=str(merged["Version"]),
        authors=transform_authors(merged["Author"]),
        architectures=transform_arch(merged["Arch"]),
        platforms=transform_platforms(merged["Platform"]),
        references=transform_references(merged["References"]),
        license=str(merged["License"]),
        privileged=bool(merged["Privileged"]),
        extra={k: v for k, v in merged.items() if k not in RECOGNIZED_KEYS},
    )

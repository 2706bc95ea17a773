"""
Descriptor data models.

These models define the static metadata every module carries. All of them
are frozen after construction.
"""

import re
from typing import Any, Dict, FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

# Marker platform meaning "every platform"
ALL_PLATFORMS = "all"

# URL templates for well-known reference contexts
SITE_URLS = {
    "CVE": "https://nvd.nist.gov/vuln/detail/CVE-{}",
    "CWE": "https://cwe.mitre.org/data/definitions/{}.html",
    "EDB": "https://www.exploit-db.com/exploits/{}",
    "OSVDB": "http://www.osvdb.org/{}",
    "BID": "http://www.securityfocus.com/bid/{}",
    "MSB": "https://docs.microsoft.com/en-us/security-updates/SecurityBulletins/{}",
    "URL": "{}",
}

_AUTHOR_PATTERN = re.compile(r"^\s*(?P<name>[^<]*?)\s*(?:<(?P<email>[^>]*)>)?\s*$")


class Author(BaseModel):
    """A module author, optionally with a contact address."""

    model_config = ConfigDict(frozen=True)

    name: str
    email: Optional[str] = None

    @classmethod
    def from_string(cls, value: str) -> Optional["Author"]:
        """Parse 'Name <email>' style strings. Returns None if unparseable."""
        match = _AUTHOR_PATTERN.match(value)
        if not match or not match.group("name"):
            return None

        email = match.group("email")
        if email is not None:
            email = re.sub(r"\s*\[at\]\s*", "@", email.strip()) or None

        return cls(name=match.group("name"), email=email)

    def __str__(self) -> str:
        if self.email:
            return f"{self.name} <{self.email}>"
        return self.name


class Reference(BaseModel):
    """An external reference (advisory, article, identifier)."""

    model_config = ConfigDict(frozen=True)

    ctx_id: str
    ctx_val: str

    @property
    def site(self) -> str:
        """Render the reference as a URL when its context is well known."""
        template = SITE_URLS.get(self.ctx_id.upper())
        if template is None:
            return f"{self.ctx_id} ({self.ctx_val})"
        return template.format(self.ctx_val)

    def __str__(self) -> str:
        return self.site


class Descriptor(BaseModel):
    """
    Immutable module metadata.

    Built once at construction by build_descriptor(); caller supplied values
    take precedence over the default table. Keys the core does not recognize
    are kept verbatim in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    version: str
    authors: Tuple[Author, ...] = ()
    architectures: FrozenSet[str] = frozenset()
    platforms: FrozenSet[str] = frozenset()
    references: Tuple[Reference, ...] = ()
    license: str
    privileged: bool = False
    extra: Dict[str, Any] = Field(default_factory=dict)

    @property
    def all_platforms(self) -> bool:
        """True when the platform set is exactly the all-platforms marker."""
        return self.platforms == frozenset({ALL_PLATFORMS})

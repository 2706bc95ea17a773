"""
Lineage and ownership.

A child module inherits owner, workspace and parent identity from the module
that launched it. Values are copied at registration time; no live link to
the parent remains afterwards.
"""

import logging
import os
import sys
from typing import Any, Mapping, Optional, Tuple

from ...clone import duplicate
from ..datastore import MODULE_OWNER, PARENT_UUID, PROUSER, WORKSPACE

logger = logging.getLogger("modbase.lineage")

UNKNOWN_OWNER = "unknown"


def login_env_vars(platform: Optional[str] = None) -> Tuple[str, ...]:
    """Environment variables naming the login user, in lookup order."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return ("USERNAME", "LOGNAME", "USER")
    return ("LOGNAME", "USERNAME", "USER")


def resolve_owner(
    datastore: Mapping[str, Any],
    environ: Optional[Mapping[str, str]] = None,
    platform: Optional[str] = None,
) -> str:
    """
    Determine which user a module runs on behalf of.

    Preference: MODULE_OWNER, then PROUSER, then the login name from the
    environment, then "unknown". Values are whitespace-trimmed and empty
    values are skipped.
    """
    # Generic owner first, then the one set by commercial front ends
    for key in (MODULE_OWNER, PROUSER):
        username = str(datastore.get(key) or "").strip()
        if username:
            return username

    environ = os.environ if environ is None else environ
    for var in login_env_vars(platform):
        username = (environ.get(var) or "").strip()
        if username:
            return username

    return UNKNOWN_OWNER


def register_parent(child: Any, parent: Any) -> None:
    """
    Copy lineage fields from parent into child's configuration.

    WORKSPACE and PROUSER are copied when the parent has them and removed
    from the child otherwise. MODULE_OWNER becomes the parent's resolved
    owner and ParentUUID the parent's identifier.
    """
    for key in (WORKSPACE, PROUSER):
        value = parent.datastore.get(key)
        if value is not None:
            child.datastore[key] = duplicate(value)
        else:
            child.datastore.pop(key, None)

    child.datastore[MODULE_OWNER] = parent.owner()
    child.datastore[PARENT_UUID] = str(parent.uuid)

    logger.debug(
        f"Registered parent {parent.uuid} for {child.uuid} "
        f"(owner: {child.datastore[MODULE_OWNER]})"
    )

"""Runtime home discovery.

A runtime home is a directory that may hold several installed runtimes.
Resolution order:
1. DNX_HOME environment variable
2. KRE_HOME environment variable
3. <user home>/.dnx  (newer layout)
4. <user home>/.k    (new layout)
5. <user home>/.kre  (old layout)
"""

from __future__ import annotations

import logging
import os
from typing import List, Mapping, Optional

from .specs import NAMING_EPOCHS, RUNTIME_HOME_VARIABLES, USER_HOME_VARIABLES

logger = logging.getLogger(__name__)


def get_user_home(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return HOME, falling back to USERPROFILE.

    Empty values count as unset. Returns None when neither is available.
    """
    if environ is None:
        environ = os.environ

    for variable in USER_HOME_VARIABLES:
        if value := environ.get(variable):
            return value
    return None


def get_runtime_homes(environ: Optional[Mapping[str, str]] = None) -> List[Optional[str]]:
    """List candidate runtime homes, highest priority first.

    The explicit overrides are always present in the list, even when unset,
    so callers can see every slot. No filesystem checks are made here.

    Args:
        environ: Environment to read (defaults to os.environ)

    Returns:
        Ordered list of runtime home paths (None for unset overrides)
    """
    if environ is None:
        environ = os.environ

    homes: List[Optional[str]] = [environ.get(name) for name in RUNTIME_HOME_VARIABLES]

    home = get_user_home(environ)
    if home is None:
        logger.debug(
            "Neither HOME nor USERPROFILE is set, skipping default runtime homes."
        )
        return homes

    # .dnx, .k, .kre: same order as the naming epochs
    homes.extend(os.path.join(home, epoch.sdk_folder) for epoch in NAMING_EPOCHS)
    return homes

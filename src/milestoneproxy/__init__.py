"""milestoneproxy: Monday.com milestone board and PDF search backend."""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("milestoneproxy")
except PackageNotFoundError:
    # Imported from a checkout that was never pip-installed.
    warnings.warn(
        "Package metadata for 'milestoneproxy' not found; using fallback version '0.0.0+unknown'.",
        RuntimeWarning,
        stacklevel=2,
    )
    __version__ = "0.0.0+unknown"

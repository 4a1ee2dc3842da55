# -*- coding: utf-8 -*-
"""Application version detection.

Provides a single public function, ``get_app_version()``, which reads the
installed distribution metadata and falls back to ``vdev`` for a source
checkout that was never installed.
"""

from __future__ import annotations

from importlib import metadata
from typing import Optional

_DISTRIBUTION = "seismic-toolkit"
_CACHED_VERSION: Optional[str] = None


def get_app_version() -> str:
    """Return the application version string (e.g., ``v1.2.3``)."""
    global _CACHED_VERSION
    if _CACHED_VERSION:
        return _CACHED_VERSION

    try:
        text = metadata.version(_DISTRIBUTION).strip()
    except metadata.PackageNotFoundError:
        text = ""

    _CACHED_VERSION = (text if text.startswith("v") else f"v{text}") if text else "vdev"
    return _CACHED_VERSION

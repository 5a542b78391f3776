"""Tool manifests: declarative registry configuration."""
from __future__ import annotations

from blocksan.config.manifest import ManifestError, load_manifest, registry_from_manifest

__all__ = ["ManifestError", "load_manifest", "registry_from_manifest"]

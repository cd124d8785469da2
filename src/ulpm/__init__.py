"""ulpm - Universal project scaffolding across language ecosystems."""

from importlib.metadata import version

__version__ = version("ulpm")

from ulpm.core.manifest import Manifest, ManifestSettings

__all__ = [
    "Manifest",
    "ManifestSettings",
]

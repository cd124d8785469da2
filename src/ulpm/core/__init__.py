"""Core project logic: manifest, generated files, package managers, licenses."""

from ulpm.core.manifest import Manifest, ManifestSettings
from ulpm.core.package_managers import PackageManager, get_package_manager

__all__ = [
    "Manifest",
    "ManifestSettings",
    "PackageManager",
    "get_package_manager",
]

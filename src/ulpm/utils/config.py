"""Configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Optional

from ulpm.utils.constants import DEFAULT_LANGUAGES, DEFAULT_LICENSES, NO_LICENSE


def get_ulpm_dir() -> Path:
    """Get the ulpm data directory (XDG-compliant)."""
    if env_dir := os.environ.get("ULPM_DIR"):
        return Path(env_dir)
    return Path.home() / ".config" / "ulpm"


class Config:
    """Application configuration.

    Holds the catalog of supported languages and licenses used to build
    the interactive menus, plus output toggles. The built-in catalog can
    be extended from ``config.json`` in the data directory.
    """

    def __init__(self, ulpm_dir: Optional[Path] = None):
        """Load config from directory."""
        self.ulpm_dir = ulpm_dir or get_ulpm_dir()
        self._config_file = self.ulpm_dir / "config.json"
        self._load()

    def _load(self):
        """Load config from file."""
        # Set defaults
        self.languages: dict[str, dict[str, list[str]]] = copy.deepcopy(
            DEFAULT_LANGUAGES
        )
        self.licenses: list[str] = list(DEFAULT_LICENSES)
        self.debug = False
        self.verbose = False
        # Env var overrides (ULPM_DEBUG=1 etc.)
        self.env: dict[str, str] = {}

        if self._config_file.exists():
            try:
                data = json.loads(self._config_file.read_text())
            except (json.JSONDecodeError, IOError):
                data = {}
            if isinstance(data, dict):
                self._apply_file(data)

        # Apply env section from config, then shell env vars override
        self._apply_env_overrides()

    def _apply_file(self, data: dict) -> None:
        """Take the values of config.json, skipping entries of the wrong type."""
        self.debug = bool(data.get("debug", False))
        self.verbose = bool(data.get("verbose", False))

        env = data.get("env", {})
        if isinstance(env, dict):
            self.env = env

        languages = data.get("languages", {})
        if isinstance(languages, dict):
            self._merge_languages(languages)

        licenses = data.get("licenses", [])
        if isinstance(licenses, list):
            for license_id in licenses:
                if isinstance(license_id, str) and license_id not in self.licenses:
                    self.licenses.append(license_id)

    def _merge_languages(self, languages: dict) -> None:
        """Add user languages and extend option lists of known ones."""
        for name, options in languages.items():
            if not isinstance(options, dict):
                continue
            entry = self.languages.setdefault(name, {"package_managers": []})
            for key, values in options.items():
                if not isinstance(values, list):
                    continue
                current = entry.setdefault(key, [])
                current.extend(
                    v for v in values if isinstance(v, str) and v not in current
                )

    def _apply_env_overrides(self):
        """Apply env overrides: first from config.env, then from shell ULPM_* vars."""
        prefix = "ULPM_"

        def apply_env_dict(env_dict: dict[str, str]):
            for key, value in env_dict.items():
                # Support both ULPM_FOO and FOO formats in config.env
                if key.startswith(prefix):
                    attr_name = key[len(prefix) :].lower()
                else:
                    attr_name = key.lower()
                if attr_name not in ("debug", "verbose"):
                    continue
                setattr(
                    self, attr_name, str(value).lower() in ("true", "1", "yes", "on")
                )

        apply_env_dict(self.env)

        shell_env = {k: v for k, v in os.environ.items() if k.startswith(prefix)}
        apply_env_dict(shell_env)

    def language_names(self) -> list[str]:
        """Names of all supported languages, in catalog order."""
        return list(self.languages)

    def package_managers(self, language: str) -> list[str]:
        """Package managers available for a language."""
        return list(self.languages.get(language, {}).get("package_managers", []))

    def js_runtimes(self, language: str) -> list[str]:
        """Runtimes offered for a language (JavaScript only so far)."""
        return list(self.languages.get(language, {}).get("js_runtimes", []))

    def is_valid_license(self, license_id: str) -> bool:
        """Check a license id against the catalog ("None" is always allowed)."""
        return license_id == NO_LICENSE or license_id in self.licenses

    @property
    def debug_log_path(self) -> Path:
        """Path to the debug log file."""
        return self.ulpm_dir / "debug.log"

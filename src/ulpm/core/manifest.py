"""Project manifest (ulpm.json) and the ecosystem files generated from it."""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from ulpm.utils.config import Config
from ulpm.utils.constants import (
    DEFAULT_AUTHOR,
    DEFAULT_JS_MAIN,
    DEFAULT_PROJECT_VERSION,
    JS_MAIN_SOURCE,
    MANIFEST_NAME,
    PACKAGE_JSON_NAME,
    Language,
)
from ulpm.utils.debug import Output
from ulpm.utils.exceptions import ManifestError

# Top-level string fields every manifest must carry
REQUIRED_FIELDS = (
    "project_name",
    "project_description",
    "project_version",
    "author",
    "license",
    "language",
    "package_manager",
)


@dataclass
class ManifestSettings:
    """Values chosen for a project, with the defaults offered in the menus."""

    language: str = ""
    package_manager: str = ""
    license: str = ""
    project_name: str = ""
    project_description: str = ""
    project_version: str = DEFAULT_PROJECT_VERSION
    author: str = DEFAULT_AUTHOR
    js_runtime: str = ""
    js_main_src: str = DEFAULT_JS_MAIN

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestSettings":
        """Build settings from a manifest document, keeping defaults for gaps."""
        settings = cls()
        for name in REQUIRED_FIELDS:
            value = data.get(name)
            if isinstance(value, str):
                setattr(settings, name, value)

        js = data.get(Language.JAVASCRIPT)
        if isinstance(js, dict):
            if isinstance(js.get("runtime"), str):
                settings.js_runtime = js["runtime"]
            if isinstance(js.get("main"), str):
                settings.js_main_src = js["main"]
        return settings

    def to_dict(self) -> dict[str, Any]:
        """Manifest document for these settings."""
        data: dict[str, Any] = {name: getattr(self, name) for name in REQUIRED_FIELDS}
        lang_section: dict[str, str] = {}
        if self.language == Language.JAVASCRIPT:
            lang_section = {"runtime": self.js_runtime, "main": self.js_main_src}
        if self.language:
            data[self.language] = lang_section
        return data

    def apply_overrides(self, overrides: Mapping[str, Optional[str]]) -> list[str]:
        """Copy non-empty override values in.

        Returns:
            Names of the fields whose value changed
        """
        known = {f.name for f in fields(self)}
        changed = []
        for name, value in overrides.items():
            if name not in known or not value:
                continue
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)
        return changed


def read_json_document(path: Path) -> dict[str, Any]:
    """Read a JSON object from ``path``; a missing file reads as empty.

    Raises:
        ManifestError: If the file is not a JSON object
    """
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text() or "{}")
    except json.JSONDecodeError as e:
        raise ManifestError(
            f"Failed to parse json file {path.name}: {e.msg} at offset {e.pos}"
        ) from e
    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path.name}")
    return data


def write_json_document(path: Path, data: Mapping[str, Any]) -> None:
    """Write ``data`` as indented JSON, replacing the file."""
    path.write_text(json.dumps(data, indent=4) + "\n")


def update_json_field(
    doc: dict[str, Any], field: str, value: str, output: Optional[Output] = None
) -> None:
    """Set a top-level field, logging whether it was changed or added."""
    output = output or Output()
    if field in doc:
        output.debug(f"changing {field} from {doc[field]} to {value}")
    else:
        output.debug(f"adding {field} with value {value}")
    doc[field] = value


def validate_settings(settings: ManifestSettings, config: Config) -> None:
    """Check settings against the language and license catalog.

    Raises:
        ManifestError: Naming the valid choices for the first bad value
    """
    languages = config.language_names()
    if settings.language not in languages:
        raise ManifestError(
            f"Invalid language '{settings.language}'. Valid: {', '.join(languages)}"
        )

    lang_pm = config.package_managers(settings.language)
    if lang_pm and settings.package_manager not in lang_pm:
        raise ManifestError(
            f"Invalid package manager '{settings.package_manager}' for language "
            f"'{settings.language}'. Valid: {', '.join(lang_pm)}"
        )
    if not lang_pm and settings.package_manager:
        raise ManifestError(
            f"Language '{settings.language}' has no supported package managers"
        )

    if not config.is_valid_license(settings.license):
        raise ManifestError(
            f"Invalid license '{settings.license}'. Valid: {', '.join(config.licenses)}"
        )


class Manifest:
    """The ulpm.json document of a project directory."""

    def __init__(self, project_dir: Path) -> None:
        self.project_dir = project_dir
        self.path = project_dir / MANIFEST_NAME
        self.data: dict[str, Any] = {}
        self.settings = ManifestSettings()

    @classmethod
    def load(cls, project_dir: Path) -> "Manifest":
        """Load the manifest; known string fields override the defaults.

        Raises:
            ManifestError: If an existing manifest cannot be parsed
        """
        manifest = cls(project_dir)
        manifest.data = read_json_document(manifest.path)
        manifest.settings = ManifestSettings.from_dict(manifest.data)
        return manifest

    @property
    def is_empty(self) -> bool:
        return not self.data

    def clear(self) -> None:
        """Drop the stored document, keeping the loaded values as defaults."""
        self.data = {}

    def check_fields(self) -> None:
        """Check that every required field is stored as a string.

        Raises:
            ManifestError: Naming the first missing or non-string field
        """
        for name in REQUIRED_FIELDS:
            if not isinstance(self.data.get(name), str):
                raise ManifestError(
                    f"Missing/Non-string field '{name}' in {MANIFEST_NAME}"
                )

    def validate(self, config: Config) -> None:
        """Check the stored document's fields, then the catalog values.

        Raises:
            ManifestError: On a missing/non-string field or invalid value
        """
        self.check_fields()
        validate_settings(self.settings, config)

    def save(self) -> None:
        """Write the current settings into the manifest, keeping unknown keys."""
        self.data.update(self.settings.to_dict())
        write_json_document(self.path, self.data)


def generate_js_package_json(
    settings: ManifestSettings, project_dir: Path
) -> Path:
    """Write a fresh package.json for a JavaScript project."""
    path = project_dir / PACKAGE_JSON_NAME
    doc = {
        "name": settings.project_name,
        "version": settings.project_version,
        "description": settings.project_description,
        "main": settings.js_main_src,
        "scripts": {"start": f"{settings.js_runtime} {settings.js_main_src}"},
        "keywords": [],
        "author": settings.author,
        "license": settings.license,
        "type": "commonjs",
    }
    write_json_document(path, doc)
    return path


def create_js_main_entry(
    settings: ManifestSettings, project_dir: Path
) -> Optional[Path]:
    """Create the main source file with a hello-world line.

    Returns:
        The created path, or None if the file already existed
    """
    path = project_dir / settings.js_main_src
    if path.exists():
        return None
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(JS_MAIN_SOURCE)
    return path

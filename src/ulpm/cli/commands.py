"""CLI command handlers."""

from pathlib import Path
from typing import Mapping, Optional, Sequence

from ulpm.cli.ui.menu import confirm, run_entry_menu, run_input_menu
from ulpm.core.license import download_license
from ulpm.core.manifest import (
    REQUIRED_FIELDS,
    Manifest,
    ManifestSettings,
    create_js_main_entry,
    generate_js_package_json,
    read_json_document,
    update_json_field,
    validate_settings,
    write_json_document,
)
from ulpm.core.package_managers import get_package_manager, run_script
from ulpm.utils.config import Config
from ulpm.utils.constants import (
    CUSTOM_LICENSE,
    DEFAULT_AUTHOR,
    DEFAULT_JS_MAIN,
    DEFAULT_PROJECT_VERSION,
    LICENSE_FILE_NAME,
    MANIFEST_NAME,
    NO_LICENSE,
    PACKAGE_JSON_NAME,
    Language,
)
from ulpm.utils.debug import Output
from ulpm.utils.exceptions import ConfigurationError, LicenseDownloadError, ManifestError

# Manifest fields mirrored into package.json by `ulpm set`
PACKAGE_JSON_FIELDS = {
    "project_name": "name",
    "project_description": "description",
    "project_version": "version",
    "author": "author",
    "license": "license",
}


def prompt_settings(settings: ManifestSettings, config: Config, output: Output) -> None:
    """Walk through the init menus, using current values as defaults.

    Raises:
        ManifestError: If a language without scaffolding support is chosen
    """
    settings.language = run_entry_menu(
        "Which language do you want to use?",
        config.language_names(),
        settings.language,
        output=output,
    )
    if settings.language != Language.JAVASCRIPT:
        raise ManifestError(f"language '{settings.language}' is WIP")

    settings.js_runtime = run_entry_menu(
        "Choose a Javascript runtime",
        config.js_runtimes(settings.language),
        settings.js_runtime,
        output=output,
    )
    settings.package_manager = run_entry_menu(
        "Choose a preferred package manager to use",
        config.package_managers(settings.language),
        settings.package_manager,
        output=output,
    )

    settings.project_name = run_input_menu(
        "Name of the project", settings.project_name, output=output
    )
    settings.project_description = run_input_menu(
        "Description of the project", settings.project_description, output=output
    )
    settings.project_version = run_input_menu(
        "Initial Version of the project",
        settings.project_version or DEFAULT_PROJECT_VERSION,
        output=output,
    )
    settings.author = run_input_menu(
        "Author of the project", settings.author or DEFAULT_AUTHOR, output=output
    )
    settings.js_main_src = run_input_menu(
        "Path to main javascript entry",
        settings.js_main_src or DEFAULT_JS_MAIN,
        output=output,
    )

    settings.license = run_entry_menu(
        "Choose a license for the project",
        config.licenses,
        settings.license,
        output=output,
    )


def install_license(
    license_id: str,
    project_dir: Path,
    force: bool,
    output: Output,
    exists_message: str = f"{LICENSE_FILE_NAME} already exists, skipping download",
) -> bool:
    """Download the license text unless there is nothing (or no need) to fetch.

    A failed download is reported but does not fail the command: the
    manifest has already been written at this point.

    Returns:
        True if a license file was written
    """
    if license_id == NO_LICENSE:
        return False
    if license_id == CUSTOM_LICENSE:
        output.info(f"Custom license selected, add your own {LICENSE_FILE_NAME}")
        return False

    path = project_dir / LICENSE_FILE_NAME
    if path.exists() and not force:
        output.warn(exists_message)
        return False

    path.unlink(missing_ok=True)
    output.info(f"Downloading license {license_id} to {LICENSE_FILE_NAME} ...")
    try:
        download_license(license_id, path, output=output)
    except LicenseDownloadError as e:
        output.error(str(e))
        return False

    output.info("Done! Remember to modify the copyright holder and year")
    return True


def cmd_init(
    overrides: Mapping[str, Optional[str]],
    force: bool = False,
    yes: bool = False,
    output: Optional[Output] = None,
    config: Optional[Config] = None,
    project_dir: Optional[Path] = None,
) -> None:
    """Initialize a project: manifest, license and ecosystem files.

    Nothing is written until every menu has been answered, so bailing out
    of a menu leaves the directory untouched.
    """
    output = output or Output()
    config = config or Config()
    project_dir = project_dir or Path.cwd()

    manifest = Manifest.load(project_dir)
    if not manifest.is_empty:
        question = (
            f"The manifest {MANIFEST_NAME} is not empty. "
            "Do you want to overwrite all options?"
        )
        if not (force or confirm(question)):
            output.info(f"Keeping the existing {MANIFEST_NAME}")
            return
        manifest.clear()

    settings = manifest.settings
    settings.apply_overrides(overrides)
    if not yes:
        prompt_settings(settings, config, output)
    validate_settings(settings, config)
    output.debug(
        "Writing manifest",
        path=manifest.path,
        language=settings.language,
        package_manager=settings.package_manager,
    )

    manifest.save()
    output.info(f"Wrote {MANIFEST_NAME}")

    install_license(settings.license, project_dir, force, output)

    if settings.language == Language.JAVASCRIPT:
        output.info(f"Creating {PACKAGE_JSON_NAME} ...")
        generate_js_package_json(settings, project_dir)

        output.info(f"Creating main entry at '{settings.js_main_src}' ...")
        if create_js_main_entry(settings, project_dir) is None:
            output.warn(f"{settings.js_main_src} already exists, leaving it untouched")

    output.info("Done!")


def _load_existing(project_dir: Path) -> Manifest:
    manifest = Manifest.load(project_dir)
    if manifest.is_empty:
        raise ManifestError(
            f"No project manifest found ({MANIFEST_NAME}), run 'ulpm init' first"
        )
    manifest.check_fields()
    return manifest


def cmd_set(
    overrides: Mapping[str, Optional[str]],
    force: bool = False,
    output: Optional[Output] = None,
    config: Optional[Config] = None,
    project_dir: Optional[Path] = None,
) -> None:
    """Update manifest fields, mirroring them into package.json."""
    output = output or Output()
    config = config or Config()
    project_dir = project_dir or Path.cwd()

    manifest = _load_existing(project_dir)
    settings = manifest.settings
    changed = settings.apply_overrides(overrides)
    if not changed:
        output.info("Nothing to update")
        return
    validate_settings(settings, config)

    for field in changed:
        if field in REQUIRED_FIELDS:
            update_json_field(manifest.data, field, getattr(settings, field), output)
    manifest.save()
    output.info(f"Updated {MANIFEST_NAME}")

    mirrored = [field for field in changed if field in PACKAGE_JSON_FIELDS]
    if settings.language == Language.JAVASCRIPT and mirrored:
        pkg_path = project_dir / PACKAGE_JSON_NAME
        pkg_doc = read_json_document(pkg_path)
        for field in mirrored:
            update_json_field(
                pkg_doc, PACKAGE_JSON_FIELDS[field], getattr(settings, field), output
            )
        write_json_document(pkg_path, pkg_doc)
        output.info(f"Updated {PACKAGE_JSON_NAME}")

    if "license" in changed:
        install_license(
            settings.license,
            project_dir,
            force,
            output,
            exists_message=f"{LICENSE_FILE_NAME} already exists, use --force to overwrite",
        )


def cmd_run(
    script: str,
    args: Sequence[str] = (),
    output: Optional[Output] = None,
    config: Optional[Config] = None,
    project_dir: Optional[Path] = None,
) -> None:
    """Run a script with the project's package manager."""
    output = output or Output()
    config = config or Config()
    project_dir = project_dir or Path.cwd()

    manifest = _load_existing(project_dir)
    pm_name = manifest.settings.package_manager
    if not pm_name:
        raise ConfigurationError(f"No package manager set in {MANIFEST_NAME}")
    manifest.validate(config)

    run_script(get_package_manager(pm_name), script, args, output, cwd=project_dir)

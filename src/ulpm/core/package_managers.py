"""Package manager command builders and script runner."""

import subprocess
from pathlib import Path
from typing import Optional, Sequence

from ulpm.utils.debug import Output
from ulpm.utils.exceptions import CommandError, ConfigurationError


class PackageManager:
    """Builds argv lists for one package manager.

    Subclasses set the executable name and any verbs that differ.
    """

    command = ""
    run_verb = "run"

    def run_args(self, script: str, args: Sequence[str] = ()) -> list[str]:
        return [self.command, self.run_verb, script, *args]


class Npm(PackageManager):
    command = "npm"


class Yarn(PackageManager):
    command = "yarn"


class Pnpm(PackageManager):
    command = "pnpm"


PACKAGE_MANAGERS: dict[str, type[PackageManager]] = {
    cls.command: cls for cls in (Npm, Yarn, Pnpm)
}


def get_package_manager(name: str) -> PackageManager:
    """Look up a package manager by command name.

    Raises:
        ConfigurationError: If ``name`` is not a supported package manager
    """
    try:
        return PACKAGE_MANAGERS[name]()
    except KeyError:
        valid = ", ".join(PACKAGE_MANAGERS)
        raise ConfigurationError(
            f"Unsupported package manager '{name}'. Valid: {valid}"
        ) from None


def run_script(
    pm: PackageManager,
    script: str,
    args: Sequence[str] = (),
    output: Optional[Output] = None,
    cwd: Optional[Path] = None,
) -> None:
    """Run a project script through the package manager.

    Output of the child process is only shown in verbose mode.

    Raises:
        CommandError: If the package manager is missing or the script fails
    """
    output = output or Output()
    argv = pm.run_args(script, args)
    output.debug("Running", command=" ".join(argv))

    try:
        result = subprocess.run(
            argv,
            capture_output=not output.verbose,
            cwd=cwd,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        raise CommandError(f"Package manager '{pm.command}' not found in PATH")

    if result.returncode != 0:
        if result.stderr:
            output.debug("Script stderr", stderr=result.stderr.strip()[:200])
        raise CommandError(
            f"Failed to run cmd '{script}'", returncode=result.returncode
        )

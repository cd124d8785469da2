"""CLI entry point for ulpm.

Uses Typer for command routing with lazy loading for performance.
`ulpm run` stays fast by not importing the menu modules.
"""

from typing import Optional

import typer

__all__ = ["app", "main"]

app = typer.Typer(
    name="ulpm",
    help="Manage projects across multiple languages with a single universal CLI.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        from ulpm import __version__

        typer.echo(f"ulpm {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version information",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show output of executed commands"
    ),
    debug: bool = typer.Option(False, "--debug", help="Print debug information"),
) -> None:
    """Manage projects across multiple languages with a single universal CLI."""
    ctx.obj = {"verbose": verbose, "debug": debug}


def _make_output(ctx: typer.Context):
    """Build config and output settings for a command."""
    from ulpm.utils.config import Config
    from ulpm.utils.debug import Output

    flags = ctx.obj or {}
    config = Config()
    output = Output.from_config(
        config, verbose=flags.get("verbose", False), debug=flags.get("debug", False)
    )
    return config, output


def _fail(output, error: Exception) -> None:
    """Report an expected failure and exit with status 1."""
    output.fatal(str(error))
    raise typer.Exit(code=1)


# Manifest options shared by `init` and `set`
LanguageOpt = typer.Option(
    None, "--language", help="Set the project language (e.g. javascript, rust)"
)
PackageManagerOpt = typer.Option(
    None,
    "--package-manager",
    "--package_manager",
    help="Specify package manager (e.g. npm, yarn)",
)
ProjectNameOpt = typer.Option(
    None, "--project-name", "--project_name", help="Name of the project"
)
LicenseOpt = typer.Option(
    None, "--license", help="Project license (e.g. MIT, GPL-3.0-only)"
)
DescriptionOpt = typer.Option(
    None,
    "--project-description",
    "--project_description",
    help="Short description of the project",
)
AuthorOpt = typer.Option(None, "--author", help="Author name and info")
VersionOpt = typer.Option(
    None,
    "--project-version",
    "--project_version",
    help="Version of the project (e.g. v0.0.1)",
)
RuntimeOpt = typer.Option(
    None, "--js-runtime", "--js_runtime", help="JavaScript runtime (e.g. node, bun)"
)


def _overrides(**values: Optional[str]) -> dict[str, Optional[str]]:
    return {name: value for name, value in values.items() if value}


@app.command()
def init(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite existing project files"
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", help="Skip prompts and use default values"
    ),
    language: Optional[str] = LanguageOpt,
    package_manager: Optional[str] = PackageManagerOpt,
    project_name: Optional[str] = ProjectNameOpt,
    license: Optional[str] = LicenseOpt,
    project_description: Optional[str] = DescriptionOpt,
    author: Optional[str] = AuthorOpt,
    project_version: Optional[str] = VersionOpt,
    js_runtime: Optional[str] = RuntimeOpt,
) -> None:
    """Initialize a new project with interactive prompts."""
    from ulpm.cli.commands import cmd_init
    from ulpm.utils.exceptions import UlpmError

    config, output = _make_output(ctx)
    overrides = _overrides(
        language=language,
        package_manager=package_manager,
        project_name=project_name,
        license=license,
        project_description=project_description,
        author=author,
        project_version=project_version,
        js_runtime=js_runtime,
    )
    try:
        cmd_init(overrides, force=force, yes=yes, output=output, config=config)
    except UlpmError as e:
        _fail(output, e)


@app.command("set")
def set_(
    ctx: typer.Context,
    force: bool = typer.Option(
        False, "--force", "-f", help="Allow replacing LICENSE.txt"
    ),
    language: Optional[str] = LanguageOpt,
    package_manager: Optional[str] = PackageManagerOpt,
    project_name: Optional[str] = ProjectNameOpt,
    license: Optional[str] = LicenseOpt,
    project_description: Optional[str] = DescriptionOpt,
    author: Optional[str] = AuthorOpt,
    project_version: Optional[str] = VersionOpt,
    js_runtime: Optional[str] = RuntimeOpt,
) -> None:
    """Modify settings in the manifest."""
    from ulpm.cli.commands import cmd_set
    from ulpm.utils.exceptions import UlpmError

    config, output = _make_output(ctx)
    overrides = _overrides(
        language=language,
        package_manager=package_manager,
        project_name=project_name,
        license=license,
        project_description=project_description,
        author=author,
        project_version=project_version,
        js_runtime=js_runtime,
    )
    try:
        cmd_set(overrides, force=force, output=output, config=config)
    except UlpmError as e:
        _fail(output, e)


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True}
)
def run(
    ctx: typer.Context,
    script: str = typer.Argument(..., help="Script to run"),
) -> None:
    """Run a script using the chosen package manager (currently JavaScript only)."""
    from ulpm.cli.commands import cmd_run
    from ulpm.utils.exceptions import UlpmError

    config, output = _make_output(ctx)
    try:
        cmd_run(script, list(ctx.args), output=output, config=config)
    except UlpmError as e:
        _fail(output, e)


def cli_main() -> None:
    """Entry point for pyproject.toml scripts."""
    app()


if __name__ == "__main__":
    cli_main()

"""Allow running the CLI with ``python -m ulpm.cli``."""

from ulpm.cli import cli_main

cli_main()

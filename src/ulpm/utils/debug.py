"""User-facing output and debug logging."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ulpm.utils.config import Config


class Output:
    """Prints ulpm status lines and optional debug traces.

    Verbosity is carried by the instance rather than by process-wide
    flags, so every command receives the settings it was invoked with.

    Args:
        verbose: Show output of executed package manager commands
        debug: Print debug lines (and append them to ``log_path``)
        log_path: Optional file receiving a copy of every debug line
        console: Console for regular output (stdout)
        err_console: Console for warnings and errors (stderr)
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        log_path: Optional[Path] = None,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ) -> None:
        self.verbose = verbose
        self.debug_enabled = debug
        self.log_path = log_path
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    @classmethod
    def from_config(
        cls, config: Config, verbose: bool = False, debug: bool = False
    ) -> "Output":
        """Build output settings from config, CLI flags take precedence."""
        debug = debug or config.debug
        return cls(
            verbose=verbose or config.verbose,
            debug=debug,
            log_path=config.debug_log_path if debug else None,
        )

    def info(self, message: str) -> None:
        self.console.print(f"[bold cyan]ulpm: INFO:[/bold cyan] {escape(message)}")

    def warn(self, message: str) -> None:
        self.err_console.print(
            f"[bold yellow]ulpm: WARNING:[/bold yellow] {escape(message)}"
        )

    def error(self, message: str) -> None:
        self.err_console.print(f"[bold red]ulpm: ERROR:[/bold red] {escape(message)}")

    def fatal(self, message: str) -> None:
        """Report an error that ends the command."""
        self.err_console.print(f"[bold red]ulpm: FATAL:[/bold red] {escape(message)}")

    def debug(self, message: str, **kwargs) -> None:
        """Log debug message if debug mode is enabled.

        Args:
            message: Debug message
            **kwargs: Additional key=value pairs to log
        """
        if not self.debug_enabled:
            return

        extras = " ".join(f"{k}={v}" for k, v in kwargs.items()) if kwargs else ""
        line = message
        if extras:
            line += f" | {extras}"

        self.console.print(f"[bold magenta][DEBUG]:[/bold magenta] {escape(line)}")
        self._log_to_file(line)

    def _log_to_file(self, line: str) -> None:
        """Append line to debug log file."""
        if self.log_path is None:
            return
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a") as f:
                f.write(f"[ulpm] {timestamp} {line}\n")
        except OSError:
            # Stop logging after the first failed write
            self.log_path = None

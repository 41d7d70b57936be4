"""Parse and organize command line args."""

from collections.abc import Callable
from pathlib import Path

import typed_argparse as tap


class Args(tap.TypedArgs):
    """Command line args."""

    files: list[str] | None = tap.arg(
        positional=True,
        nargs="*",
        help="Rust source files (or directories with --check) to translate",
        default=[],
    )
    out: Path | None = tap.arg(
        help="Write the generated Luau code to this file instead of stdout",
        default=None,
    )
    check: bool = tap.arg(
        help="Only validate the input and report diagnostics",
        default=False,
    )
    json: bool = tap.arg(help="Report diagnostics as JSON", default=False)
    indent: int | None = tap.arg(
        help="Number of spaces per indentation level (default: 4)",
        default=None,
    )
    tabs: bool = tap.arg(help="Indent generated code with tabs", default=False)
    source_comments: bool = tap.arg(
        help="Precede generated lines with '-- file:line' comments",
        default=False,
    )
    path: Path | None = tap.arg(
        help="Working directory used to look up .rust2luau/config.toml",
        default=None,
    )
    verbose: bool = tap.arg(help="Enables verbose (DEBUG) logging", default=False)
    version: bool = tap.arg(help="Show version and exit", default=False)

    @property
    def input_paths(self) -> list[Path]:
        """Get the positional input paths."""
        return [Path(name) for name in self.files or []]

    @property
    def working_dir(self) -> Path:
        """Get working directory."""
        if self.path:
            work_dir = self.path
            if not work_dir.is_absolute():
                work_dir = Path.cwd().joinpath(work_dir).resolve()
        else:
            work_dir = Path.cwd().resolve()

        if not work_dir.is_dir():
            msg = (
                f"Specified path '{self.path}' resolved to '{work_dir}' which is "
                "not a valid directory."
            )
            raise ValueError(msg)

        return work_dir


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    tap.Parser(Args).bind(app_main).run()

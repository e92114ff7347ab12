import logging
from enum import Enum
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from shimgen.cli.modules import modules
from shimgen.cli.types import type_info, types

app = typer.Typer(
    name="shimgen",
    help="shimgen CLI — inspect the FFI-exposed items of a Rust crate and their type mappings.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@app.callback()
def configure(
    log_level: Annotated[
        LogLevel,
        typer.Option("--log-level", envvar="SHIMGEN_LOG_LEVEL", case_sensitive=False, help="Logging level."),
    ] = LogLevel.WARNING,
) -> None:
    logging.basicConfig(
        level=log_level.value,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


app.command("modules")(modules)
app.command("types")(types)
app.command("type")(type_info)


def main() -> None:
    app()

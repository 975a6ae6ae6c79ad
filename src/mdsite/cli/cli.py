"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from mdsite.cli.commands import build_cmd, check_cmd, configure_logging, list_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Render Markdown posts into a static HTML site")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging to stderr")] = False,
    ):
    configure_logging(verbose)


app.command(name="build")(build_cmd)
app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)

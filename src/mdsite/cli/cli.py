"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdsite.cli.commands import build_cmd, render_cmd, route_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Markdown chapter rendering and publishing pipeline")

app.command(name="build")(build_cmd)
app.command(name="render")(render_cmd)
app.command(name="route")(route_cmd)

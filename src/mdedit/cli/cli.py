"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdedit.cli.commands import export_cmd, highlight_cmd, main_callback, outline_cmd, parse_cmd


app = typer.Typer(name="mdedit", no_args_is_help=True, help="Markdown editor core: parse, highlight, export")

app.callback()(main_callback)
app.command(name="parse")(parse_cmd)
app.command(name="export")(export_cmd)
app.command(name="highlight")(highlight_cmd)
app.command(name="outline")(outline_cmd)

"""CLI entrypoint: Typer app definition and command registration"""

import typer

from sitecms.cli.commands import (
    blogs_cmd, export_cmd, import_cmd, init_cmd, parse_cmd,
    render_page_cmd, section_add_cmd, section_delete_cmd, sections_cmd,
)


app = typer.Typer(name="sitecms", no_args_is_help=True, help="Site content management: documents, blogs, and page sections")

app.command(name="init")(init_cmd)
app.command(name="parse")(parse_cmd)
app.command(name="import")(import_cmd)
app.command(name="blogs")(blogs_cmd)
app.command(name="export")(export_cmd)
app.command(name="sections")(sections_cmd)
app.command(name="section-add")(section_add_cmd)
app.command(name="section-delete")(section_delete_cmd)
app.command(name="render-page")(render_page_cmd)

from __future__ import annotations

import typer

from form_parser.cli.commands.export import export_command
from form_parser.cli.commands.load import load_command
from form_parser.cli.commands.stats import stats_command
from form_parser.cli.commands.validate import validate_command

app = typer.Typer(
    name="form-parser",
    help="Questionnaire definition validator, inspector, and exporter",
    add_completion=False,
)

app.command("validate")(validate_command)
app.command("stats")(stats_command)
app.command("export")(export_command)
app.command("load")(load_command)


def main():
    app()


if __name__ == "__main__":
    main()

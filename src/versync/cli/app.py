import typer

from versync.cli.sync import sync

app = typer.Typer(
    name="versync",
    help="versync: keep version numbers in sync across package.json and JS/TS sources.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("sync")(sync)


def main() -> None:
    app()

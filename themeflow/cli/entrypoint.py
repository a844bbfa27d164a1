import typer

from themeflow.cli import init, resolve, show

app = typer.Typer(
    help="ThemeFlow resolves theme templates through an override hierarchy and runs theme hooks.",
    add_completion=False,
)


def settings_callback(ctx: typer.Context, settings: str | None = None) -> None:
    """
    Priority order (highest to lowest):
    1. --settings CLI argument
    2. THEMEFLOW_SETTINGS environment variable (handled by ThemeFlowSettings.load)
    3. Default themeflow.yaml (handled by ThemeFlowSettings.load)
    """
    ctx.obj = {"settings": settings if settings else ""}


@app.callback()
def main(
    ctx: typer.Context,
    settings: str | None = typer.Option(
        None, "--settings", "-s", help="Specify a path to a custom settings file."
    ),
) -> None:
    settings_callback(ctx, settings)


app.command()(init.init)
app.command()(resolve.resolve)
app.command()(show.show)

if __name__ == "__main__":
    app()

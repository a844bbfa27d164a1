from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import typer
import yaml
from tabulate import tabulate
from termcolor import colored

from themeflow.builder import ThemeFlowBuilder
from themeflow.cli.exceptions import CLIShowError
from themeflow.exceptions import ThemeFlowError

if TYPE_CHECKING:
    from themeflow.themeflow import ThemeFlow

app = typer.Typer()

DESCRIPTION_MAX_LENGTH = 80


@app.command()
def show(
    ctx: typer.Context,
    hooks: bool = typer.Option(False, "--hooks", "-k", help="Display registered hook callbacks"),
    rules: bool = typer.Option(False, "--rules", "-r", help="Display the template rule table"),
    roots: bool = typer.Option(False, "--roots", "-t", help="Display the template override roots"),
    settings: bool = typer.Option(False, "--settings", "-s", help="Display current ThemeFlow settings"),
    all: bool = typer.Option(False, "--all", "-a", help="Display all information"),
) -> None:
    """
    Displays summary info about ThemeFlow.
    """
    if not any([hooks, rules, roots, settings, all]):
        raise typer.BadParameter(
            "You must provide at least one option: --hooks, --rules, --roots, --settings, or --all."
        )

    try:
        builder = ThemeFlowBuilder()
        if ctx.obj and ctx.obj.get("settings"):
            builder.with_settings_path(ctx.obj.get("settings"))
        themeflow = builder.build()

        if all or hooks:
            themeflow.setup()
            show_hooks(themeflow)
        if all or rules:
            show_rules(themeflow)
        if all or roots:
            show_roots(themeflow)
        if all or settings:
            show_themeflow_settings(themeflow)

    except ThemeFlowError as e:
        CLIShowError(
            message=f"ThemeFlow configuration error: {e}",
            hint="Check your ThemeFlow settings and that hook modules import cleanly.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=2) from None

    except (FileNotFoundError, PermissionError) as e:
        CLIShowError(
            message=f"File system error: {e}",
            hint="Check file permissions and ensure all referenced files exist.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=2) from None


def show_hooks(themeflow: "ThemeFlow") -> None:
    """Display registered hook callbacks in dispatch order."""
    show_formatted_table(
        "HOOK REGISTRY",
        render_hooks_table_data,
        ["Hook", "Priority", "Callback", "Args", "Description"],
        themeflow,
    )


def show_rules(themeflow: "ThemeFlow") -> None:
    """Display the template rule table."""
    show_formatted_table(
        "TEMPLATE RULES", render_rules_table_data, ["Content Type", "Patterns (most specific first)"], themeflow
    )


def show_roots(themeflow: "ThemeFlow") -> None:
    """Display the template override roots."""
    show_formatted_table("TEMPLATE ROOTS", render_roots_table_data, ["Priority", "Root", "Exists"], themeflow)


def show_themeflow_settings(themeflow: "ThemeFlow") -> None:
    """Display the ThemeFlow settings."""
    show_formatted_table("THEMEFLOW SETTINGS", render_settings_table_data, ["Setting", "Value"], themeflow)


def show_formatted_table(
    banner_text: str,
    table_data_renderer: Callable[["ThemeFlow"], list[list[str]]],
    headers: list[str],
    themeflow: "ThemeFlow",
) -> None:
    """Display information in a formatted table.

    Args:
        banner_text: The text to display in the banner.
        table_data_renderer: The function to prepare the data for the table.
        headers: The headers for the table.
        themeflow: The ThemeFlow object.
    """
    table_data = table_data_renderer(themeflow)

    if not table_data:
        typer.secho(f"\n{banner_text}: nothing to show", fg=typer.colors.YELLOW)
        return

    colored_headers = get_colored_headers(headers, "blue")
    colalign = ["center"] + ["left"] * (len(headers) - 1)
    table = tabulate(table_data, headers=colored_headers, tablefmt="rounded_grid", colalign=colalign)
    display_banner(banner_text, table)
    typer.echo(table)


def render_hooks_table_data(themeflow: "ThemeFlow") -> list[list[str]]:
    """Render hook registrations as table rows, one per callback."""
    table_data = []
    for hook_name, registrations in themeflow.registry.registrations().items():
        for registration in registrations:
            table_data.append(
                [
                    colored(hook_name, "cyan"),
                    str(registration.priority),
                    colored(registration.callback_name, "yellow"),
                    str(registration.accepted_args),
                    describe_callback(registration.callback),
                ]
            )
    return table_data


def render_rules_table_data(themeflow: "ThemeFlow") -> list[list[str]]:
    """Render the rule table; the default patterns appear as their own row."""
    rules = themeflow.rules
    table_data = [
        [colored(category, "cyan"), "\n".join(patterns)] for category, patterns in rules.as_dict().items()
    ]
    if rules.default_patterns:
        table_data.append([colored("(every type)", "magenta"), "\n".join(rules.default_patterns)])
    return table_data


def render_roots_table_data(themeflow: "ThemeFlow") -> list[list[str]]:
    table_data = []
    for index, root in enumerate(themeflow.resolver.roots, start=1):
        exists = Path(root).is_dir()
        table_data.append(
            [str(index), root, colored("yes", "green") if exists else colored("no", "red")]
        )
    return table_data


def render_settings_table_data(themeflow: "ThemeFlow") -> list[list[str]]:
    """Render settings as rows; nested values are shown as YAML."""
    table_data = []
    for key, value in themeflow.settings.as_dict.items():
        if isinstance(value, dict | list) and value:
            display = yaml.safe_dump(value, default_flow_style=False, sort_keys=False).strip()
        else:
            display = str(value)
        table_data.append([colored(key, "cyan"), display])
    return table_data


def describe_callback(callback: Callable) -> str:
    """First docstring line of a callback, shortened for table display."""
    doc = (callback.__doc__ or "").strip()
    if not doc:
        return "-"
    first_line = doc.splitlines()[0]
    if len(first_line) > DESCRIPTION_MAX_LENGTH:
        return first_line[: DESCRIPTION_MAX_LENGTH - 3] + "..."
    return first_line


def get_colored_headers(headers: list[str], color: str) -> list[str]:
    """Color the headers."""
    return [colored(header, color, attrs=["bold"]) for header in headers]


def display_banner(banner_text: str, table: str) -> None:
    """Create a banner with the given text and display it above the table.

    Args:
        banner_text: The text to display in the banner.
        table: The table string to determine the width for centering the banner.
    """
    banner = colored(banner_text, "magenta", attrs=["bold", "underline"])

    table_width = len(table.split("\n")[0])
    centered_banner = banner.center(table_width + 5)

    typer.echo("\n\n" + centered_banner)

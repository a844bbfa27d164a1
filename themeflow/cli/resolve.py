import ast
from typing import Any

import typer
from tabulate import tabulate
from termcolor import colored

from themeflow.builder import ThemeFlowBuilder
from themeflow.cli.constants import FOUND_MARK, MISSING_MARK
from themeflow.cli.exceptions import CLIResolveError
from themeflow.cli.show import display_banner, get_colored_headers
from themeflow.exceptions import ThemeFlowError
from themeflow.logger import logger
from themeflow.templates import ContentDescriptor, ResolvedTemplate, TemplateNotFoundError
from themeflow.themeflow import ThemeFlow

app = typer.Typer(help="Resolve and render templates")


def parse_context_vars(values: list[str] | None) -> dict[str, Any]:
    """
    Parse ``key=value`` pairs into a render context.

    Values are read as Python literals when possible, otherwise kept as strings.

    Raises:
        typer.BadParameter: If a pair has no '=' or an empty key.
    """
    context: dict[str, Any] = {}
    for item in values or []:
        key, sep, raw = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise typer.BadParameter(f"Invalid --var '{item}', expected key=value")
        try:
            context[key] = ast.literal_eval(raw.strip())
        except (ValueError, SyntaxError):
            context[key] = raw.strip()
    return context


@app.command()
def resolve(
    ctx: typer.Context,
    content_type: str = typer.Argument(..., help="Content type, e.g. single, page, archive"),
    type_slug: str | None = typer.Option(None, "--type-slug", "-t", help="Sub type, e.g. post"),
    path_slug: str | None = typer.Option(None, "--path-slug", "-p", help="Slug of the item"),
    depth: int | None = typer.Option(None, "--depth", "-d", min=0, help="Hierarchy depth of the item"),
    render: bool = typer.Option(False, "--render", "-r", help="Render the resolved template"),
    var: list[str] | None = typer.Option(None, "--var", "-v", help="Render context value as key=value"),
) -> None:
    """
    Shows which template a content descriptor resolves to.
    """
    context = parse_context_vars(var)

    try:
        builder = ThemeFlowBuilder()
        if ctx.obj and ctx.obj.get("settings"):
            builder.with_settings_path(ctx.obj.get("settings"))
        themeflow = builder.build()

        logger.set_execution_context(
            "resolve", "command", themeflow.settings.log_dir, themeflow.settings.log_level
        )
        try:
            themeflow.setup()
            descriptor = ContentDescriptor.create(
                content_type, type_slug=type_slug, path_slug=path_slug, depth=depth
            )
            show_resolution_table(themeflow, descriptor)

            resolved = themeflow.resolve(descriptor)
            show_resolved(resolved)

            if render:
                typer.echo(themeflow.render(descriptor, context))
        finally:
            logger.clear_execution_context()

    except TemplateNotFoundError as e:
        CLIResolveError(
            message=str(e),
            hint="Add one of the candidate templates or a fallback template to a template root.",
        ).show()
        raise typer.Exit(code=2) from None

    except ThemeFlowError as e:
        CLIResolveError(
            message=f"Failed to resolve '{content_type}': {e}",
            hint="Check your ThemeFlow settings, hook modules and templates.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=2) from None


def render_resolution_table_data(themeflow: ThemeFlow, descriptor: ContentDescriptor) -> list[list[str]]:
    """One row per candidate, one column per root, marking where the candidate exists."""
    resolver = themeflow.resolver
    table_data = []
    for index, candidate in enumerate(themeflow.candidates(descriptor), start=1):
        row = [str(index), candidate]
        for root in resolver.roots:
            found = resolver.exists(root, candidate)
            row.append(colored(FOUND_MARK, "green") if found else colored(MISSING_MARK, "red"))
        table_data.append(row)
    return table_data


def show_resolution_table(themeflow: ThemeFlow, descriptor: ContentDescriptor) -> None:
    table_data = render_resolution_table_data(themeflow, descriptor)
    headers = get_colored_headers(["#", "Candidate", *themeflow.resolver.roots], "blue")
    colalign = ["center", "left"] + ["center"] * len(themeflow.resolver.roots)
    table = tabulate(table_data, headers=headers, tablefmt="rounded_grid", colalign=colalign)
    display_banner(f"CANDIDATES FOR '{descriptor}'", table)
    typer.echo(table)


def show_resolved(resolved: ResolvedTemplate) -> None:
    suffix = " (fallback)" if resolved.is_fallback else ""
    typer.secho(f"\nResolved: {resolved.identifier}{suffix}", fg=typer.colors.GREEN, bold=True)

import os
import shutil
from pathlib import Path

import typer

from themeflow.builder import ThemeFlowBuilder
from themeflow.cli.constants import (
    INIT_BANNER,
    SAMPLE_HOOK_FILE,
    SAMPLE_TEMPLATES_DIR,
    SAMPLE_THEMEFLOW_FILE,
    THEMEFLOW_SETTINGS,
)
from themeflow.cli.exceptions import CLIInitError
from themeflow.cli.show import show_roots, show_rules, show_themeflow_settings
from themeflow.constants import THEMEFLOW_SETTINGS_ENV_VAR
from themeflow.exceptions import ThemeFlowError
from themeflow.settings import ThemeFlowSettings
from themeflow.themeflow import ThemeFlow

app = typer.Typer()


@app.command()
def init(ctx: typer.Context) -> None:
    """
    Initialize a ThemeFlow project structure.

    Creates the settings file, template roots and hooks directories, and sample content.
    """
    try:
        if not get_user_confirmation():
            return

        settings_file = ctx.obj.get("settings", "") if ctx.obj else ""
        settings_path = setup_themeflow_settings_file(settings_file)

        settings = ThemeFlowSettings.load(settings_path)
        create_directories_from_settings(settings)

        themeflow = ThemeFlowBuilder().with_settings_object(settings).build()
        setup_sample_content(themeflow)

        show_info_post_init(themeflow)

    except ThemeFlowError as e:
        CLIInitError(
            f"Failed to initialize ThemeFlow project: {e!s}",
            hint="Ensure you have write permissions and the settings file is valid.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=2) from None

    except OSError as e:
        CLIInitError(
            f"File system error during initialization: {e!s}",
            hint="Check file permissions in the target directory.",
            original_exception=e,
        ).show()
        raise typer.Exit(code=2) from None


def get_user_confirmation() -> bool:
    """Display banner and get user confirmation to proceed."""
    display_banner()
    if not typer.confirm("Do you want to continue?", default=True):
        typer.secho("Initialization cancelled.", fg=typer.colors.YELLOW)
        return False
    return True


def setup_themeflow_settings_file(settings: str) -> Path:
    """
    Copy the sample settings file into place unless one already exists.

    Returns:
        Path of the settings file ThemeFlow will be initialized from.
    """
    env_settings = os.getenv(THEMEFLOW_SETTINGS_ENV_VAR)
    if not settings and env_settings:
        return Path(env_settings)

    target_file = Path(settings) if settings else THEMEFLOW_SETTINGS
    typer.secho(f"ThemeFlow will be initialized at {target_file.parent.resolve()}", fg=typer.colors.GREEN)

    if target_file.exists():
        typer.secho(f"ThemeFlow settings file already exists: {target_file}", fg=typer.colors.YELLOW)
        return target_file

    target_file.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy(SAMPLE_THEMEFLOW_FILE, target_file)
    typer.secho(f"Created ThemeFlow settings file: {target_file}", fg=typer.colors.GREEN)
    return target_file


def create_directories_from_settings(settings: ThemeFlowSettings) -> None:
    """Create every template root and hooks directory named in the settings."""
    for root in settings.template_roots:
        create_directory(Path(root))

    for hooks_dir in settings.local_hooks:
        create_directory(Path(hooks_dir))


def setup_sample_content(themeflow: ThemeFlow) -> None:
    """
    Copy sample templates into the lowest priority root and a sample hook module
    into the first hooks directory.
    """
    parent_root = Path(themeflow.settings.template_roots[-1])
    copy_sample_files_to_dir(
        parent_root,
        sorted(SAMPLE_TEMPLATES_DIR.glob("*.html")),
        created_msg="Created sample templates in directory: {}",
        skipped_msg="Sample templates already exist in directory: {}",
    )

    if themeflow.settings.local_hooks:
        hooks_dir = Path(themeflow.settings.local_hooks[0])
        copy_sample_files_to_dir(
            hooks_dir,
            [SAMPLE_HOOK_FILE],
            created_msg="Created sample hook module in directory: {}",
            skipped_msg="Sample hook module already exists in directory: {}",
        )


def copy_sample_files_to_dir(
    dir_path: Path,
    sample_files: list[Path],
    created_msg: str,
    skipped_msg: str,
) -> None:
    """Copy sample files to an existing directory if they don't exist.

    Args:
        dir_path: Target directory for the sample files.
        sample_files: List of sample file paths to copy.
        created_msg: Message to display when files are created (use {} for dir_path).
        skipped_msg: Message to display when files already exist (use {} for dir_path).
    """
    files_created = False
    for sample_file in sample_files:
        target_file = dir_path / sample_file.name
        if not target_file.exists():
            shutil.copy(sample_file, target_file)
            files_created = True

    if files_created:
        typer.secho(created_msg.format(dir_path), fg=typer.colors.GREEN)
    else:
        typer.secho(skipped_msg.format(dir_path), fg=typer.colors.YELLOW)


def create_directory(dir_path: Path) -> bool:
    """Create a directory if it doesn't exist.

    Returns:
        True if directory was created, False if it already existed.
    """
    if dir_path.exists():
        typer.secho(f"Directory already exists: {dir_path}", fg=typer.colors.YELLOW)
        return False
    dir_path.mkdir(parents=True, exist_ok=True)
    typer.secho(f"Created directory: {dir_path}", fg=typer.colors.GREEN)
    return True


def display_banner() -> None:
    """Display the ThemeFlow initialization banner."""
    typer.secho(INIT_BANNER, fg=typer.colors.MAGENTA, bold=True)
    typer.secho(
        "\nWelcome to ThemeFlow initialization! This will set up your theme structure.\n",
        fg=typer.colors.GREEN,
        bold=True,
    )


def show_info_post_init(themeflow: ThemeFlow) -> None:
    """Show information after successful initialization."""
    typer.secho("\nThemeFlow project initialized successfully!\n", fg=typer.colors.GREEN, bold=True)
    show_themeflow_settings(themeflow)
    show_roots(themeflow)
    show_rules(themeflow)
    typer.secho("\nNext steps:", fg=typer.colors.CYAN, bold=True)
    typer.secho("  1. Override templates by adding them to the first template root", fg=typer.colors.WHITE)
    typer.secho("  2. Register callbacks in the hooks directory modules", fg=typer.colors.WHITE)
    typer.secho("  3. Run 'themeflow resolve single -t post -p hello-world' to try it", fg=typer.colors.WHITE)

from pathlib import Path

from themeflow.constants import THEMEFLOW_DEFAULT_SETTINGS_FILE

# Directory where the user is running the CLI from
CWD = Path.cwd()

THEMEFLOW_SETTINGS = CWD / THEMEFLOW_DEFAULT_SETTINGS_FILE

# ThemeFlow's samples directory
THEMEFLOW_SAMPLES_DIR = Path(__file__).parent / "samples"

SAMPLE_THEMEFLOW_FILE = THEMEFLOW_SAMPLES_DIR / "themeflow.yaml"
SAMPLE_TEMPLATES_DIR = THEMEFLOW_SAMPLES_DIR / "templates"
SAMPLE_HOOK_FILE = THEMEFLOW_SAMPLES_DIR / "hooks" / "functions.py"

# Marks a candidate found in a root in the resolve table
FOUND_MARK = "✔"
MISSING_MARK = "·"

INIT_BANNER = r"""
 _____ _                        _____ _
|_   _| |__   ___ _ __ ___   ___|  ___| | _____      __
  | | | '_ \ / _ \ '_ ` _ \ / _ \ |_  | |/ _ \ \ /\ / /
  | | | | | |  __/ | | | | |  __/  _| | | (_) \ V  V /
  |_| |_| |_|\___|_| |_| |_|\___|_|   |_|\___/ \_/\_/
"""

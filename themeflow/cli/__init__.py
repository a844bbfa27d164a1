"""ThemeFlow command line interface."""

"""forkaudit: audit git-sourced Cargo dependencies and fork branches."""

__version__ = "0.1.0"

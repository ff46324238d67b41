"""ignorectl - keep a repository's .gitignore normalized and tidy."""

__version__ = "0.1.0"

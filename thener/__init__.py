"""thener: compile multi-file markdown projects into HTML and PDF."""

__version__ = "0.3.0"

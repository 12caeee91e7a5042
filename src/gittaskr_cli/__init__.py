"""gittaskr - track local git repositories and their tasks."""

__version__ = "1.0.0"

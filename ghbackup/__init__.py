"""Mirror every repository of a GitHub user or organization locally."""

__version__ = "0.1.0"

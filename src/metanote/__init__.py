"""metanote: notes with typed access to their frontmatter."""

__version__ = "0.3.0"

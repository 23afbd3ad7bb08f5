"""homebase — file-based Markdown vault for notes, folders, and projects."""

__version__ = "0.1.0"

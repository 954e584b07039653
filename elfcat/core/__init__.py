"""Core models, errors and the file-reading engine."""

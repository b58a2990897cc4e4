class SourceError(Exception):
    """Raised when a config.yml or index.mdx cannot be read or validated."""


__all__ = ["SourceError"]

"""Parsing utilities for platform source files."""

from parse.config_yaml import load_config_yaml
from parse.errors import SourceError
from parse.frontmatter import parse_frontmatter, split_frontmatter
from parse.sources import load_source_config, read_source_data

__all__ = [
    "SourceError",
    "load_config_yaml",
    "load_source_config",
    "parse_frontmatter",
    "read_source_data",
    "split_frontmatter",
]

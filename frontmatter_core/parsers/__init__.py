"""Per-kind source parsers."""

from .base import DocumentDecodeError, split_frontmatter
from .component import ComponentParseResult, parse_component_file, parse_component_source
from .dataset import DatasetParseResult, parse_dataset, parse_dataset_file
from .markdown import MarkdownParseResult, parse_markdown, parse_markdown_file

__all__ = [
    "ComponentParseResult",
    "DatasetParseResult",
    "DocumentDecodeError",
    "MarkdownParseResult",
    "parse_component_file",
    "parse_component_source",
    "parse_dataset",
    "parse_dataset_file",
    "parse_markdown",
    "parse_markdown_file",
    "split_frontmatter",
]

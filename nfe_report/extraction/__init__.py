"""
Extraction Module for the NF-e Line-Item Report.

Builds LineItem records from parsed NF-e documents.
"""

from .line_item import Category, ItemKind, LineItem
from .extractor import NFeExtractor, field_text, normalize_items

__all__ = [
    'Category',
    'ItemKind',
    'LineItem',
    'NFeExtractor',
    'field_text',
    'normalize_items',
]

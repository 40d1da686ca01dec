"""
Classification Module for the NF-e Line-Item Report.

Labels line items as consumables or assets by keyword matching.
"""

from .classifier import ASSET_KEYWORDS, ItemClassifier, classify

__all__ = ['ASSET_KEYWORDS', 'ItemClassifier', 'classify']

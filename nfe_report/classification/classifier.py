"""
Keyword Classifier.

An item is an asset (Patrimonial) when its description mentions a
durable good; everything else, including items with no description,
is a consumable (Consumível).
"""

from typing import Iterable, Optional, Tuple

from config import get_config
from nfe_report.utils.logger import get_logger
from nfe_report.extraction.line_item import Category

logger = get_logger(__name__)

ASSET_KEYWORDS: Tuple[str, ...] = ('periférico', 'móvel', 'equipamento', 'hardware')


def classify(description: str, keywords: Iterable[str] = ASSET_KEYWORDS) -> Category:
    """
    Classify an item description.

    Matching is a case-insensitive substring test against each keyword.

    Example:
        >>> classify("Mouse Periférico")
        <Category.ASSET: 'Patrimonial'>
        >>> classify("Papel A4")
        <Category.CONSUMABLE: 'Consumível'>
    """
    text = (description or "").lower()
    if any(keyword.lower() in text for keyword in keywords if keyword):
        return Category.ASSET
    return Category.CONSUMABLE


class ItemClassifier:
    """
    Classifier bound to a keyword set.

    Attributes:
        keywords: Lowercased asset keywords.

    Example:
        >>> ItemClassifier(["cadeira"]).classify("Cadeira giratória")
        <Category.ASSET: 'Patrimonial'>
    """

    def __init__(self, keywords: Optional[Iterable[str]] = None) -> None:
        """
        Args:
            keywords: Asset keywords. Defaults to
                      ``classification.asset_keywords``, then ASSET_KEYWORDS.
        """
        if keywords is None:
            keywords = get_config("classification.asset_keywords") or ASSET_KEYWORDS
        self.keywords = tuple(k.lower() for k in keywords if k)
        logger.debug(f"ItemClassifier keywords: {self.keywords}")

    def classify(self, description: str) -> Category:
        return classify(description, self.keywords)

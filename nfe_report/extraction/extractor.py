"""
NF-e Field Extractor Module.

Walks the record tree produced by the XML parser and builds one
LineItem per ``det`` entry of ``nfeProc/NFe/infNFe``.

Missing optional fields never raise: every lookup goes through
field_text(), which returns an empty string for anything absent.

Usage:
    from nfe_report.extraction import NFeExtractor

    extractor = NFeExtractor()
    items = extractor.extract_file("XML/nota.xml")
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from config import get_config
from nfe_report.utils.logger import get_logger
from nfe_report.utils.exceptions import ParseError
from nfe_report.input_handler.xml_parser import (
    TEXT_KEY,
    parse_xml_file,
)
from .line_item import ItemKind, LineItem

logger = get_logger(__name__)

# Path from the document root to the invoice information group
INVOICE_PATH = ("nfeProc", "NFe", "infNFe")


def _lookup(record: Any, path: tuple) -> Any:
    """Follow ``path`` through nested dicts, returning None when it breaks."""
    value = record
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
        if value is None:
            return None
    return value


def field_text(record: Any, *path: str) -> str:
    """
    Read a text field, returning ``""`` when any step of the path is missing.

    Text nodes that carry attributes are stored as ``{"$": ..., "_": text}``;
    their text is unwrapped. Anything that is not text (a nested group, a
    repeated tag) also counts as missing.

    Example:
        >>> field_text({"ide": {"nNF": "123"}}, "ide", "nNF")
        '123'
        >>> field_text({"ide": {}}, "ide", "nNF")
        ''
    """
    value = _lookup(record, path)
    if isinstance(value, dict):
        value = value.get(TEXT_KEY)
    if isinstance(value, str):
        return value
    return ""


def normalize_items(value: Any) -> List[Dict[str, Any]]:
    """
    Normalize the ``det`` field into a list of item records.

    The parser yields a single dict when a document has one item and a
    list when it has several.

    Example:
        >>> normalize_items(None)
        []
        >>> normalize_items({"prod": {}})
        [{'prod': {}}]
        >>> len(normalize_items([{"prod": {}}, {"prod": {}}]))
        2
    """
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    if isinstance(value, dict):
        return [value]
    return []


def item_kind(item: Dict[str, Any]) -> ItemKind:
    """Items taxed with ISSQN (municipal service tax) are services."""
    issqn = _lookup(item, ("imposto", "ISSQN"))
    if issqn:
        return ItemKind.SERVICE
    return ItemKind.PRODUCT


class NFeExtractor:
    """
    Extracts line items from parsed NF-e documents.

    Attributes:
        encoding: Text encoding used when reading files.

    Example:
        >>> extractor = NFeExtractor()
        >>> items = extractor.extract(parse_xml(xml_text))
        >>> [i.description for i in items]
        ['Notebook hardware', 'Consultoria']
    """

    def __init__(self, encoding: Optional[str] = None) -> None:
        self.encoding = encoding or get_config("input.encoding", "utf-8")

    def _invoice_info(self, tree: Dict[str, Any], source: str) -> Dict[str, Any]:
        """
        Locate ``nfeProc/NFe/infNFe``.

        Returns an empty dict when any level is absent. A level that
        repeats (a list where one group is expected) is structural damage.
        """
        node: Any = tree
        for key in INVOICE_PATH:
            node = node.get(key) if isinstance(node, dict) else None
            if isinstance(node, list):
                raise ParseError(source, f"<{key}> appears {len(node)} times")
            if not isinstance(node, dict):
                return {}
        return node

    def extract(
        self,
        tree: Dict[str, Any],
        source: str = "<document>"
    ) -> List[LineItem]:
        """
        Build the line items of one parsed document.

        Args:
            tree: Output of parse_xml().
            source: Document name used in messages.

        Returns:
            Line items in document order; empty when the document has no
            ``nfeProc`` root or no ``det`` entries.

        Raises:
            ParseError: If the invoice group is structurally broken.
        """
        info = self._invoice_info(tree, source)
        if not info:
            logger.debug(f"{source}: no nfeProc/NFe/infNFe group")
            return []

        invoice_number = field_text(info, "ide", "nNF")
        emission_date = field_text(info, "ide", "dhEmi")
        issuer_name = field_text(info, "emit", "xNome")

        items = []
        for det in normalize_items(info.get("det")):
            items.append(LineItem(
                invoice_number=invoice_number,
                emission_date=emission_date,
                issuer_name=issuer_name,
                kind=item_kind(det),
                description=field_text(det, "prod", "xProd"),
                quantity=field_text(det, "prod", "qCom"),
                unit=field_text(det, "prod", "uCom"),
                unit_value=field_text(det, "prod", "vUnCom"),
                total_value=field_text(det, "prod", "vProd"),
            ))

        return items

    def extract_file(self, filepath: Union[str, Path]) -> List[LineItem]:
        """
        Parse a document from disk and extract its line items.

        Raises:
            ParseError: If the file is unreadable or malformed.
        """
        path = Path(filepath)
        tree = parse_xml_file(path, encoding=self.encoding)
        return self.extract(tree, source=path.name)

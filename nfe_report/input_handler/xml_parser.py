"""
XML Parser Adapter.

Turns NF-e markup into a nested dictionary tree that the extractor can
walk with plain key lookups. Namespaces are dropped, repeated sibling
tags become lists and attributes are kept under ``"$"``.

Example:
    >>> parse_xml('<nfeProc><NFe><infNFe><ide><nNF>123</nNF></ide></infNFe></NFe></nfeProc>')
    {'nfeProc': {'NFe': {'infNFe': {'ide': {'nNF': '123'}}}}}
"""

from pathlib import Path
from typing import Any, Dict, Union
from xml.etree import ElementTree as ET

from nfe_report.utils.logger import get_logger
from nfe_report.utils.exceptions import ParseError

logger = get_logger(__name__)

ATTRIBUTES_KEY = "$"
TEXT_KEY = "_"


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on tags."""
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


def _element_to_value(element: ET.Element) -> Any:
    text = element.text or ""
    attributes = {_local_name(k): v for k, v in element.attrib.items()}
    children = list(element)

    if not children:
        if attributes:
            node: Dict[str, Any] = {ATTRIBUTES_KEY: attributes}
            if text.strip():
                node[TEXT_KEY] = text
            return node
        return text

    node = {}
    if attributes:
        node[ATTRIBUTES_KEY] = attributes
    for child in children:
        name = _local_name(child.tag)
        value = _element_to_value(child)
        if name in node:
            existing = node[name]
            if isinstance(existing, list):
                existing.append(value)
            else:
                node[name] = [existing, value]
        else:
            node[name] = value
    return node


def parse_xml(text: str, source: str = "<string>") -> Dict[str, Any]:
    """
    Parse XML text into a nested record tree.

    Args:
        text: Raw XML document.
        source: Name used in error messages.

    Returns:
        ``{root_name: value}`` where value is text or a nested dict.

    Raises:
        ParseError: If the text is not well-formed XML or nests too deeply.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(source, str(e))

    try:
        return {_local_name(root.tag): _element_to_value(root)}
    except RecursionError:
        raise ParseError(source, "elements nested too deeply")


def parse_xml_file(
    filepath: Union[str, Path],
    encoding: str = "utf-8"
) -> Dict[str, Any]:
    """
    Read and parse an XML file.

    Raises:
        ParseError: If the file cannot be read or is not well-formed.
    """
    path = Path(filepath)
    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(str(path), str(e))

    # Some issuers emit a UTF-8 BOM
    content = content.lstrip("\ufeff")

    logger.debug(f"Parsing {path.name} ({len(content)} chars)")
    return parse_xml(content, source=str(path))

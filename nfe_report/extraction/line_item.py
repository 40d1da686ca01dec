"""
Line Item Data Classes.

Defines the value objects produced by the extractor: one LineItem per
``det`` entry of an NF-e, plus the Product/Service and
Consumable/Asset enumerations with their report labels.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class ItemKind(Enum):
    """Product or service, decided by the presence of an ISSQN group."""

    PRODUCT = "Produto"
    SERVICE = "Serviço"

    @property
    def label(self) -> str:
        return self.value


class Category(Enum):
    """Accounting category derived from the item description."""

    CONSUMABLE = "Consumível"
    ASSET = "Patrimonial"

    @property
    def label(self) -> str:
        return self.value


@dataclass(frozen=True)
class LineItem:
    """
    One product or service entry of an NF-e.

    Every text field holds the value exactly as it appears in the XML,
    with missing fields stored as an empty string. Header fields
    (invoice number, emission date, issuer) are copied onto every item
    of the same document.

    Attributes:
        invoice_number: ``ide/nNF``
        emission_date: ``ide/dhEmi``, kept as the raw timestamp text
        issuer_name: ``emit/xNome``
        kind: Product or service
        description: ``prod/xProd``
        quantity: ``prod/qCom``
        unit: ``prod/uCom``
        unit_value: ``prod/vUnCom``
        total_value: ``prod/vProd``

    Example:
        >>> item = LineItem(invoice_number="123", issuer_name="ACME",
        ...                 description="Notebook hardware")
        >>> item.kind.label
        'Produto'
    """
    invoice_number: str = ""
    emission_date: str = ""
    issuer_name: str = ""
    kind: ItemKind = ItemKind.PRODUCT
    description: str = ""
    quantity: str = ""
    unit: str = ""
    unit_value: str = ""
    total_value: str = ""

    @property
    def is_service(self) -> bool:
        return self.kind is ItemKind.SERVICE

    def to_dict(self) -> Dict[str, str]:
        """
        Convert to a flat dictionary, with the kind rendered as its label.

        Returns:
            Dictionary representation of the line item.
        """
        return {
            'invoice_number': self.invoice_number,
            'emission_date': self.emission_date,
            'issuer_name': self.issuer_name,
            'kind': self.kind.label,
            'description': self.description,
            'quantity': self.quantity,
            'unit': self.unit,
            'unit_value': self.unit_value,
            'total_value': self.total_value,
        }

    def __repr__(self) -> str:
        return (
            f"LineItem("
            f"nNF={self.invoice_number}, "
            f"kind={self.kind.label}, "
            f"description={self.description!r}, "
            f"total={self.total_value})"
        )

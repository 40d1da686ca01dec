"""Shared test fixtures."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from config import ConfigurationManager
from nfe_report.classification.classifier import ItemClassifier
from nfe_report.output_handler.excel_exporter import ExcelExporter

NFE_NAMESPACE = "http://www.portalfiscal.inf.br/nfe"

ICMS_GROUP = "<ICMS><ICMS00><orig>0</orig><CST>00</CST></ICMS00></ICMS>"
ISSQN_GROUP = "<ISSQN><vBC>1200.00</vBC><vAliq>5.00</vAliq><vISSQN>60.00</vISSQN></ISSQN>"


def build_det(number: int, item: Dict[str, str]) -> str:
    tax = ISSQN_GROUP if item.get("service") else ICMS_GROUP
    return (
        f'<det nItem="{number}">'
        f"<prod>"
        f"<cProd>{number:03d}</cProd>"
        f"<xProd>{item['name']}</xProd>"
        f"<uCom>{item.get('unit', 'UN')}</uCom>"
        f"<qCom>{item.get('qty', '1.0000')}</qCom>"
        f"<vUnCom>{item.get('unit_value', '10.00')}</vUnCom>"
        f"<vProd>{item.get('total', '10.00')}</vProd>"
        f"</prod>"
        f"<imposto>{tax}</imposto>"
        f"</det>"
    )


def build_nfe(
    items: List[Dict[str, str]],
    invoice_number: str = "123",
    issuer: str = "ACME",
    emitted: str = "2024-01-15T10:00:00-03:00"
) -> str:
    """Build an nfeProc document with one ``det`` per entry of ``items``."""
    dets = "".join(build_det(n, item) for n, item in enumerate(items, 1))
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<nfeProc xmlns="{NFE_NAMESPACE}" versao="4.00">'
        '<NFe><infNFe Id="NFe35240100000000000000550010000001231000001234" versao="4.00">'
        f"<ide><cUF>35</cUF><nNF>{invoice_number}</nNF><dhEmi>{emitted}</dhEmi></ide>"
        f"<emit><CNPJ>00000000000100</CNPJ><xNome>{issuer}</xNome></emit>"
        f"{dets}"
        "</infNFe></NFe>"
        '<protNFe versao="4.00"><infProt><cStat>100</cStat></infProt></protNFe>'
        "</nfeProc>"
    )


@pytest.fixture(autouse=True)
def reset_config():
    """Start every test from the default settings.yaml."""
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


@pytest.fixture
def acme_xml() -> str:
    """One product and one service, as in the ACME example run."""
    return build_nfe([
        {"name": "Notebook hardware", "qty": "1.0000", "unit_value": "3500.00", "total": "3500.00"},
        {"name": "Consultoria", "service": True, "unit": "H", "qty": "8.0000",
         "unit_value": "150.00", "total": "1200.00"},
    ])


@pytest.fixture
def input_dir(tmp_path: Path) -> Path:
    path = tmp_path / "XML"
    path.mkdir()
    return path


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "PLANILHA"


@pytest.fixture
def exporter(output_dir: Path) -> ExcelExporter:
    return ExcelExporter(
        output_dir=output_dir,
        filename="dados_nfe.xlsx",
        classifier=ItemClassifier(),
    )


def write_document(directory: Path, name: str, content: str) -> Path:
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def make_document(input_dir: Path):
    """Write an XML document into the input folder."""
    def _make(name: str, content: Optional[str] = None, **kwargs) -> Path:
        if content is None:
            content = build_nfe(**kwargs)
        return write_document(input_dir, name, content)
    return _make

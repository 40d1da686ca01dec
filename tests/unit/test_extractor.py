"""Unit tests for the NF-e field extractor."""

from pathlib import Path

import pytest

from conftest import build_nfe
from nfe_report.extraction import ItemKind, LineItem, NFeExtractor, field_text, normalize_items
from nfe_report.input_handler.xml_parser import parse_xml
from nfe_report.utils.exceptions import ParseError


class TestNormalizeItems:
    """Tests for normalize_items."""

    def test_absent_gives_empty_list(self) -> None:
        assert normalize_items(None) == []

    def test_empty_text_gives_empty_list(self) -> None:
        assert normalize_items("") == []

    def test_single_record_is_wrapped(self) -> None:
        record = {"prod": {"xProd": "Papel A4"}}
        assert normalize_items(record) == [record]

    def test_list_is_kept_in_order(self) -> None:
        records = [{"prod": {"xProd": "A"}}, {"prod": {"xProd": "B"}}]
        assert normalize_items(records) == records


class TestFieldText:
    """Tests for field_text."""

    def test_reads_nested_text(self) -> None:
        assert field_text({"ide": {"nNF": "123"}}, "ide", "nNF") == "123"

    def test_missing_leaf_is_empty(self) -> None:
        assert field_text({"ide": {}}, "ide", "nNF") == ""

    def test_missing_group_is_empty(self) -> None:
        assert field_text({}, "emit", "xNome") == ""

    def test_group_in_place_of_text_is_empty(self) -> None:
        assert field_text({"ide": {"nNF": {"x": "1"}}}, "ide", "nNF") == ""

    def test_unwraps_text_with_attributes(self) -> None:
        record = {"prod": {"vProd": {"$": {"moeda": "BRL"}, "_": "10.00"}}}
        assert field_text(record, "prod", "vProd") == "10.00"


class TestNFeExtractor:
    """Tests for NFeExtractor."""

    @pytest.fixture
    def extractor(self) -> NFeExtractor:
        return NFeExtractor()

    def test_one_item_per_det(self, extractor: NFeExtractor) -> None:
        xml = build_nfe([{"name": f"Item {n}"} for n in range(5)])
        items = extractor.extract(parse_xml(xml))
        assert [i.description for i in items] == [f"Item {n}" for n in range(5)]

    def test_header_copied_to_every_item(self, extractor: NFeExtractor) -> None:
        xml = build_nfe(
            [{"name": "A"}, {"name": "B"}, {"name": "C"}],
            invoice_number="987",
            issuer="Fornecedor Ltda",
            emitted="2024-03-01T08:30:00-03:00",
        )
        items = extractor.extract(parse_xml(xml))
        assert len(items) == 3
        for item in items:
            assert item.invoice_number == "987"
            assert item.issuer_name == "Fornecedor Ltda"
            assert item.emission_date == "2024-03-01T08:30:00-03:00"

    def test_single_det_yields_one_item(self, extractor: NFeExtractor) -> None:
        items = extractor.extract(parse_xml(build_nfe([{"name": "Papel A4"}])))
        assert len(items) == 1
        assert items[0].description == "Papel A4"

    def test_no_det_yields_no_items(self, extractor: NFeExtractor) -> None:
        assert extractor.extract(parse_xml(build_nfe([]))) == []

    def test_document_without_nfeproc_yields_no_items(self, extractor: NFeExtractor) -> None:
        tree = parse_xml("<NFe><infNFe><det><prod><xProd>X</xProd></prod></det></infNFe></NFe>")
        assert extractor.extract(tree) == []

    def test_empty_root_yields_no_items(self, extractor: NFeExtractor) -> None:
        assert extractor.extract(parse_xml("<nfeProc/>")) == []

    def test_repeated_nfe_group_is_parse_error(self, extractor: NFeExtractor) -> None:
        tree = parse_xml("<nfeProc><NFe><infNFe/></NFe><NFe><infNFe/></NFe></nfeProc>")
        with pytest.raises(ParseError):
            extractor.extract(tree, source="dup.xml")

    def test_service_detected_by_issqn(self, extractor: NFeExtractor) -> None:
        xml = build_nfe([{"name": "Notebook"}, {"name": "Consultoria", "service": True}])
        items = extractor.extract(parse_xml(xml))
        assert [i.kind for i in items] == [ItemKind.PRODUCT, ItemKind.SERVICE]
        assert items[1].is_service

    def test_values_kept_verbatim(self, extractor: NFeExtractor) -> None:
        xml = build_nfe([{
            "name": "Cabo HDMI",
            "qty": "2.0000",
            "unit": "PC",
            "unit_value": "19.9000000000",
            "total": "39.80",
        }])
        item = extractor.extract(parse_xml(xml))[0]
        assert item == LineItem(
            invoice_number="123",
            emission_date="2024-01-15T10:00:00-03:00",
            issuer_name="ACME",
            kind=ItemKind.PRODUCT,
            description="Cabo HDMI",
            quantity="2.0000",
            unit="PC",
            unit_value="19.9000000000",
            total_value="39.80",
        )

    def test_missing_fields_default_to_empty(self, extractor: NFeExtractor) -> None:
        tree = parse_xml(
            "<nfeProc><NFe><infNFe>"
            "<det><prod><xProd>Sem valores</xProd></prod></det>"
            "</infNFe></NFe></nfeProc>"
        )
        item = extractor.extract(tree)[0]
        assert item.description == "Sem valores"
        assert item.invoice_number == ""
        assert item.issuer_name == ""
        assert item.quantity == ""
        assert item.total_value == ""
        assert item.kind is ItemKind.PRODUCT

    def test_extract_file(self, extractor: NFeExtractor, tmp_path: Path, acme_xml: str) -> None:
        path = tmp_path / "acme.xml"
        path.write_text(acme_xml, encoding="utf-8")
        items = extractor.extract_file(path)
        assert [i.description for i in items] == ["Notebook hardware", "Consultoria"]

    def test_extract_file_malformed(self, extractor: NFeExtractor, tmp_path: Path) -> None:
        path = tmp_path / "broken.xml"
        path.write_text("<nfeProc><NFe>", encoding="utf-8")
        with pytest.raises(ParseError):
            extractor.extract_file(path)


class TestLineItem:
    """Tests for the LineItem value object."""

    def test_defaults_are_empty_strings(self) -> None:
        item = LineItem()
        assert item.description == ""
        assert item.kind is ItemKind.PRODUCT

    def test_is_immutable(self) -> None:
        item = LineItem(description="Papel A4")
        with pytest.raises(AttributeError):
            item.description = "Outro"

    def test_to_dict_uses_kind_label(self) -> None:
        data = LineItem(kind=ItemKind.SERVICE).to_dict()
        assert data["kind"] == "Serviço"
        assert len(data) == 9

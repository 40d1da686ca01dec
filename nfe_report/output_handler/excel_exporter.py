"""
Excel Exporter Module.

This module writes NF-e line items to the report workbook with openpyxl.

Features:
    - Fixed 10-column layout with formatted header
    - Overwrite mode (new workbook every call)
    - Append mode (existing rows kept, new rows added at the end)
    - Atomic save through a temporary file in the target folder
"""

import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Union

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from nfe_report.utils.logger import get_logger
from nfe_report.utils.helpers import ensure_directory
from nfe_report.utils.exceptions import ReadError, WriteError
from nfe_report.classification.classifier import ItemClassifier
from nfe_report.extraction.line_item import LineItem

logger = get_logger(__name__)


class WriteMode(Enum):
    """How the exporter treats an existing report."""

    OVERWRITE = "overwrite"
    APPEND = "append"


class ExcelExporter:
    """
    Writes line items to the ``dados_nfe.xlsx`` report.

    Attributes:
        output_dir: Directory holding the report
        filename: Report file name
        sheet_name: Worksheet title used for new reports
        classifier: Classifier producing the Classificação column
        style_header: Whether new reports get a formatted header

    Example:
        >>> exporter = ExcelExporter(output_dir="PLANILHA")
        >>> exporter.export(items, WriteMode.APPEND)
        'PLANILHA/dados_nfe.xlsx'
    """

    HEADERS = [
        'Número da Nota',
        'Emitente',
        'Data de Emissão',
        'Tipo (Produto/Serviço)',
        'Nome do Produto/Serviço',
        'Classificação',
        'Quantidade',
        'Unidade',
        'Valor Unitário',
        'Valor Total',
    ]

    def __init__(
        self,
        output_dir: Optional[Union[str, Path]] = None,
        filename: Optional[str] = None,
        sheet_name: Optional[str] = None,
        classifier: Optional[ItemClassifier] = None,
        style_header: Optional[bool] = None
    ) -> None:
        """Initialize the Excel exporter; unset arguments come from configuration."""
        self.output_dir = Path(output_dir or get_config("paths.output_dir", "PLANILHA"))
        self.filename = filename or get_config("output.filename", "dados_nfe.xlsx")
        self.sheet_name = sheet_name or get_config("output.sheet_name", "NFe Data")
        self.classifier = classifier or ItemClassifier()
        if style_header is None:
            style_header = get_config("output.style_header", True)
        self.style_header = style_header

        logger.debug(f"ExcelExporter initialized (output: {self.output_path})")

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.filename

    def build_row(self, item: LineItem) -> List[str]:
        """
        Render a line item as a report row, in HEADERS order.

        Example:
            >>> exporter.build_row(item)
            ['123', 'ACME', '2024-01-15T10:00:00-03:00', 'Produto',
             'Notebook hardware', 'Patrimonial', '1.0000', 'UN', '3500.00', '3500.00']
        """
        category = self.classifier.classify(item.description)
        return [
            item.invoice_number,
            item.issuer_name,
            item.emission_date,
            item.kind.label,
            item.description,
            category.label,
            item.quantity,
            item.unit,
            item.unit_value,
            item.total_value,
        ]

    def export(
        self,
        items: Iterable[LineItem],
        mode: WriteMode = WriteMode.OVERWRITE
    ) -> str:
        """
        Write items in the given mode.

        Returns:
            Path to the report.

        Raises:
            WriteError: If the report cannot be saved.
            ReadError: In append mode, if the existing report cannot be loaded.
        """
        if mode is WriteMode.APPEND:
            return self.append(items)
        return self.create(items)

    def create(self, items: Iterable[LineItem]) -> str:
        """
        Build a new report holding only ``items``, replacing any existing file.

        Raises:
            WriteError: If the report cannot be saved.
        """
        rows = [self.build_row(item) for item in items]

        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.title = self.sheet_name
        sheet.append(self.HEADERS)
        for row in rows:
            self._append_row(sheet, row)

        if self.style_header:
            self._format_sheet(sheet, rows)

        filepath = self.output_path
        self._save(workbook, filepath)

        logger.info(f"Report created: {filepath} ({len(rows)} rows)")
        return str(filepath)

    def append(self, items: Iterable[LineItem]) -> str:
        """
        Add ``items`` after the last row of the existing report.

        Falls back to create() when there is no report yet. The header and
        existing rows are left as they are.

        Raises:
            ReadError: If the existing report cannot be loaded.
            WriteError: If the report cannot be saved.
        """
        filepath = self.output_path
        if not filepath.exists():
            logger.debug(f"{filepath} not found, creating it")
            return self.create(items)

        rows = [self.build_row(item) for item in items]

        workbook = self._load(filepath)
        sheet = workbook.active

        header = list(next(sheet.iter_rows(min_row=1, max_row=1, values_only=True), ()))
        if sheet.max_row == 1 and all(value is None for value in header):
            logger.warning(f"{filepath} has an empty sheet, writing header")
            for col, header_name in enumerate(self.HEADERS, 1):
                sheet.cell(row=1, column=col, value=header_name)
            if self.style_header:
                self._format_sheet(sheet, rows)
        elif header[:len(self.HEADERS)] != self.HEADERS:
            logger.warning(f"Unexpected header in {filepath}: {header}")

        for row in rows:
            self._append_row(sheet, row)

        self._save(workbook, filepath)

        logger.info(
            f"Report updated: {filepath} "
            f"(+{len(rows)} rows, {sheet.max_row - 1} total)"
        )
        return str(filepath)

    def read_rows(
        self,
        filepath: Optional[Union[str, Path]] = None,
        include_header: bool = False
    ) -> List[List[str]]:
        """
        Read a report back as lists of strings; empty cells become ``""``.

        Raises:
            ReadError: If the file cannot be loaded.
        """
        workbook = self._load(Path(filepath) if filepath else self.output_path)
        sheet = workbook.active

        rows = [
            ["" if value is None else str(value) for value in row]
            for row in sheet.iter_rows(values_only=True)
        ]
        return rows if include_header else rows[1:]

    def _append_row(self, sheet, row: List[str]) -> None:
        """Append a row with every cell stored as text, never as a formula."""
        sheet.append(row)
        for cell in sheet[sheet.max_row]:
            if isinstance(cell.value, str):
                cell.data_type = "s"

    def _load(self, filepath: Path):
        """
        Load a workbook, wrapping any failure in ReadError.

        Raises:
            ReadError: If the file cannot be opened as a workbook.
        """
        try:
            return openpyxl.load_workbook(filepath)
        except Exception as e:
            raise ReadError(str(filepath), str(e))

    def _save(self, workbook, filepath: Path) -> None:
        """
        Save to a temporary file in the target folder, then move it into place.

        Raises:
            WriteError: If the folder cannot be created or the file written.
        """
        tmp_name = None
        try:
            ensure_directory(filepath.parent)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{filepath.stem}-", suffix=".xlsx", dir=filepath.parent
            )
            os.close(fd)
            workbook.save(tmp_name)
            os.replace(tmp_name, filepath)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.remove(tmp_name)
            logger.error(f"Excel export failed: {e}")
            raise WriteError(str(filepath), str(e))

    def _format_sheet(self, sheet, rows: List[List[str]]) -> None:
        """
        Style the header row, freeze it and fit column widths.

        Args:
            sheet: openpyxl worksheet with the header in row 1.
            rows: Data rows, used to size the columns.
        """
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header_name in enumerate(self.HEADERS, 1):
            cell = sheet.cell(row=1, column=col)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment
            cell.border = thin_border

            max_length = len(header_name)
            for row in rows:
                max_length = max(max_length, len(row[col - 1]))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

        sheet.freeze_panes = 'A2'

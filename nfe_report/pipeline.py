"""
Batch Processing Pipeline.

Runs every NF-e document of the input folder through
parse -> extract -> classify -> write, one document at a time.

A document that fails to parse or to be written is reported and skipped;
only an input folder that cannot be listed stops the run.

Usage:
    from nfe_report.pipeline import BatchProcessor

    processor = BatchProcessor(mode=WriteMode.APPEND)
    result = processor.run()
    print(result.summary())
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from nfe_report.utils.logger import get_logger
from nfe_report.utils.exceptions import InputError, OutputError
from nfe_report.input_handler.handler import InputHandler
from nfe_report.extraction.extractor import NFeExtractor
from nfe_report.extraction.line_item import LineItem
from nfe_report.output_handler.excel_exporter import ExcelExporter, WriteMode

logger = get_logger(__name__)


class FileStatus(Enum):
    """Outcome of processing one document."""

    WRITTEN = "written"
    EMPTY = "empty"
    PARSE_FAILED = "parse_failed"
    WRITE_FAILED = "write_failed"


@dataclass
class FileOutcome:
    """
    Result of processing one document.

    Attributes:
        filename: Document file name
        status: What happened to it
        item_count: Line items extracted (0 on parse failure)
        error: Error text for failed documents
    """
    filename: str
    status: FileStatus
    item_count: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is FileStatus.WRITTEN


@dataclass
class BatchResult:
    """
    Summary of a batch run.

    Attributes:
        input_dir: Folder that was scanned
        output_path: Report path
        mode: Write mode used
        outcomes: One entry per document, in processing order
    """
    input_dir: str
    output_path: str
    mode: WriteMode
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def documents_found(self) -> int:
        return len(self.outcomes)

    def _count(self, *statuses: FileStatus) -> int:
        return sum(1 for o in self.outcomes if o.status in statuses)

    @property
    def written(self) -> int:
        return self._count(FileStatus.WRITTEN)

    @property
    def empty(self) -> int:
        return self._count(FileStatus.EMPTY)

    @property
    def failed(self) -> int:
        return self._count(FileStatus.PARSE_FAILED, FileStatus.WRITE_FAILED)

    @property
    def rows_written(self) -> int:
        return sum(o.item_count for o in self.outcomes if o.success)

    def summary(self) -> str:
        return (
            f"{self.documents_found} documents: {self.written} written, "
            f"{self.empty} without items, {self.failed} failed"
        )


class BatchReporter:
    """
    Receives progress events from BatchProcessor.

    The default implementation writes them to the application logger;
    tests pass a mock to check which events were raised.
    """

    def __init__(self, log=None) -> None:
        self.log = log or logger

    def batch_started(self, input_dir: Path, count: int, mode: WriteMode) -> None:
        self.log.info(f"Found {count} documents in {input_dir} (mode: {mode.value})")

    def no_documents(self, input_dir: Path) -> None:
        self.log.info(f"No XML documents found in {input_dir}")

    def document_started(self, filename: str) -> None:
        self.log.info(f"Extracting data from {filename}...")

    def document_extracted(self, filename: str, items: List[LineItem]) -> None:
        self.log.info(f"{filename}: {len(items)} items extracted")
        for item in items:
            self.log.debug(f"  {item.to_dict()}")

    def document_empty(self, filename: str) -> None:
        self.log.info(f"{filename}: no items found, skipping")

    def document_failed(self, filename: str, error: Exception) -> None:
        self.log.error(f"{filename}: {error}")

    def document_written(self, filename: str, output_path: str, count: int) -> None:
        self.log.info(f"{filename}: {count} rows written to {output_path}")

    def batch_finished(self, result: BatchResult) -> None:
        self.log.info(f"Batch finished. {result.summary()}")


class BatchProcessor:
    """
    Sequential batch driver.

    In OVERWRITE mode every written document replaces the report, so after a
    run it holds only the last written document's items. APPEND mode keeps
    adding rows to the same report.

    Attributes:
        input_handler: Finds the documents
        extractor: Builds line items from a document
        exporter: Writes the report
        mode: Write mode for every document
        reporter: Receives progress events

    Example:
        >>> processor = BatchProcessor(input_dir="XML", mode=WriteMode.APPEND)
        >>> result = processor.run()
        >>> result.written
        3
    """

    def __init__(
        self,
        input_dir: Optional[Union[str, Path]] = None,
        exporter: Optional[ExcelExporter] = None,
        extractor: Optional[NFeExtractor] = None,
        mode: Optional[WriteMode] = None,
        reporter: Optional[BatchReporter] = None,
        input_handler: Optional[InputHandler] = None
    ) -> None:
        self.input_handler = input_handler or InputHandler(input_dir)
        self.exporter = exporter or ExcelExporter()
        self.extractor = extractor or NFeExtractor()
        self.mode = mode or WriteMode(get_config("output.mode", "overwrite"))
        self.reporter = reporter or BatchReporter()

    def process_file(self, filepath: Path) -> FileOutcome:
        """
        Run one document through the pipeline.

        Any error raised while extracting or writing is reported and
        turned into the outcome; none propagates.
        """
        name = filepath.name
        self.reporter.document_started(name)

        try:
            items = self.extractor.extract_file(filepath)
        except InputError as e:
            self.reporter.document_failed(name, e)
            return FileOutcome(name, FileStatus.PARSE_FAILED, error=str(e))
        except Exception as e:
            logger.debug(f"Unexpected error extracting {name}", exc_info=True)
            self.reporter.document_failed(name, e)
            return FileOutcome(name, FileStatus.PARSE_FAILED, error=str(e))

        if not items:
            self.reporter.document_empty(name)
            return FileOutcome(name, FileStatus.EMPTY)

        self.reporter.document_extracted(name, items)

        try:
            output_path = self.exporter.export(items, self.mode)
        except OutputError as e:
            self.reporter.document_failed(name, e)
            return FileOutcome(name, FileStatus.WRITE_FAILED, len(items), str(e))
        except Exception as e:
            logger.debug(f"Unexpected error writing {name}", exc_info=True)
            self.reporter.document_failed(name, e)
            return FileOutcome(name, FileStatus.WRITE_FAILED, len(items), str(e))

        self.reporter.document_written(name, output_path, len(items))
        return FileOutcome(name, FileStatus.WRITTEN, len(items))

    def run(self) -> BatchResult:
        """
        Process every document in the input folder.

        Returns:
            BatchResult with one outcome per document.

        Raises:
            DirectoryError: If the input folder cannot be listed.
        """
        documents = self.input_handler.discover()

        result = BatchResult(
            input_dir=str(self.input_handler.input_dir),
            output_path=str(self.exporter.output_path),
            mode=self.mode
        )

        if not documents:
            self.reporter.no_documents(self.input_handler.input_dir)
            return result

        self.reporter.batch_started(self.input_handler.input_dir, len(documents), self.mode)

        for filepath in documents:
            result.outcomes.append(self.process_file(filepath))

        self.reporter.batch_finished(result)
        return result

"""
Main Input Handler Module.

Finds the NF-e documents to process in the configured input folder.

Usage:
    from nfe_report.input_handler import InputHandler

    handler = InputHandler("XML")
    for path in handler.discover():
        ...
"""

from pathlib import Path
from typing import List, Optional, Union

from config import get_config
from nfe_report.utils.logger import get_logger
from nfe_report.utils.helpers import get_file_extension
from nfe_report.utils.exceptions import DirectoryError


logger = get_logger(__name__)


class InputHandler:
    """
    Lists NF-e documents in an input directory.

    Attributes:
        input_dir: Folder scanned for documents.
        extension: Document extension, lowercase with dot (".xml").

    Example:
        >>> handler = InputHandler("XML")
        >>> [p.name for p in handler.discover()]
        ['nota_001.xml', 'nota_002.xml']
    """

    DEFAULT_EXTENSION = ".xml"

    def __init__(
        self,
        input_dir: Optional[Union[str, Path]] = None,
        extension: Optional[str] = None
    ) -> None:
        """
        Initialize the InputHandler.

        Args:
            input_dir: Folder to scan. Defaults to ``paths.input_dir``.
            extension: Document extension. Defaults to ``input.extension``.
        """
        self.input_dir = Path(input_dir or get_config("paths.input_dir", "XML"))

        ext = extension or get_config("input.extension", self.DEFAULT_EXTENSION)
        if not ext.startswith("."):
            ext = f".{ext}"
        self.extension = ext.lower()

        logger.debug(f"InputHandler initialized ({self.input_dir}, *{self.extension})")

    def is_document(self, filepath: Path) -> bool:
        """Check whether a directory entry is a document to process."""
        return filepath.is_file() and get_file_extension(filepath) == self.extension

    def discover(self) -> List[Path]:
        """
        List the documents in the input directory, sorted by name.

        Returns:
            Matching file paths. Empty when the folder has no documents.

        Raises:
            DirectoryError: If the folder is missing or cannot be listed.
        """
        try:
            entries = list(self.input_dir.iterdir())
        except OSError as e:
            raise DirectoryError(str(self.input_dir), str(e))

        documents = sorted(
            (entry for entry in entries if self.is_document(entry)),
            key=lambda p: p.name
        )

        logger.debug(
            f"{len(documents)} of {len(entries)} entries in {self.input_dir} "
            f"match *{self.extension}"
        )
        return documents

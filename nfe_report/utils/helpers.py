"""
Helper Utilities Module.

Small filesystem helpers shared by the input and output handlers.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
"""

from pathlib import Path
from typing import Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Creates the directory and all parent directories if they don't
    already exist. Safe to call when the directory is already there.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Raises:
        PermissionError: If directory cannot be created due to permissions.

    Example:
        >>> ensure_directory("PLANILHA")
        PosixPath('PLANILHA')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.
    Returns empty string if no extension exists.

    Example:
        >>> get_file_extension("35240100000000000000550010000001231000001234-nfe.XML")
        ".xml"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()

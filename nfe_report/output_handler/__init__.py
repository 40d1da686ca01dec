"""
Output Handler Module for the NF-e Line-Item Report.

This module provides functionality for:
    - Excel report generation (overwrite and append modes)
    - Reading a report back for checks
"""

from .excel_exporter import ExcelExporter, WriteMode

__all__ = ['ExcelExporter', 'WriteMode']

"""
Input Handler Module for the NF-e Line-Item Report.

This module provides functionality for:
    - Finding NF-e documents in the input folder
    - Parsing XML markup into a nested record tree
"""

from .handler import InputHandler
from .xml_parser import parse_xml, parse_xml_file

__all__ = ['InputHandler', 'parse_xml', 'parse_xml_file']

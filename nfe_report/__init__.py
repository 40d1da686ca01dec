"""
NF-e Line-Item Report - Source Package.

Extracts product and service lines from NF-e XML documents, classifies
each one as a consumable or an asset and writes them to an Excel report.

Modules:
    - input_handler: Document discovery and XML parsing
    - extraction: Line item model and field extraction
    - classification: Keyword classifier
    - output_handler: Excel report writer
    - pipeline: Batch driver
    - utils: Logging, exceptions and file helpers

Architecture:
    XML folder → Parser → Extractor → Classifier → Excel report
"""

__version__ = "1.0.0"

__all__ = [
    'input_handler',
    'extraction',
    'classification',
    'output_handler',
    'pipeline',
    'utils'
]

"""Export adapters - Implementations of EntityExporterPort.

Available implementations:
- CSVEntityExporter: Writes nodes, ways and relations as CSV tables
"""

from .csv_exporter import CSVEntityExporter

__all__ = ["CSVEntityExporter"]

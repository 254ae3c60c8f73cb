"""Monthly NGO activity reports: single submissions, CSV bulk ingestion and dashboards."""

__version__ = "0.1.0"

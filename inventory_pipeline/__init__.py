"""
SQLite Inventory ETL Package

Modules:
    config.py       - Environment-driven settings (.env supported).
    schema.py       - Staging and final table definitions, connections.
    staging.py      - Ingests raw CSV data into the staging tables.
    loader.py       - Moves staged rows into the constrained final tables.
    reports.py      - Read-only stock, shipment and inventory value reports.
    export.py       - Parquet export and S3 upload of report results.
    run_pipeline.py - Orchestrates the full pipeline from the command line.

Version: 1.0.0
"""

__version__ = "1.0.0"

#!/usr/bin/env python3
"""
Inventory ETL pipeline

Loads the staged product, supplier, shipment and inventory-log data into the
constrained final tables, runs the inventory reports and exports them to
Parquet (and optionally S3).
"""

import sys
import sqlite3
import logging
import argparse
from typing import List, Optional

import pandas as pd

from inventory_pipeline import config
from inventory_pipeline.export import export_reports, upload_exports
from inventory_pipeline.loader import load_final_tables
from inventory_pipeline.reports import REPORTS, run_all_reports, run_report
from inventory_pipeline.schema import connect, create_tables, get_table_counts
from inventory_pipeline.staging import ingest_staging_dir
from utils.logger import setup_logger

logger = logging.getLogger("inventory_pipeline.run_pipeline")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run the inventory ETL pipeline and reports')
    parser.add_argument('--db', type=str, default=config.DB_PATH, help='Path to SQLite database')
    parser.add_argument('--data-dir', type=str, default=None,
                        help='Directory with products/suppliers/shipments/inventory_log CSV files to stage')
    parser.add_argument('--export-dir', type=str, default=config.EXPORT_DIR, help='Directory for exported reports')
    parser.add_argument('--s3-bucket', type=str, default=config.S3_BUCKET, help='Upload exported reports to this bucket')
    parser.add_argument('--report', type=str, choices=list(REPORTS), help='Only run and print this report')
    parser.add_argument('--skip-load', action='store_true', help='Do not move staging data into the final tables')
    parser.add_argument('--log-dir', type=str, default=config.LOG_DIR, help='Directory for log files')
    return parser


def run_pipeline(
    db_path: str,
    data_dir: Optional[str] = None,
    export_dir: Optional[str] = None,
    s3_bucket: Optional[str] = None,
    report: Optional[str] = None,
    skip_load: bool = False
) -> int:
    """
    Run the full pipeline against one database.

    Returns:
        Process exit status: 0 on success, 1 when staging or loading failed
    """
    conn = None
    try:
        conn = connect(db_path)
        # Staging tables only come from ingestion
        create_tables(conn, staging=False)

        if data_dir:
            if not ingest_staging_dir(conn, data_dir):
                logger.error("Staging ingestion failed. Aborting pipeline.")
                return 1

        if not skip_load:
            load_final_tables(conn)

        logger.info(f"Table statistics: {get_table_counts(conn)}")

        if report:
            reports = {report: run_report(conn, report)}
        else:
            reports = run_all_reports(conn)

        for name, df in reports.items():
            print(f"\n== {name} ==")
            print(df.to_string(index=False) if not df.empty else "(no rows)")

        if export_dir:
            files = export_reports(reports, export_dir)
            if s3_bucket:
                uploaded = upload_exports(files, s3_bucket)
                logger.info(f"Uploaded {sum(uploaded.values())} of {len(uploaded)} reports to s3://{s3_bucket}")

        logger.info("Inventory pipeline completed.")
        return 0

    except sqlite3.Error as e:
        logger.error(f"Error running pipeline: {e}")
        return 1

    finally:
        if conn:
            conn.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point for the pipeline."""
    args = build_parser().parse_args(argv)
    setup_logger("inventory_pipeline", log_file="inventory_pipeline.log", log_dir=args.log_dir)
    pd.set_option('display.width', 120)

    return run_pipeline(
        db_path=args.db,
        data_dir=args.data_dir,
        export_dir=args.export_dir,
        s3_bucket=args.s3_bucket,
        report=args.report,
        skip_load=args.skip_load,
    )


if __name__ == "__main__":
    sys.exit(main())

import os
import sqlite3
import logging
from typing import Dict, List, Optional

import pandas as pd

from inventory_pipeline.schema import STAGING_TABLES, TABLE_COLUMNS, create_staging_tables

logger = logging.getLogger("inventory_pipeline.staging")

# Staging table -> CSV file name expected in the data directory
STAGING_FILES = {
    "staging_products": "products.csv",
    "staging_suppliers": "suppliers.csv",
    "staging_shipments": "shipments.csv",
    "staging_inventory_log": "inventory_log.csv",
}

# Tried in order; latin-1 decodes any byte sequence
CSV_ENCODINGS = ("utf-8-sig", "latin-1")


def missing_columns(columns: List[str], table_name: str) -> List[str]:
    """Columns of the staging table that a CSV header does not provide."""
    return [col for col in TABLE_COLUMNS[table_name] if col not in columns]


def read_staging_csv(csv_file: str, table_name: str) -> Optional[pd.DataFrame]:
    """
    Read a CSV file into the column layout of a staging table.

    Every value is kept as the text in the file; only empty cells become
    missing. A UTF-8 byte order mark is stripped, and files that are not
    UTF-8 are read as latin-1. Columns the table does not have are dropped.

    Args:
        csv_file: Path to the CSV file
        table_name: One of the staging tables

    Returns:
        The staged columns, or None if the file can't be read or lacks a column
    """
    if table_name not in STAGING_TABLES:
        raise ValueError(f"Not a staging table: {table_name}")

    df = None
    for encoding in CSV_ENCODINGS:
        try:
            df = pd.read_csv(csv_file, dtype=str, encoding=encoding,
                             keep_default_na=False, na_values=[''])
            break
        except UnicodeDecodeError:
            logger.info(f"{encoding} decoding failed for {csv_file}. Retrying with the next encoding.")
        except pd.errors.EmptyDataError:
            logger.error(f"CSV file {csv_file} is empty or has no headers.")
            return None
        except (OSError, pd.errors.ParserError) as e:
            logger.error(f"Error reading CSV file {csv_file}: {e}")
            return None

    missing = missing_columns(list(df.columns), table_name)
    if missing:
        logger.error(f"CSV file {csv_file} is missing required columns: {missing}")
        return None

    return df[TABLE_COLUMNS[table_name]]


def _insert_rows(conn: sqlite3.Connection, table_name: str, df: pd.DataFrame) -> None:
    columns = TABLE_COLUMNS[table_name]
    placeholders = ", ".join("?" for _ in columns)
    rows = [
        tuple(None if pd.isna(value) else value for value in row)
        for row in df.itertuples(index=False, name=None)
    ]
    conn.executemany(
        f"INSERT INTO {table_name} ({', '.join(columns)}) VALUES ({placeholders})",
        rows
    )


def write_staging_frames(conn: sqlite3.Connection, frames: Dict[str, pd.DataFrame],
                         replace: bool = False) -> bool:
    """
    Insert staged frames in a single transaction.

    Args:
        conn: Open SQLite connection with no transaction in progress
        frames: Staging table name -> rows from read_staging_csv
        replace: Empty each target staging table first

    Returns:
        True if every frame was written, False if none was
    """
    if conn.in_transaction:
        raise sqlite3.OperationalError("Staging ingestion needs a connection with no open transaction")

    create_staging_tables(conn.cursor())
    try:
        conn.execute("BEGIN TRANSACTION")
        for table_name, df in frames.items():
            if replace:
                conn.execute(f"DELETE FROM {table_name}")
            _insert_rows(conn, table_name, df)
        conn.commit()

    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Error writing staging tables {list(frames)}: {e}")
        return False

    for table_name, df in frames.items():
        logger.info(f"Successfully ingested {len(df)} records into {table_name}.")
    return True


def ingest_staging_csv(conn: sqlite3.Connection, table_name: str, csv_file: str) -> bool:
    """
    Append the rows of a CSV file to a staging table.

    Returns:
        True if ingestion is successful, False otherwise
    """
    df = read_staging_csv(csv_file, table_name)
    if df is None:
        logger.error(f"Could not stage {csv_file}. Aborting ingestion.")
        return False
    return write_staging_frames(conn, {table_name: df})


def ingest_staging_dir(conn: sqlite3.Connection, data_dir: str) -> bool:
    """
    Stage the four standard CSV files of a data directory, all or nothing.

    Every file is read and checked before anything is written. The staging
    tables are then replaced with the directory's contents, so rerunning
    after fixing a file does not stage rows twice.
    """
    frames = {}
    for table_name in STAGING_TABLES:
        csv_file = os.path.join(data_dir, STAGING_FILES[table_name])
        if not os.path.exists(csv_file):
            logger.error(f"CSV file not found: {csv_file}")
            return False
        df = read_staging_csv(csv_file, table_name)
        if df is None:
            return False
        frames[table_name] = df

    return write_staging_frames(conn, frames, replace=True)

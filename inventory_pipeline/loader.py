import sqlite3
import logging
from typing import Dict

from inventory_pipeline.schema import LOAD_ORDER, STAGING_TABLES, TABLE_COLUMNS, table_exists

logger = logging.getLogger("inventory_pipeline.loader")


def drop_staging_tables(conn: sqlite3.Connection) -> None:
    """
    Drop the staging tables. Safe to call when they are already gone.
    """
    for table_name in STAGING_TABLES:
        conn.execute(f"DROP TABLE IF EXISTS {table_name}")
    conn.commit()
    logger.info("Dropped staging tables")


def load_final_tables(conn: sqlite3.Connection) -> Dict[str, int]:
    """
    Copy every staging table into its final table, then drop the staging tables.

    Rows are copied column for column with no transformation, validation or
    deduplication. The four copies share one transaction: a constraint
    violation in any of them rolls all of them back, keeps the staging
    tables, and is re-raised unchanged.

    Args:
        conn: Open connection with foreign keys enabled

    Returns:
        Number of rows copied into each final table. Empty if no staging
        table exists (the load already ran).

    Raises:
        sqlite3.IntegrityError: duplicate key, missing foreign-key target or
            invalid change_type in the staged rows
        sqlite3.OperationalError: the connection already has an open
            transaction, which is left untouched
    """
    if conn.in_transaction:
        raise sqlite3.OperationalError("Load needs a connection with no open transaction; commit or roll back first")

    pending = [(staging, final) for staging, final in LOAD_ORDER if table_exists(conn, staging)]
    if not pending:
        logger.info("No staging tables found; nothing to load")
        return {}

    for staging in STAGING_TABLES:
        if not table_exists(conn, staging):
            logger.warning(f"Staging table {staging} does not exist. Skipping.")

    copied = {}
    try:
        # Begin transaction for data integrity
        conn.execute("BEGIN TRANSACTION")

        for staging, final in pending:
            columns = ", ".join(TABLE_COLUMNS[final])
            cursor = conn.execute(
                f"INSERT INTO {final} ({columns}) SELECT {columns} FROM {staging}"
            )
            copied[final] = cursor.rowcount
            logger.info(f"Copied {cursor.rowcount} records from {staging} into {final}")

        conn.commit()

    except sqlite3.Error as e:
        conn.rollback()
        logger.error(f"Error loading staging data into final tables: {e}")
        raise

    drop_staging_tables(conn)
    logger.info(f"Load completed: {copied}")
    return copied

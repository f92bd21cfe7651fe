import os
import sqlite3
import logging
from typing import Dict

logger = logging.getLogger("inventory_pipeline.schema")

# Staging table -> final table, in foreign-key order
LOAD_ORDER = [
    ("staging_products", "Products"),
    ("staging_suppliers", "Suppliers"),
    ("staging_shipments", "Shipments"),
    ("staging_inventory_log", "Inventory_Log"),
]

STAGING_TABLES = [staging for staging, _ in LOAD_ORDER]
FINAL_TABLES = [final for _, final in LOAD_ORDER]

TABLE_COLUMNS = {
    "Products": ["product_id", "product_name", "category", "unit_price"],
    "Suppliers": ["supplier_id", "name", "location"],
    "Shipments": ["shipment_id", "supplier_id", "product_id", "quantity", "shipment_date"],
    "Inventory_Log": ["log_id", "product_id", "change_type", "quantity", "change_date"],
}
for _staging, _final in LOAD_ORDER:
    TABLE_COLUMNS[_staging] = TABLE_COLUMNS[_final]


def connect(db_path: str) -> sqlite3.Connection:
    """
    Open the SQLite database with foreign-key enforcement turned on.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection object
    """
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)
    conn = sqlite3.connect(db_path)
    # Off by default in SQLite, and a no-op once a transaction is open
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def create_staging_tables(cursor):
    """
    Create the unconstrained staging tables if they don't already exist.
    """
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS staging_products (
            product_id INT,
            product_name TEXT,
            category TEXT,
            unit_price DECIMAL(10,2)
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS staging_suppliers (
            supplier_id INT,
            name TEXT,
            location TEXT
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS staging_shipments (
            shipment_id INT,
            supplier_id INT,
            product_id INT,
            quantity INT,
            shipment_date DATE
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS staging_inventory_log (
            log_id INT,
            product_id INT,
            change_type TEXT,
            quantity INT,
            change_date DATE
        )
    """)


def create_final_tables(cursor):
    """
    Create the constrained final tables if they don't already exist.

    Keys are declared INT NOT NULL rather than INTEGER so they are not
    rowid aliases: a NULL key fails the load instead of being auto-assigned.
    """
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS Products (
            product_id INT NOT NULL PRIMARY KEY,
            product_name TEXT NOT NULL,
            category TEXT,
            unit_price DECIMAL(10,2)
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS Suppliers (
            supplier_id INT NOT NULL PRIMARY KEY,
            name TEXT,
            location TEXT
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS Shipments (
            shipment_id INT NOT NULL PRIMARY KEY,
            supplier_id INT REFERENCES Suppliers(supplier_id),
            product_id INT REFERENCES Products(product_id),
            quantity INT,
            shipment_date DATE
        )
    """)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS Inventory_Log (
            log_id INT NOT NULL PRIMARY KEY,
            product_id INT REFERENCES Products(product_id),
            change_type TEXT CHECK (change_type IN ('IN', 'OUT')),
            quantity INT,
            change_date DATE
        )
    """)


def create_tables(conn: sqlite3.Connection, staging: bool = True) -> None:
    """Create the final tables, and the staging tables unless told not to."""
    cursor = conn.cursor()
    if staging:
        create_staging_tables(cursor)
    create_final_tables(cursor)
    conn.commit()
    logger.info("Database tables created successfully")


def table_exists(conn: sqlite3.Connection, table_name: str) -> bool:
    cursor = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?",
        (table_name,)
    )
    return cursor.fetchone() is not None


def get_table_counts(conn: sqlite3.Connection) -> Dict[str, int]:
    """
    Get record counts for every staging and final table that exists.

    Returns:
        Dictionary mapping table name to its row count
    """
    counts = {}
    for table_name in STAGING_TABLES + FINAL_TABLES:
        if not table_exists(conn, table_name):
            continue
        cursor = conn.execute(f"SELECT COUNT(*) FROM {table_name}")
        counts[table_name] = cursor.fetchone()[0]
    return counts

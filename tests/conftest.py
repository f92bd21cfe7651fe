import sqlite3

import pytest

from inventory_pipeline.loader import load_final_tables
from inventory_pipeline.schema import connect, create_tables


def stage_rows(conn, products=(), suppliers=(), shipments=(), inventory_log=()):
    """Insert raw rows straight into the staging tables."""
    conn.executemany("INSERT INTO staging_products VALUES (?, ?, ?, ?)", products)
    conn.executemany("INSERT INTO staging_suppliers VALUES (?, ?, ?)", suppliers)
    conn.executemany("INSERT INTO staging_shipments VALUES (?, ?, ?, ?, ?)", shipments)
    conn.executemany("INSERT INTO staging_inventory_log VALUES (?, ?, ?, ?, ?)", inventory_log)
    conn.commit()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "db" / "inventory.db")


@pytest.fixture
def conn(db_path):
    connection = connect(db_path)
    create_tables(connection)
    yield connection
    connection.close()


@pytest.fixture
def loaded_conn(conn):
    """
    A small warehouse:

    - Widget: IN 100, OUT 30            -> 70 in stock
    - Gadget: IN 40, OUT 15 (same day)  -> 25 in stock
    - Gizmo:  OUT 5 only                -> -5 in stock
    - Doohickey: no log entries         -> 0 in stock
    - Sprocket: IN 3 at 19.99           -> 3 in stock, worth 59.97
    """
    stage_rows(
        conn,
        products=[
            (1, "Widget", None, 10.00),
            (2, "Gadget", "Electronics", 2.50),
            (3, "Gizmo", "Electronics", 4.00),
            (4, "Doohickey", "Tools", 1.25),
            (5, "Sprocket", "Tools", 19.99),
        ],
        suppliers=[
            (1, "Acme Supply", "Chicago"),
            (2, "Globex", "Berlin"),
            (3, "Initech", "Toronto"),
        ],
        shipments=[
            (1, 1, 1, 100, "2024-01-01"),
            (2, 2, 2, 40, "2024-01-02"),
            (3, 2, 1, 25, "2024-01-03"),
            (4, 1, 5, 3, "2024-01-04"),
        ],
        inventory_log=[
            (1, 1, "IN", 100, "2024-01-01"),
            (2, 1, "OUT", 30, "2024-01-02"),
            (3, 2, "IN", 40, "2024-01-02"),
            (4, 2, "OUT", 15, "2024-01-02"),
            (5, 3, "OUT", 5, "2024-01-03"),
            (6, 5, "IN", 3, "2024-01-04"),
        ],
    )
    load_final_tables(conn)
    return conn


@pytest.fixture
def final_rows():
    def _final_rows(connection: sqlite3.Connection, table: str):
        return connection.execute(f"SELECT * FROM {table} ORDER BY 1").fetchall()
    return _final_rows


@pytest.fixture
def stage():
    return stage_rows

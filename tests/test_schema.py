import sqlite3

import pytest

from inventory_pipeline.schema import (
    FINAL_TABLES,
    STAGING_TABLES,
    connect,
    create_tables,
    get_table_counts,
    table_exists,
)


def test_connect_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "inventory.db"
    conn = connect(str(db_path))
    try:
        assert db_path.parent.is_dir()
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    finally:
        conn.close()


def test_create_tables_is_idempotent(conn):
    create_tables(conn)
    for table_name in STAGING_TABLES + FINAL_TABLES:
        assert table_exists(conn, table_name)


def test_create_tables_without_staging(db_path):
    conn = connect(db_path)
    try:
        create_tables(conn, staging=False)
        assert all(table_exists(conn, name) for name in FINAL_TABLES)
        assert not any(table_exists(conn, name) for name in STAGING_TABLES)
    finally:
        conn.close()


def test_staging_tables_accept_anything(conn):
    conn.execute("INSERT INTO staging_inventory_log VALUES (1, 999, 'SIDEWAYS', -4, NULL)")
    conn.execute("INSERT INTO staging_inventory_log VALUES (1, 999, 'SIDEWAYS', -4, NULL)")
    conn.execute("INSERT INTO staging_products VALUES (NULL, NULL, NULL, NULL)")
    conn.commit()
    assert get_table_counts(conn)["staging_inventory_log"] == 2


@pytest.mark.parametrize("statement", [
    "INSERT INTO Products VALUES (1, NULL, NULL, 1.00)",
    "INSERT INTO Products VALUES (NULL, 'Nameless key', NULL, 1.00)",
    "INSERT INTO Inventory_Log VALUES (1, NULL, 'in', 5, '2024-01-01')",
    "INSERT INTO Inventory_Log VALUES (1, 42, 'IN', 5, '2024-01-01')",
    "INSERT INTO Shipments VALUES (1, 42, NULL, 5, '2024-01-01')",
])
def test_final_table_constraints(conn, statement):
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute(statement)
    conn.rollback()


def test_duplicate_product_key_rejected(conn):
    conn.execute("INSERT INTO Products VALUES (1, 'Widget', NULL, 1.00)")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO Products VALUES (1, 'Other', NULL, 2.00)")
    conn.rollback()


def test_get_table_counts_skips_missing_tables(loaded_conn):
    counts = get_table_counts(loaded_conn)
    assert set(counts) == set(FINAL_TABLES)
    assert counts == {
        "Products": 5,
        "Suppliers": 3,
        "Shipments": 4,
        "Inventory_Log": 6,
    }

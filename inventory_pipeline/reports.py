"""
Read-only inventory reports over the final tables.

Every report takes an open connection and returns a pandas DataFrame. None
of them write to the database.
"""
import sqlite3
import logging
from collections import OrderedDict
from typing import Callable, Dict

import pandas as pd

from inventory_pipeline import config

logger = logging.getLogger("inventory_pipeline.reports")

# Signed sum of a product's log entries; 0 when the product has none
STOCK_BALANCE_SQL = """
    COALESCE(SUM(
        CASE
            WHEN il.change_type = 'IN' THEN il.quantity
            WHEN il.change_type = 'OUT' THEN -il.quantity
            ELSE 0
        END
    ), 0)
"""


def _stock_by_product(conn: sqlite3.Connection, name_column: str, having: str = "",
                      params: tuple = ()) -> pd.DataFrame:
    query = f"""
    SELECT
        p.product_name AS {name_column},
        {STOCK_BALANCE_SQL} AS current_stock
    FROM Products AS p
    LEFT JOIN Inventory_Log AS il ON p.product_id = il.product_id
    GROUP BY p.product_id, p.product_name
    {having}
    ORDER BY current_stock ASC, p.product_name
    """
    return pd.read_sql(query, conn, params=params)


def _units_by_supplier(conn: sqlite3.Connection, total_column: str) -> pd.DataFrame:
    query = f"""
    SELECT
        s.name AS supplier,
        SUM(sh.quantity) AS {total_column}
    FROM Shipments AS sh
    JOIN Suppliers AS s ON sh.supplier_id = s.supplier_id
    GROUP BY s.supplier_id, s.name
    ORDER BY {total_column} DESC, s.name
    """
    return pd.read_sql(query, conn)


def current_inventory_levels(conn: sqlite3.Connection) -> pd.DataFrame:
    """Current stock of every product, lowest first."""
    return _stock_by_product(conn, "product_name")


def low_stock_products(conn: sqlite3.Connection,
                       threshold: int = config.LOW_STOCK_THRESHOLD) -> pd.DataFrame:
    """Products whose current stock is below ``threshold`` and may need restocking."""
    return _stock_by_product(
        conn,
        "product",
        having=f"HAVING {STOCK_BALANCE_SQL} < ?",
        params=(threshold,),
    )


def most_shipped_products(conn: sqlite3.Connection) -> pd.DataFrame:
    """Total quantity received from suppliers per product."""
    query = """
    SELECT
        p.product_name AS product,
        SUM(s.quantity) AS total_shipped
    FROM Shipments AS s
    JOIN Products AS p ON s.product_id = p.product_id
    GROUP BY p.product_id, p.product_name
    ORDER BY total_shipped DESC, p.product_name
    """
    return pd.read_sql(query, conn)


def top_suppliers_by_units(conn: sqlite3.Connection) -> pd.DataFrame:
    """Suppliers ranked by the units they have provided."""
    return _units_by_supplier(conn, "total_units_supplied")


def inventory_change_over_time(conn: sqlite3.Connection) -> pd.DataFrame:
    """Net IN/OUT change per product per day."""
    query = f"""
    SELECT
        p.product_name AS product,
        il.change_date,
        {STOCK_BALANCE_SQL} AS net_change
    FROM Inventory_Log AS il
    JOIN Products AS p ON il.product_id = p.product_id
    GROUP BY p.product_id, p.product_name, il.change_date
    ORDER BY net_change, p.product_name, il.change_date
    """
    return pd.read_sql(query, conn)


def never_restocked_products(conn: sqlite3.Connection) -> pd.DataFrame:
    """
    Products without a single IN entry.

    This includes products that only ever had stock removed as well as
    products with no log entries at all.
    """
    query = """
    SELECT p.product_name AS product
    FROM Products AS p
    LEFT JOIN Inventory_Log AS il
        ON p.product_id = il.product_id AND il.change_type = 'IN'
    WHERE il.product_id IS NULL
    ORDER BY p.product_name
    """
    return pd.read_sql(query, conn)


def suppliers_by_quantity_shipped(conn: sqlite3.Connection) -> pd.DataFrame:
    """Same ranking as top_suppliers_by_units, reported as quantity shipped."""
    return _units_by_supplier(conn, "total_quantity_shipped")


def most_removed_products(conn: sqlite3.Connection) -> pd.DataFrame:
    """Total OUT quantity per product, highest first."""
    query = """
    SELECT
        p.product_name AS product,
        SUM(il.quantity) AS total_removed
    FROM Inventory_Log AS il
    JOIN Products AS p ON il.product_id = p.product_id
    WHERE il.change_type = 'OUT'
    GROUP BY p.product_id, p.product_name
    ORDER BY total_removed DESC, p.product_name
    """
    return pd.read_sql(query, conn)


def current_stock_levels(conn: sqlite3.Connection) -> pd.DataFrame:
    """Current stock of every product, zero-stock products included."""
    return _stock_by_product(conn, "product")


def inventory_value(conn: sqlite3.Connection) -> pd.DataFrame:
    """Current stock valued at unit price, rounded to cents, highest first."""
    query = f"""
    SELECT
        p.product_name AS product,
        {STOCK_BALANCE_SQL} AS current_stock,
        p.unit_price,
        ROUND(p.unit_price * {STOCK_BALANCE_SQL}, 2) AS inventory_value
    FROM Products AS p
    LEFT JOIN Inventory_Log AS il ON p.product_id = il.product_id
    GROUP BY p.product_id, p.product_name, p.unit_price
    ORDER BY inventory_value DESC, p.product_name
    """
    return pd.read_sql(query, conn)


REPORTS: Dict[str, Callable[[sqlite3.Connection], pd.DataFrame]] = OrderedDict([
    ("current_inventory_levels", current_inventory_levels),
    ("low_stock_products", low_stock_products),
    ("most_shipped_products", most_shipped_products),
    ("top_suppliers_by_units", top_suppliers_by_units),
    ("inventory_change_over_time", inventory_change_over_time),
    ("never_restocked_products", never_restocked_products),
    ("suppliers_by_quantity_shipped", suppliers_by_quantity_shipped),
    ("most_removed_products", most_removed_products),
    ("current_stock_levels", current_stock_levels),
    ("inventory_value", inventory_value),
])


def run_report(conn: sqlite3.Connection, name: str) -> pd.DataFrame:
    """
    Run a single report by name.

    Raises:
        KeyError: if no report has that name
    """
    if name not in REPORTS:
        raise KeyError(f"Unknown report: {name}")
    df = REPORTS[name](conn)
    logger.info(f"Report {name} returned {len(df)} rows")
    return df


def run_all_reports(conn: sqlite3.Connection) -> Dict[str, pd.DataFrame]:
    """Run every report in catalogue order."""
    return OrderedDict((name, run_report(conn, name)) for name in REPORTS)

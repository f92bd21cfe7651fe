#!/usr/bin/env python3
"""
Inventory Data Generator

Generates synthetic products, suppliers, shipments and inventory log entries
as the four CSV files the pipeline stages. Every shipment and log entry
references a generated product (and supplier), and each product's first log
entry is an IN, so the output loads cleanly into the final tables.
"""

import os
import argparse
from datetime import datetime, timedelta
from typing import Dict, Optional

import numpy as np
import pandas as pd

from utils.logger import setup_logger

logger = setup_logger("Data_Generator", log_file="data_generator.log", log_dir=None)

# Define constants
DEFAULT_OUTPUT_DIR = "data/sample"
DEFAULT_NUM_PRODUCTS = 25
DEFAULT_NUM_SUPPLIERS = 5
DEFAULT_NUM_SHIPMENTS = 200
DEFAULT_NUM_LOG_ENTRIES = 600
DATE_FORMAT = "%Y-%m-%d"

CATEGORIES = {
    'Electronics': ['Cable', 'Charger', 'Headphones', 'Mouse', 'Keyboard'],
    'Office': ['Stapler', 'Notebook', 'Pen Set', 'Binder', 'Desk Lamp'],
    'Kitchen': ['Kettle', 'Mug', 'Knife Set', 'Cutting Board', 'Blender'],
    'Tools': ['Hammer', 'Screwdriver', 'Wrench', 'Tape Measure', 'Drill'],
}

LOCATIONS = ['Berlin', 'Chicago', 'Lagos', 'Mumbai', 'Osaka', 'Sao Paulo', 'Toronto']
SUPPLIER_SUFFIXES = ['Supply Co', 'Wholesale', 'Trading', 'Distribution', 'Imports']


def generate_products(rng: np.random.Generator, num_products: int) -> pd.DataFrame:
    categories = list(CATEGORIES)
    rows = []
    for product_id in range(1, num_products + 1):
        category = categories[rng.integers(len(categories))]
        base_name = CATEGORIES[category][rng.integers(len(CATEGORIES[category]))]
        rows.append({
            'product_id': product_id,
            'product_name': f"{base_name} {product_id:03d}",
            # A few uncategorised products
            'category': category if rng.random() > 0.1 else '',
            'unit_price': round(float(rng.uniform(1.0, 250.0)), 2),
        })
    return pd.DataFrame(rows)


def generate_suppliers(rng: np.random.Generator, num_suppliers: int) -> pd.DataFrame:
    rows = []
    for supplier_id in range(1, num_suppliers + 1):
        location = LOCATIONS[rng.integers(len(LOCATIONS))]
        suffix = SUPPLIER_SUFFIXES[rng.integers(len(SUPPLIER_SUFFIXES))]
        rows.append({
            'supplier_id': supplier_id,
            'name': f"{location} {suffix} {supplier_id}",
            'location': location,
        })
    return pd.DataFrame(rows)


def random_date(rng: np.random.Generator, start_date: datetime, days: int) -> str:
    return (start_date + timedelta(days=int(rng.integers(days)))).strftime(DATE_FORMAT)


def generate_shipments(
    rng: np.random.Generator,
    num_shipments: int,
    num_suppliers: int,
    num_products: int,
    start_date: datetime,
    days: int
) -> pd.DataFrame:
    return pd.DataFrame({
        'shipment_id': np.arange(1, num_shipments + 1),
        'supplier_id': rng.integers(1, num_suppliers + 1, size=num_shipments),
        'product_id': rng.integers(1, num_products + 1, size=num_shipments),
        'quantity': rng.integers(10, 500, size=num_shipments),
        'shipment_date': [random_date(rng, start_date, days) for _ in range(num_shipments)],
    })


def generate_inventory_log(
    rng: np.random.Generator,
    num_entries: int,
    num_products: int,
    start_date: datetime,
    days: int
) -> pd.DataFrame:
    """Log entries where every product that appears starts with an IN."""
    rows = []
    seen = set()
    for log_id in range(1, num_entries + 1):
        product_id = int(rng.integers(1, num_products + 1))
        if product_id not in seen:
            change_type = 'IN'
            seen.add(product_id)
        else:
            change_type = 'IN' if rng.random() < 0.4 else 'OUT'
        quantity = int(rng.integers(50, 300)) if change_type == 'IN' else int(rng.integers(1, 80))
        rows.append({
            'log_id': log_id,
            'product_id': product_id,
            'change_type': change_type,
            'quantity': quantity,
            'change_date': random_date(rng, start_date, days),
        })
    return pd.DataFrame(rows)


def generate_inventory_data(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    num_suppliers: int = DEFAULT_NUM_SUPPLIERS,
    num_shipments: int = DEFAULT_NUM_SHIPMENTS,
    num_log_entries: int = DEFAULT_NUM_LOG_ENTRIES,
    output_dir: str = DEFAULT_OUTPUT_DIR,
    seed: Optional[int] = None
) -> Optional[Dict[str, str]]:
    """Generate the four staging CSV files.

    Args:
        num_products: Number of products to generate
        num_suppliers: Number of suppliers to generate
        num_shipments: Number of shipments to generate
        num_log_entries: Number of inventory log entries to generate
        output_dir: Directory to save the output files
        seed: Seed for reproducible output

    Returns:
        Mapping of file name to path if successful, None otherwise
    """
    if num_products < 1 or num_suppliers < 1:
        logger.error("At least one product and one supplier are required")
        return None

    try:
        os.makedirs(output_dir, exist_ok=True)
        rng = np.random.default_rng(seed)

        # Define date range (last 90 days)
        days = 90
        start_date = datetime.now() - timedelta(days=days)

        logger.info(f"Generating {num_products} products, {num_suppliers} suppliers, "
                    f"{num_shipments} shipments and {num_log_entries} log entries")

        frames = {
            'products.csv': generate_products(rng, num_products),
            'suppliers.csv': generate_suppliers(rng, num_suppliers),
            'shipments.csv': generate_shipments(rng, num_shipments, num_suppliers, num_products, start_date, days),
            'inventory_log.csv': generate_inventory_log(rng, num_log_entries, num_products, start_date, days),
        }

        paths = {}
        for filename, df in frames.items():
            output_file = os.path.join(output_dir, filename)
            df.to_csv(output_file, index=False)
            paths[filename] = output_file
            logger.info(f"Wrote {len(df)} records to {output_file}")
        return paths

    except OSError as e:
        logger.error(f"Error generating inventory data: {e}")
        return None


def main():
    """Main entry point for the script."""
    parser = argparse.ArgumentParser(description='Generate synthetic inventory data')
    parser.add_argument('--products', type=int, default=DEFAULT_NUM_PRODUCTS,
                        help=f'Number of products (default: {DEFAULT_NUM_PRODUCTS})')
    parser.add_argument('--suppliers', type=int, default=DEFAULT_NUM_SUPPLIERS,
                        help=f'Number of suppliers (default: {DEFAULT_NUM_SUPPLIERS})')
    parser.add_argument('--shipments', type=int, default=DEFAULT_NUM_SHIPMENTS,
                        help=f'Number of shipments (default: {DEFAULT_NUM_SHIPMENTS})')
    parser.add_argument('--log-entries', type=int, default=DEFAULT_NUM_LOG_ENTRIES,
                        help=f'Number of inventory log entries (default: {DEFAULT_NUM_LOG_ENTRIES})')
    parser.add_argument('--output-dir', type=str, default=DEFAULT_OUTPUT_DIR,
                        help=f'Output directory (default: {DEFAULT_OUTPUT_DIR})')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')

    args = parser.parse_args()

    paths = generate_inventory_data(
        num_products=args.products,
        num_suppliers=args.suppliers,
        num_shipments=args.shipments,
        num_log_entries=args.log_entries,
        output_dir=args.output_dir,
        seed=args.seed
    )

    if paths:
        print(f"Data generation complete. Files saved to: {args.output_dir}")
    else:
        print("Data generation failed. Check logs for details.")


if __name__ == "__main__":
    main()

import pandas as pd

from data_generator import generate_inventory_data


def read_outputs(paths):
    return {name: pd.read_csv(path) for name, path in paths.items()}


def test_generates_four_consistent_files(tmp_path):
    paths = generate_inventory_data(
        num_products=10, num_suppliers=4, num_shipments=30, num_log_entries=50,
        output_dir=str(tmp_path), seed=1
    )

    frames = read_outputs(paths)
    assert set(frames) == {"products.csv", "suppliers.csv", "shipments.csv", "inventory_log.csv"}

    products = frames["products.csv"]
    shipments = frames["shipments.csv"]
    log = frames["inventory_log.csv"]
    assert len(products) == 10
    assert products["product_id"].is_unique
    assert set(shipments["product_id"]) <= set(products["product_id"])
    assert set(shipments["supplier_id"]) <= set(frames["suppliers.csv"]["supplier_id"])
    assert set(log["product_id"]) <= set(products["product_id"])
    assert set(log["change_type"]) <= {"IN", "OUT"}
    assert (log["quantity"] > 0).all()
    assert (products["unit_price"] == products["unit_price"].round(2)).all()


def test_first_entry_per_product_is_in(tmp_path):
    paths = generate_inventory_data(num_log_entries=200, output_dir=str(tmp_path), seed=3)
    log = pd.read_csv(paths["inventory_log.csv"])

    first = log.sort_values("log_id").groupby("product_id").first()
    assert (first["change_type"] == "IN").all()


def test_seed_makes_output_reproducible(tmp_path):
    first = generate_inventory_data(output_dir=str(tmp_path / "a"), seed=42)
    second = generate_inventory_data(output_dir=str(tmp_path / "b"), seed=42)

    for name in first:
        a = pd.read_csv(first[name])
        b = pd.read_csv(second[name])
        assert a.equals(b)


def test_requires_products_and_suppliers(tmp_path):
    assert generate_inventory_data(num_products=0, output_dir=str(tmp_path)) is None

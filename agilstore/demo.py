# agilstore/demo.py
import argparse

from rich import print

from agilstore.core import InventoryManager

SAMPLE_PRODUCTS = [
    ("Mouse", "Perifericos", 10, 49.9),
    ("Teclado Mecânico", "Perifericos", 5, 289.0),
    ("Monitor 24 polegadas Full HD", "Monitores", 3, 899.99),
    ("Cabo HDMI", "Acessorios", 25, 19.5),
]


def seed(data_file: str):
    manager = InventoryManager(data_file)
    manager.load()

    # -----------------------------
    # Register sample products
    # -----------------------------
    print(f"\nSeeding {data_file}...")
    created = []
    for name, category, quantity, price in SAMPLE_PRODUCTS:
        product = manager.add_product(name, category, quantity, price)
        print(product.model_dump())
        created.append(product)

    manager.close()
    return created


def main(argv=None):
    parser = argparse.ArgumentParser(description="Seed an AgilStore data file with sample products")
    parser.add_argument("--data-file", default="products.json")
    args = parser.parse_args(argv)
    seed(args.data_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

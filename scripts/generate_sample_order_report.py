"""
Generate a sample order report for manual review.

Builds a multi-page order summary (front page, repeated table header,
summary page) in workspace/sample_reports.
"""

import logging
import random
from pathlib import Path

from report_toolkit.order_report import OrderReportConfig, OrderReportError, build_order_report

# Paths
OUTPUT_DIR = Path(__file__).parent.parent / "workspace" / "sample_reports"

PRODUCTS = ["Desk lamp", "Office chair", "Monitor arm", "Notebook A5", "USB-C hub", "Cable tray"]
VENDORS = ["ACME", "Northwind", "Globex"]


def make_rows(count: int, seed: int = 42) -> list:
    rng = random.Random(seed)
    rows = []
    for _ in range(count):
        price = rng.uniform(5, 250)
        discount = rng.choice([0, 5, 10, 15])
        quantity = rng.randint(1, 12)
        discounted = price * (100 - discount) / 100
        rows.append({
            "Product name": rng.choice(PRODUCTS),
            "Vendor name": rng.choice(VENDORS),
            "Discount": f"{discount}%",
            "Discounted price": f"{discounted:.2f}",
            "Quantity": str(quantity),
            "Amount": f"{discounted * quantity:.2f}",
        })
    return rows


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = OrderReportConfig(
        output_dir=OUTPUT_DIR,
        file_name="sample_order",
        subtitle="Sample order generated for review",
        reuse_existing=False,
    )

    try:
        result = build_order_report(make_rows(45), config)
    except OrderReportError as e:
        print(f"[ERROR] {e}")
        return

    print(f"[OK] Wrote {result.page_count} pages ({result.row_count} rows) to {result.pdf_path}")


if __name__ == "__main__":
    main()

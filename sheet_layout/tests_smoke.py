# sheet_layout/tests_smoke.py
# End-to-end smoke tests you can run with:
#   python -m sheet_layout.tests_smoke
# or through pytest.
#
# They cover the four reference scenarios: single product grid, oversized product,
# two products in a 1:3 ratio, and an empty product list.

from __future__ import annotations

import math

from sheet_layout.metrics import production_summary
from sheet_layout.optimizer import optimize_layout
from sheet_layout.types import Product, check_no_overlap
from sheet_layout.validate import raise_on_errors, validate_result


def test_single_product_grid() -> None:
    products = [Product("a", 100, 50, 10, "Label A")]
    res = optimize_layout(products, 700, 500)

    raise_on_errors(validate_result(res, products))
    check_no_overlap(res.sheets)

    fit = len(res.sheets[0].items)
    assert 1 <= fit <= 70
    # the edge/neighbor score leaves narrow gaps, so one cell stays empty
    assert fit == 69
    assert res.total_sheets == math.ceil(10 / fit) == 1
    assert res.unused_products == ()
    assert math.isclose(res.utilisation_rate, 100.0 * 69 / 70)


def test_product_larger_than_sheet() -> None:
    big = Product("big", 800, 800, 5, "Poster")
    res = optimize_layout([big], 700, 500)

    assert len(res.sheets) == 1
    assert res.sheets[0].items == []
    assert res.unused_products == (big,)
    assert res.total_sheets == 1
    assert res.utilisation_rate == 0


def test_ratio_one_to_three() -> None:
    products = [
        Product("a", 100, 100, 10, "A"),
        Product("b", 100, 100, 30, "B"),
    ]
    res = optimize_layout(products, 400, 400)

    raise_on_errors(validate_result(res, products))

    per_sheet = res.items_per_sheet()
    assert per_sheet == {"a": 4, "b": 11}
    assert res.total_sheets == 3

    for line in production_summary(products, res):
        assert line.produced >= line.requested


def test_empty_product_list() -> None:
    res = optimize_layout([], 700, 500)
    assert res.sheets == ()
    assert res.total_sheets == 0
    assert res.utilisation_rate == 0


def main() -> None:
    print("Running smoke tests...")
    test_single_product_grid()
    test_product_larger_than_sheet()
    test_ratio_one_to_three()
    test_empty_product_list()
    print("OK")


if __name__ == "__main__":
    main()

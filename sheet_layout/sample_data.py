# sheet_layout/sample_data.py
# Utilities to generate sample / random product lists for quick benchmarking and tuning.
# Handy for stress-testing layout invariants without needing real CSVs.

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from .types import Product


@dataclass(frozen=True)
class RandomProductsConfig:
    seed: int = 123
    n_unique: int = 4
    qty_range: Tuple[int, int] = (1, 40)

    # size ranges (mm)
    w_range: Tuple[int, int] = (20, 220)
    h_range: Tuple[int, int] = (20, 160)

    # probability a product is a long strip (labels, tickets)
    p_strip: float = 0.2
    strip_w_range: Tuple[int, int] = (250, 500)
    strip_h_range: Tuple[int, int] = (15, 40)


def generate_random_products(cfg: RandomProductsConfig) -> List[Product]:
    """
    Generate a list of Products with quantities and sizes.
    Same config -> same list (seeded).
    """
    rnd = random.Random(cfg.seed)
    products: List[Product] = []

    for i in range(cfg.n_unique):
        if rnd.random() < cfg.p_strip:
            w = rnd.randint(*cfg.strip_w_range)
            h = rnd.randint(*cfg.strip_h_range)
        else:
            w = rnd.randint(*cfg.w_range)
            h = rnd.randint(*cfg.h_range)

        products.append(
            Product(
                id=f"p{i + 1}",
                width=w,
                height=h,
                quantity=rnd.randint(*cfg.qty_range),
                name=f"P{i + 1:02d}",
                color=f"hsl({rnd.randrange(360)}, 70%, 80%)",
            )
        )

    return products

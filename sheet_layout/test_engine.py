import math

import pytest

from sheet_layout.assembler import assemble_layout, replicate_sheet, sheets_needed
from sheet_layout.capacity import CapacityResult, find_capacity, probe_upper_bound
from sheet_layout.config import OptimizerParams
from sheet_layout.metrics import compute_sheet_metrics, production_summary, utilisation_rate
from sheet_layout.optimizer import optimize_layout
from sheet_layout.packer import order_by_area, pack_trial_sheet
from sheet_layout.ratio import plan_targets, round_half_up
from sheet_layout.sample_data import RandomProductsConfig, generate_random_products
from sheet_layout.types import PlacedItem, Product, Sheet, check_no_overlap
from sheet_layout.utils import result_to_dict
from sheet_layout.validate import raise_on_errors, validate_products, validate_result

SQUARES = [
    Product("a", 100, 100, 10, "A"),
    Product("b", 100, 100, 30, "B"),
]


# ----------------------------
# Ratio planner
# ----------------------------

def test_plan_targets_proportional():
    assert plan_targets([10, 30], 17) == [4, 13]
    assert plan_targets([10, 30], 40) == [10, 30]
    assert plan_targets([5], 77) == [77]


def test_plan_targets_rounds_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    # targets may sum past the trial total
    assert plan_targets([1, 1], 1) == [1, 1]
    assert plan_targets([10, 30], 18) == [5, 14]


def test_plan_targets_degenerate():
    assert plan_targets([], 5) == []
    assert plan_targets([0, 0], 5) == [0, 0]


# ----------------------------
# Sheet packer
# ----------------------------

def test_order_by_area_is_stable():
    products = [
        Product("s", 10, 10, 1, "S"),
        Product("l1", 50, 50, 1, "L1"),
        Product("m", 20, 20, 1, "M"),
        Product("l2", 50, 50, 1, "L2"),
    ]
    assert order_by_area(products, descending=True) == [1, 3, 2, 0]
    assert order_by_area(products, descending=False) == [0, 2, 1, 3]


def test_trial_within_tolerance_succeeds():
    # 15 of 16 targets is above 90%
    trial = pack_trial_sheet(SQUARES, 16, 400, 400)
    assert trial.success
    assert trial.actual_total == 16
    assert trial.counts == (4, 11)
    assert trial.total_fit == 15
    assert trial.sheet.id == "template"


def test_trial_beyond_tolerance_fails():
    # 15 of 17 targets is below 90%
    trial = pack_trial_sheet(SQUARES, 17, 400, 400)
    assert trial.actual_total == 17
    assert trial.total_fit == 15
    assert trial.counts == (4, 11)
    assert not trial.success

    trial = pack_trial_sheet(SQUARES, 18, 400, 400)
    assert trial.actual_total == 19
    assert trial.total_fit == 15
    assert trial.counts == (5, 10)
    assert not trial.success


def test_greedy_fill_uses_leftover_space():
    # one item requested, but the fill pass packs the sheet
    trial = pack_trial_sheet([Product("a", 100, 50, 10, "A")], 1, 700, 500)
    assert trial.actual_total == 1
    assert trial.total_fit == 69
    assert trial.success


def test_trials_are_independent():
    first = pack_trial_sheet(SQUARES, 17, 400, 400)
    pack_trial_sheet(SQUARES, 4, 400, 400)
    again = pack_trial_sheet(SQUARES, 17, 400, 400)
    assert [(it.x, it.y, it.placement_id) for it in first.sheet.items] == [
        (it.x, it.y, it.placement_id) for it in again.sheet.items
    ]


# ----------------------------
# Capacity probe
# ----------------------------

def test_capacity_binary_search():
    cap = find_capacity(SQUARES, 400, 400)
    assert cap.total_fit == 15
    assert cap.counts == (4, 11)
    # 500, 250, 125, 62, 31, 15, 23, 19, 17, 16
    assert cap.trials == 10


def test_capacity_nothing_fits():
    cap = find_capacity([Product("big", 800, 800, 5, "Big")], 700, 500)
    assert cap.total_fit == 0
    assert cap.sheet.items == []
    assert cap.counts == (0,)


def test_area_bound_shrinks_probe():
    params = OptimizerParams(area_bound=True)
    assert probe_upper_bound(SQUARES, 400, 400, params) == 16
    assert probe_upper_bound(SQUARES, 400, 400, OptimizerParams()) == 1000

    cap = find_capacity(SQUARES, 400, 400, params)
    assert cap.total_fit == 15
    assert cap.trials == 5


def test_probe_cap_is_configurable():
    params = OptimizerParams(max_probe_total=8)
    cap = find_capacity(SQUARES, 400, 400, params)
    # best trial total is 8 (2 + 6 targets), the fill pass still packs the sheet
    assert cap.total_fit == 15
    assert cap.trials == 4


def test_params_validation():
    with pytest.raises(ValueError):
        OptimizerParams(max_probe_total=0)
    with pytest.raises(ValueError):
        OptimizerParams(tolerance=1.5)


# ----------------------------
# Assembler
# ----------------------------

def test_replicated_ids_are_unique():
    template = Sheet(
        "template",
        200,
        100,
        [
            PlacedItem("a-1", "a", 1, 0, 0, 100, 100, "A"),
            PlacedItem("b-1", "b", 1, 100, 0, 100, 100, "B"),
        ],
    )
    s0 = replicate_sheet(template, 0)
    s1 = replicate_sheet(template, 1)
    assert s0.id == "sheet-1" and s1.id == "sheet-2"
    assert [it.placement_id for it in s0.items] == ["a-0-1", "b-0-1"]
    assert [it.placement_id for it in s1.items] == ["a-1-1", "b-1-1"]
    assert [(it.x, it.y) for it in s1.items] == [(0, 0), (100, 0)]
    # template untouched
    assert [it.placement_id for it in template.items] == ["a-1", "b-1"]


def test_assemble_covers_demand():
    products = [Product("a", 100, 100, 7, "A")]
    template = Sheet("template", 200, 200, [
        PlacedItem("a-1", "a", 1, 0, 0, 100, 100, "A"),
        PlacedItem("a-2", "a", 2, 100, 0, 100, 100, "A"),
    ])
    res = assemble_layout(products, CapacityResult(template, (2,), 2, 1), 200, 200)
    assert sheets_needed(products, 2) == 4
    assert res.total_sheets == 4
    assert len(res.sheets) == 4
    assert math.isclose(res.utilisation_rate, 50.0)
    assert res.unused_products == ()


def test_assemble_unusable_sheet():
    products = [Product("a", 100, 100, 7, "A")]
    empty = Sheet("template", 50, 50)
    res = assemble_layout(products, CapacityResult(empty, (0,), 0, 10), 50, 50)
    assert res.total_sheets == 1
    assert res.sheets[0].id == "sheet-1"
    assert res.sheets[0].items == []
    assert res.unused_products == tuple(products)
    assert res.utilisation_rate == 0.0


# ----------------------------
# Metrics
# ----------------------------

def test_utilisation_rate_bounds():
    assert utilisation_rate(50, 100) == 50.0
    assert utilisation_rate(0, 100) == 0.0
    assert utilisation_rate(10, 0) == 0.0
    assert utilisation_rate(150, 100) == 100.0


def test_sheet_metrics():
    sheet = Sheet("s", 10, 10, [PlacedItem("a-1", "a", 1, 0, 0, 5, 4, "A")])
    m = compute_sheet_metrics(sheet)
    assert m.item_count == 1
    assert m.item_area == 20
    assert m.waste_area == 80
    assert m.utilisation_rate == 20.0


def test_production_summary_surplus():
    res = optimize_layout(SQUARES, 400, 400)
    lines = production_summary(SQUARES, res)
    assert [(ln.name, ln.requested, ln.per_sheet, ln.produced, ln.surplus) for ln in lines] == [
        ("A", 10, 4, 12, 2),
        ("B", 30, 11, 33, 3),
    ]
    assert all(ln.shortfall == 0 for ln in lines)


# ----------------------------
# Whole-engine properties
# ----------------------------

def test_deterministic():
    products = generate_random_products(RandomProductsConfig(seed=7, n_unique=3, w_range=(30, 70), h_range=(30, 70), p_strip=0.0))
    a = optimize_layout(products, 200, 150)
    b = optimize_layout(products, 200, 150)
    assert result_to_dict(a) == result_to_dict(b)


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_random_layouts_hold_invariants(seed):
    cfg = RandomProductsConfig(seed=seed, n_unique=3, w_range=(25, 80), h_range=(20, 60), p_strip=0.0)
    products = generate_random_products(cfg)
    res = optimize_layout(products, 200, 150)

    raise_on_errors(validate_result(res, products))
    check_no_overlap(res.sheets)
    assert 0.0 <= res.utilisation_rate <= 100.0

    fit = len(res.sheets[0].items)
    if fit:
        assert res.total_sheets == math.ceil(sum(p.quantity for p in products) / fit)
        assert res.unused_products == ()
        # every sheet repeats the template arrangement
        shape = [(it.x, it.y, it.width, it.height, it.name) for it in res.sheets[0].items]
        for sh in res.sheets[1:]:
            assert [(it.x, it.y, it.width, it.height, it.name) for it in sh.items] == shape
    else:
        assert res.total_sheets == 1
        assert res.unused_products == tuple(products)


def test_mixed_sizes_keep_both_products():
    products = [
        Product("big", 100, 100, 10, "Big"),
        Product("small", 50, 50, 30, "Small"),
    ]
    res = optimize_layout(products, 400, 400)
    raise_on_errors(validate_result(res, products))

    per_sheet = res.items_per_sheet()
    assert per_sheet["big"] >= 1
    assert per_sheet["small"] > per_sheet["big"]
    lines = production_summary(products, res)
    assert sum(ln.produced for ln in lines) >= sum(ln.requested for ln in lines)


def test_validate_products_rejects_bad_input():
    with pytest.raises(ValueError):
        validate_products([Product("a", 0, 10, 1, "A")])
    with pytest.raises(ValueError):
        validate_products([Product("a", 10, 10, 0, "A")])
    with pytest.raises(ValueError):
        validate_products([Product("a", 10, 10, 1, "  ")])
    with pytest.raises(ValueError):
        validate_products([Product("a", 10, 10, 1, "A"), Product("a", 5, 5, 1, "B")])
    validate_products([Product("a", 10, 10, 1, "A")])

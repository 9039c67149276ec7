import pytest

from restaurantiq.schemas import CostCategory, Ingredient, MonthlyData
from restaurantiq.services.cost_analysis import analyse_costs, classify_costs, gauge_fill
from restaurantiq.services.reference_data import default_cost_categories


def test_analyse_costs_flags_costs_over_target(month: MonthlyData) -> None:
    analysis = analyse_costs([month])
    costs = {cost.key: cost for cost in analysis.costs}

    assert analysis.period == "Jan 2026"
    assert len(costs) == 8
    assert costs["food_cost"].percent_of_revenue == pytest.approx(35.0)
    assert costs["food_cost"].target == 32
    assert costs["food_cost"].over_target is True
    assert costs["rent_cost"].over_target is False
    assert costs["technology_cost"].over_target is False
    assert costs["waste_cost"].gauge_percent == pytest.approx(4 / 4.5 * 100)


def test_gauge_fill_is_capped() -> None:
    assert gauge_fill(48, 32) == pytest.approx(100.0)
    assert gauge_fill(90, 32) == pytest.approx(100.0)
    assert gauge_fill(16, 32) == pytest.approx(100 / 3)


def test_analyse_costs_trends_follow_month_order(make_month) -> None:
    february = make_month(month="February", food_cost=30000)
    january = make_month(month="January")

    analysis = analyse_costs([february, january])

    assert [point.label for point in analysis.percent_trend] == ["Jan 2026", "Feb 2026"]
    assert analysis.percent_trend[1].food == pytest.approx(30.0)
    assert analysis.margin_trend[0].margin == pytest.approx(4.0)
    assert analysis.margin_trend[1].margin == pytest.approx(9.0)


def test_analyse_costs_without_data() -> None:
    analysis = analyse_costs([])

    assert analysis.period is None
    assert analysis.costs == []


def test_classify_costs_with_default_categories(month: MonthlyData) -> None:
    ingredients = [
        Ingredient(id=1, restaurant_id=1, name="Flour", current_price=1.2),
        Ingredient(id=2, restaurant_id=1, name="Gloves", current_price=4.0, classification="indirect"),
    ]

    result = classify_costs([month], default_cost_categories(), ingredients)
    groups = {group.classification: group for group in result.groups}

    assert groups["direct"].total == pytest.approx(67000)
    assert groups["indirect"].total == pytest.approx(16000)
    assert groups["overhead"].total == pytest.approx(13000)
    assert result.total_cost == pytest.approx(96000)
    assert result.profit == pytest.approx(4000)
    assert groups["direct"].share_of_cost == pytest.approx(67000 / 96000 * 100)
    # Delivery, training, maintenance and licences have no monthly figure.
    assert {item.key for item in groups["direct"].categories} == {"food_cost", "labour_cost"}
    assert result.ingredient_counts == {"direct": 1, "indirect": 1, "overhead": 0}


def test_classify_costs_skips_empty_amounts_and_pie_buckets(make_month) -> None:
    month = make_month(rent_cost=0, marketing_cost=0, technology_cost=0)

    result = classify_costs([month], default_cost_categories())

    assert [group.classification for group in result.pie] == ["direct", "indirect"]
    assert result.trend[0].overhead == 0
    assert result.trend[0].total == pytest.approx(83000)


def test_classify_costs_trend_uses_reclassified_categories(month: MonthlyData) -> None:
    categories = [
        CostCategory(id=1, name="Food", key="food_cost", default_percentage=30, process_stage="procurement"),
        CostCategory(
            id=2,
            name="Energy",
            key="energy_cost",
            default_percentage=7,
            process_stage="cooking",
            classification="overhead",
        ),
    ]

    result = classify_costs([month], categories)

    assert result.trend[0].direct == pytest.approx(35000)
    assert result.trend[0].overhead == pytest.approx(9000)
    assert result.total_cost == pytest.approx(44000)

import json

import pytest
from pydantic import ValidationError

from product_ranker.domain.models.ranking_config import RankingConfig, SeasonalRule, load_ranking_config
from product_ranker.domain.models.product import Product
from product_ranker.domain.services.engine import RecommendationEngine, ScoringContext


def test_default_category_weights_sum_to_one():
    cfg = RankingConfig()
    assert sum(cfg.category_weights.values()) == pytest.approx(1.0)
    assert cfg.category_weights == {
        "sales": 0.40, "engagement": 0.25, "inventory": 0.15,
        "seller": 0.10, "content": 0.05, "admin": 0.05,
    }


def test_weights_not_summing_to_one_rejected():
    weights = dict(RankingConfig().category_weights, sales=0.5)
    with pytest.raises(ValidationError):
        RankingConfig(category_weights=weights)


def test_missing_blend_key_rejected():
    with pytest.raises(ValidationError):
        RankingConfig(sales_blend={"velocity": 1.0})


def test_seasonal_rule_months_validated():
    with pytest.raises(ValidationError):
        SeasonalRule(months=[13], in_season=1.5)


def test_unknown_context_type_falls_back_to_general():
    cfg = RankingConfig()
    assert cfg.market("nope") == cfg.market("general")


def test_load_from_json_overrides_seasonal_table(tmp_path, now):
    path = tmp_path / "ranking.json"
    path.write_text(json.dumps({
        "seasonal": {"kahve": {"months": [1], "in_season": 2.0}},
    }))
    cfg = load_ranking_config(str(path))

    assert set(cfg.seasonal) == {"kahve"}
    # other tables keep their defaults
    assert cfg.category_weights["sales"] == 0.40

    engine = RecommendationEngine(cfg)
    result = engine.calculate_product_score(Product(product_id="p", category_slug="kahve"), ScoringContext(now=now))
    assert result.multipliers.seasonal_boost == 2.0


def test_load_without_path_gives_defaults():
    assert load_ranking_config(None) == RankingConfig()

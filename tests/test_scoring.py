"""
Тесты для нормализации распределений и выбора метки.
"""

import pytest

from smart_text_analyzer.components.scoring import clamp, normalize_distribution, pick_label


class TestPickLabel:
    """Тесты выбора победившей категории"""

    def test_max_wins(self):
        assert pick_label({'a': 1, 'b': 3, 'c': 2}, ('a', 'b', 'c')) == 'b'

    def test_tie_broken_by_priority(self):
        assert pick_label({'joy': 1, 'love': 1}, ('love', 'joy')) == 'love'
        assert pick_label({'joy': 1, 'love': 1}, ('joy', 'love')) == 'joy'

    def test_ignores_categories_outside_scores(self):
        assert pick_label({'neutral': 0}, ('positive', 'negative', 'neutral')) == 'neutral'

    def test_no_candidates(self):
        with pytest.raises(ValueError):
            pick_label({}, ('a',))


class TestNormalizeDistribution:
    """Тесты нормализации к 100"""

    def test_sums_to_hundred(self):
        scores = normalize_distribution({'a': 1, 'b': 1, 'c': 1}, ('a', 'b', 'c'))
        assert sum(scores.values()) == pytest.approx(100, abs=0.01)
        # Остаток округления уходит первой по приоритету категории
        assert scores == {'a': 33.34, 'b': 33.33, 'c': 33.33}

    def test_proportions(self):
        assert normalize_distribution({'x': 3, 'y': 1}) == {'x': 75.0, 'y': 25.0}

    def test_zero_total(self):
        assert normalize_distribution({'x': 0, 'y': 0}) == {'x': 0.0, 'y': 0.0}

    @pytest.mark.parametrize("raw", [
        {'a': 0.5, 'b': 0.3, 'c': 50.0},
        {'a': 7, 'b': 11, 'c': 13, 'd': 17},
        {'a': 1e-9, 'b': 2},
    ])
    def test_sum_property(self, raw):
        assert sum(normalize_distribution(raw).values()) == pytest.approx(100, abs=0.01)


def test_clamp():
    assert clamp(150, -100, 100) == 100
    assert clamp(-150, -100, 100) == -100
    assert clamp(5, -100, 100) == 5

"""
Тесты для KeywordExtractor: TF-IDF, фильтрация, откат по частотности.
"""

import math

import pytest

from smart_text_analyzer.components.keyword_extractor import KeywordExtractor
from smart_text_analyzer.exceptions import NoLexicalSignal


@pytest.fixture
def extractor(lexicons, preprocessor):
    return KeywordExtractor(lexicons, preprocessor)


class TestTfidfStage:
    """Тесты основной стадии"""

    def test_example_sentence(self, extractor, preprocessor, sample_texts):
        result = extractor.extract_tfidf(preprocessor.process(sample_texts["positive"]))
        assert result.words == ['Amazing', 'Love']
        assert result.word_count == 6
        assert result.total_keywords == 2
        expected = round(1 / 6 * math.log(6 / 2) * 100, 2)
        assert [kw.score for kw in result.keywords] == [expected, expected]

    def test_filters_stopwords_and_short_tokens(self, extractor, preprocessor, lexicons, sample_texts):
        result = extractor.extract_tfidf(preprocessor.process(sample_texts["long"]))
        for kw in result.keywords:
            assert len(kw.word) > 2
            assert not lexicons.is_stopword(kw.word)

    def test_cap_at_max_keywords(self, extractor, preprocessor):
        text = " ".join(f"alpha{'b' * i}" for i in range(1, 21))
        result = extractor.extract_tfidf(preprocessor.process(text))
        assert len(result.keywords) == 15
        assert result.total_keywords == 20

    def test_ranking_prefers_frequent_terms(self, extractor, preprocessor):
        text = "python code python tests python code docs review deploy release build"
        result = extractor.extract_tfidf(preprocessor.process(text))
        assert result.words[0] == 'Python'
        assert result.keywords[0].frequency == 3
        assert result.words[1] == 'Code'

    def test_only_stopwords_declines(self, extractor, preprocessor, sample_texts):
        with pytest.raises(NoLexicalSignal):
            extractor.extract_tfidf(preprocessor.process(sample_texts["stopwords"]))


class TestFrequencyFallback:
    """Тесты отката по сырой частотности"""

    def test_stopwords_example(self, extractor, preprocessor, sample_texts):
        result = extractor.extract_by_frequency(preprocessor.process(sample_texts["stopwords"]))
        assert result.words == ['And', 'The']
        assert [kw.frequency for kw in result.keywords] == [3, 3]
        assert result.word_count == 6

    def test_short_tokens_never_become_keywords(self, extractor, preprocessor):
        result = extractor.extract_by_frequency(preprocessor.process("a an i a an"))
        assert result.keywords == []
        assert result.total_keywords == 0
        assert result.word_count == 5

    def test_short_tokens_through_analyzer(self, offline_analyzer):
        result = offline_analyzer.extract_keywords("a an i a an")
        assert result.method == 'heuristic'
        assert all(len(kw.word) > 2 for kw in result.keywords)

    def test_prefers_longer_tokens(self, extractor, preprocessor):
        result = extractor.extract_by_frequency(preprocessor.process("the cat and the dogs were there"))
        assert result.words == ['Dogs', 'There', 'Were']

    def test_limited_to_five(self, extractor, preprocessor):
        text = "about above after again against below between during"
        assert len(extractor.extract_by_frequency(preprocessor.process(text)).keywords) == 5


class TestParseRemote:
    """Тесты разбора token-classification ответа"""

    def test_skips_subwords_and_dedupes(self, extractor, preprocessor):
        payload = [
            {'word': 'library', 'score': 0.91},
            {'word': '##ary', 'score': 0.5},
            {'word': 'Library', 'score': 0.80},
            {'word': 'city', 'score': 0.75},
        ]
        result = extractor.parse_remote(payload, preprocessor.process("The library is in the city library"))
        assert result.words == ['Library', 'City']
        assert result.keywords[0].frequency == 2
        assert result.keywords[0].score == 91.0

    def test_error_payload_rejected(self, extractor, preprocessor):
        with pytest.raises(ValueError):
            extractor.parse_remote({'error': 'Model is loading'}, preprocessor.process("x"))

    def test_empty_payload_rejected(self, extractor, preprocessor):
        with pytest.raises(ValueError):
            extractor.parse_remote([], preprocessor.process("x"))

"""
Тесты каскада remote → словари → эвристики.
"""

import pytest

from smart_text_analyzer.components.fallback_pipeline import CascadeStage, CascadeState, FallbackPipeline
from smart_text_analyzer.components.sentiment_analyzer import SentimentAnalyzer
from smart_text_analyzer.exceptions import NoLexicalSignal
from smart_text_analyzer.interfaces.analysis import AnalysisMethod, TaskScorerInterface


@pytest.fixture
def sentiment_pipeline(lexicons, preprocessor, fake_remote):
    return FallbackPipeline(SentimentAnalyzer(lexicons, preprocessor), preprocessor, fake_remote, remote_timeout=3)


class TestStateTransitions:
    """Тесты переходов между стадиями"""

    def test_remote_success(self, sentiment_pipeline, fake_remote, sample_texts):
        fake_remote.respond('sentiment', [[{'label': 'NEGATIVE', 'score': 0.8}, {'label': 'POSITIVE', 'score': 0.2}]])
        result = sentiment_pipeline.run(sample_texts["positive"])
        assert result.method == 'remote'
        assert result.label == 'NEGATIVE'
        assert result.model == 'Fake Model'
        assert result.metadata['stages_tried'] == ['REMOTE_ATTEMPT', 'DONE']

    def test_remote_failure_falls_to_patterns(self, sentiment_pipeline, fake_remote, sample_texts):
        fake_remote.fail('sentiment', 'timeout')
        result = sentiment_pipeline.run(sample_texts["positive"])
        assert result.method == 'pattern_matching'
        assert result.metadata['stages_tried'] == ['REMOTE_ATTEMPT', 'LOCAL_PATTERN', 'DONE']
        # Одна попытка, без повторов
        assert len(fake_remote.calls) == 1

    def test_malformed_remote_payload_falls_back(self, sentiment_pipeline, fake_remote, sample_texts):
        fake_remote.respond('sentiment', [{'unexpected': True}])
        assert sentiment_pipeline.run(sample_texts["positive"]).method == 'pattern_matching'

    def test_unconfigured_remote_is_skipped(self, lexicons, preprocessor, sample_texts):
        from .utils.fake_remote import FakeRemoteClient

        client = FakeRemoteClient(configured=False)
        pipeline = FallbackPipeline(SentimentAnalyzer(lexicons, preprocessor), preprocessor, client)
        result = pipeline.run(sample_texts["positive"])
        assert result.method == 'pattern_matching'
        assert client.calls == []

    def test_no_lexical_signal_goes_to_heuristic(self, sentiment_pipeline, sample_texts):
        result = sentiment_pipeline.run(sample_texts["no_signal"])
        assert result.method == 'heuristic'
        assert result.metadata['stages_tried'] == ['REMOTE_ATTEMPT', 'LOCAL_PATTERN', 'HEURISTIC', 'DONE']

    @pytest.mark.parametrize("text", ["", "   ", "\n\t", None])
    def test_empty_input(self, sentiment_pipeline, fake_remote, text):
        result = sentiment_pipeline.run(text)
        assert result.method == 'empty_input'
        assert result.metadata['stages_tried'] == ['DONE']
        assert fake_remote.calls == []


class TestTimeoutAndMetadata:
    """Тесты таймаута и метаданных"""

    def test_default_timeout_passed_to_client(self, sentiment_pipeline, fake_remote):
        sentiment_pipeline.run("good")
        assert fake_remote.calls[0][2] == 3

    def test_per_call_timeout(self, sentiment_pipeline, fake_remote):
        sentiment_pipeline.run("good", timeout=0.5)
        assert fake_remote.calls[0][2] == 0.5

    def test_remote_receives_original_text(self, sentiment_pipeline, fake_remote):
        sentiment_pipeline.run("  GOOD   Stuff, isn't it?\n")
        assert fake_remote.calls[0][1] == "GOOD Stuff, isn't it?"

    @pytest.mark.parametrize("task", ["sentiment", "keywords", "emotion", "summarize"])
    def test_every_task_sends_original_text(self, lexicons, test_config, fake_remote, task):
        from smart_text_analyzer.text_analyzer import TextAnalyzer

        analyzer = TextAnalyzer(lexicons=lexicons, remote_client=fake_remote, cfg=test_config)
        analyzer.analyze("I'm  SO happy!  Really?", task)
        assert fake_remote.calls == [(task, "I'm SO happy! Really?", test_config.get_remote_timeout())]

    def test_metadata_fields(self, sentiment_pipeline):
        metadata = sentiment_pipeline.run("This is good").metadata
        assert metadata['analysis_type'] == 'sentiment'
        assert metadata['word_count'] == 3
        assert metadata['text_length'] == len("this is good")
        assert metadata['processing_time_ms'] >= 0
        assert 'timestamp' in metadata


class _DecliningScorer(TaskScorerInterface):
    task = 'broken'

    def local_stages(self):
        def decline(text):
            raise NoLexicalSignal("nothing")
        return [CascadeStage('decline', CascadeState.LOCAL_PATTERN, AnalysisMethod.PATTERN_MATCHING, decline)]

    def empty_result(self, text):
        return None

    def parse_remote(self, payload, text):
        return None


def test_every_stage_declining_is_a_programming_error(preprocessor):
    pipeline = FallbackPipeline(_DecliningScorer(), preprocessor)
    with pytest.raises(RuntimeError):
        pipeline.run("some words")


def test_scorer_without_local_stages_rejected(preprocessor):
    class Empty(_DecliningScorer):
        def local_stages(self):
            return []

    with pytest.raises(ValueError):
        FallbackPipeline(Empty(), preprocessor)

import pandas as pd
import pytest

from smart_text_analyzer.components.exporter import ResultExporter
from smart_text_analyzer.source_reader import read_text, validate_text
from smart_text_analyzer.text_analyzer import TextAnalyzer


@pytest.mark.integration
def test_full_pipeline_html_to_excel(sample_texts, offline_analyzer, temp_directory):
    """Проверяет пайплайн: HTML → текст → сводный анализ → Excel."""
    source = temp_directory / "page.html"
    source.write_text(sample_texts["html"], encoding="utf-8")

    # 1) Очистка HTML → текст
    text = validate_text(read_text(file=source))
    assert "<" not in text and ">" not in text

    # 2) Сводный анализ
    result = offline_analyzer.analyze_all(text)
    assert result.sentiment.label == 'POSITIVE'
    assert result.sentiment.method == 'pattern_matching'

    # 3) Экспорт в Excel
    output_file = ResultExporter(str(temp_directory)).export_to_excel(result, temp_directory / "analysis.xlsx")
    assert output_file.exists()
    assert output_file.stat().st_size > 0
    assert 'Keywords' in pd.ExcelFile(output_file).sheet_names


@pytest.mark.integration
def test_remote_outage_mid_session(lexicons, test_config, fake_remote, sample_texts):
    """Сбой удалённого сервиса между запросами переключает на локальные стадии без ошибок."""
    analyzer = TextAnalyzer(lexicons=lexicons, remote_client=fake_remote, cfg=test_config)

    fake_remote.respond('sentiment', [[{'label': 'POSITIVE', 'score': 0.7}, {'label': 'NEGATIVE', 'score': 0.3}]])
    first = analyzer.analyze_sentiment(sample_texts["negative"])
    assert first.method == 'remote'

    fake_remote.fail('sentiment', 'HTTP 503')
    second = analyzer.analyze_sentiment(sample_texts["negative"])
    assert second.method == 'pattern_matching'
    assert second.label == 'NEGATIVE'
    assert second.metadata['stages_tried'] == ['REMOTE_ATTEMPT', 'LOCAL_PATTERN', 'DONE']


@pytest.mark.integration
def test_shared_analyzer_across_threads(offline_analyzer, sample_texts):
    """Один анализатор обслуживает параллельные запросы с одинаковым результатом."""
    from concurrent.futures import ThreadPoolExecutor

    texts = list(sample_texts.values()) * 4
    expected = [offline_analyzer.analyze_sentiment(t).label for t in texts]
    with ThreadPoolExecutor(max_workers=4) as pool:
        labels = list(pool.map(lambda t: offline_analyzer.analyze_sentiment(t).label, texts))
    assert labels == expected

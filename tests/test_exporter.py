"""
Тесты для ResultExporter: JSON, CSV, Excel и экспорт во все форматы.
"""

import csv
import json

import pandas as pd
import pytest

from smart_text_analyzer.components.exporter import ResultExporter


@pytest.fixture
def exporter(temp_directory):
    return ResultExporter(str(temp_directory / "results"))


@pytest.fixture
def combined(offline_analyzer, sample_texts):
    return offline_analyzer.analyze_all(sample_texts["review"])


class TestJsonExport:
    """Тесты экспорта в JSON"""

    def test_roundtrip_fields(self, exporter, combined, temp_directory):
        path = exporter.export_to_json(combined, temp_directory / "out")
        assert path.suffix == '.json'
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['result_type'] == 'CombinedResult'
        assert data['result']['sentiment']['label'] == combined.sentiment.label
        assert data['result']['overall']['rating'] == combined.overall['rating']

    def test_none_result(self, exporter, temp_directory):
        assert exporter.export_to_json(None, temp_directory / "none.json") is None


class TestCsvExport:
    """Тесты экспорта в CSV"""

    def test_keywords_table(self, exporter, offline_analyzer, sample_texts, temp_directory):
        result = offline_analyzer.extract_keywords(sample_texts["positive"])
        path = exporter.export_to_csv(result, temp_directory / "keywords.csv")
        with open(path, newline='', encoding='utf-8') as f:
            rows = list(csv.reader(f))
        assert rows[0] == ['Keyword', 'Frequency', 'Score', 'Method']
        assert [row[0] for row in rows[1:]] == ['Amazing', 'Love']
        assert rows[1][3] == 'pattern_matching'

    def test_parameter_table_for_sentiment(self, exporter, offline_analyzer, sample_texts, temp_directory):
        result = offline_analyzer.analyze_sentiment(sample_texts["positive"])
        path = exporter.export_to_csv(result, temp_directory / "sentiment.csv")
        with open(path, newline='', encoding='utf-8') as f:
            rows = dict(csv.reader(f))
        assert rows['label'] == 'POSITIVE'
        assert rows['scores.positive'] == '100.0'
        assert rows['metadata.analysis_type'] == 'sentiment'


class TestExcelExport:
    """Тесты экспорта в Excel"""

    def test_sheets_for_combined_result(self, exporter, combined, temp_directory):
        path = exporter.export_to_excel(combined, temp_directory / "report")
        assert path.suffix == '.xlsx'
        sheets = pd.read_excel(path, sheet_name=None)
        assert list(sheets) == ['Overview', 'Keywords', 'Emotions', 'Statistics']
        assert len(sheets['Keywords']) == len(combined.keywords.keywords)
        overview = dict(zip(sheets['Overview']['Parameter'], sheets['Overview']['Value']))
        assert overview['Sentiment'] == combined.sentiment.label

    def test_summary_result_has_no_keyword_sheet(self, exporter, offline_analyzer, sample_texts, temp_directory):
        result = offline_analyzer.summarize_text(sample_texts["long"])
        path = exporter.export_to_excel(result, temp_directory / "summary.xlsx")
        assert pd.ExcelFile(path).sheet_names == ['Overview', 'Statistics']


class TestExportDispatch:
    """Тесты выбора формата по расширению"""

    def test_by_suffix(self, exporter, combined, temp_directory):
        assert exporter.export(combined, temp_directory / "a.json").suffix == '.json'
        assert exporter.export(combined, temp_directory / "a.csv").suffix == '.csv'
        assert exporter.export(combined, temp_directory / "a.xlsx").suffix == '.xlsx'

    def test_unsupported_suffix(self, exporter, combined, temp_directory):
        assert exporter.export(combined, temp_directory / "a.pdf") is None

    def test_export_all_formats(self, exporter, combined):
        files = exporter.export_all_formats(combined, "text_analysis")
        assert set(files) == {'excel', 'csv', 'json'}
        for path in files.values():
            assert path.exists()
            assert path.name.startswith("text_analysis_")

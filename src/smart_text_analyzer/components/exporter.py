"""
Компонент для экспорта результатов анализа.

Отвечает за экспорт результатов в различные форматы:
Excel (несколько листов), CSV и JSON с временными метками.
"""

import json
import csv
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import pandas as pd
from ..interfaces.analysis import (
    AnyResult,
    CombinedResult,
    EmotionResult,
    KeywordResult,
    ResultExporterInterface,
    SentimentResult,
    SummaryResult,
)
import logging

logger = logging.getLogger(__name__)


def _flatten(data: Dict[str, Any], prefix: str = '') -> Dict[str, Any]:
    """Разворачивает вложенный словарь в пары 'a.b' → значение."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{name}."))
        elif isinstance(value, list) and value and isinstance(value[0], dict):
            flat[name] = json.dumps(value, ensure_ascii=False)
        elif isinstance(value, list):
            flat[name] = ', '.join(str(v) for v in value)
        else:
            flat[name] = value
    return flat


class ResultExporter(ResultExporterInterface):
    """Экспортёр результатов анализа."""

    def __init__(self, output_dir: str = "data/results"):
        """
        Инициализирует экспортёр.

        Args:
            output_dir: Папка для сохранения результатов
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _keywords_of(result: AnyResult) -> Optional[KeywordResult]:
        if isinstance(result, KeywordResult):
            return result
        if isinstance(result, CombinedResult):
            return result.keywords
        return None

    @staticmethod
    def _emotion_of(result: AnyResult) -> Optional[EmotionResult]:
        if isinstance(result, EmotionResult):
            return result
        if isinstance(result, CombinedResult):
            return result.emotion
        return None

    def keywords_frame(self, result: AnyResult) -> pd.DataFrame:
        """Таблица ключевых слов (пустая, если в результате их нет)."""
        keywords = self._keywords_of(result)
        rows = [
            {'Keyword': kw.word, 'Frequency': kw.frequency, 'Score': kw.score}
            for kw in (keywords.keywords if keywords else [])
        ]
        return pd.DataFrame(rows, columns=['Keyword', 'Frequency', 'Score'])

    def emotions_frame(self, result: AnyResult) -> pd.DataFrame:
        emotion = self._emotion_of(result)
        rows = [
            {'Emotion': name, 'Score': score}
            for name, score in (emotion.all_scores.items() if emotion else [])
        ]
        return pd.DataFrame(rows, columns=['Emotion', 'Score'])

    def overview_frame(self, result: AnyResult) -> pd.DataFrame:
        """Ключевые показатели результата: одна строка на показатель."""
        rows: List[Dict[str, Any]] = []

        def add(name: str, value: Any) -> None:
            rows.append({'Parameter': name, 'Value': value})

        sentiment = result.sentiment if isinstance(result, CombinedResult) else result
        if isinstance(sentiment, SentimentResult):
            add('Sentiment', sentiment.label)
            add('Sentiment confidence', sentiment.confidence)
            add('Sentiment score', sentiment.score)
            add('Sentiment method', sentiment.method)

        emotion = self._emotion_of(result)
        if emotion:
            add('Primary emotion', emotion.primary)
            add('Emotion score', emotion.primary_score)
            add('Emotion method', emotion.method)

        keywords = self._keywords_of(result)
        if keywords:
            add('Keywords', ', '.join(keywords.words))
            add('Keywords method', keywords.method)

        summary = result.summary if isinstance(result, CombinedResult) else result
        if isinstance(summary, SummaryResult):
            add('Summary', summary.summary)
            add('Reduction %', summary.reduction_pct)
            add('Summary method', summary.method)

        if isinstance(result, CombinedResult):
            add('Overall score', result.overall.get('score'))
            add('Rating', result.overall.get('rating'))
            add('Interpretation', result.overall.get('interpretation'))

        if not rows:
            rows = [{'Parameter': key, 'Value': value} for key, value in _flatten(result.to_dict()).items()]
        return pd.DataFrame(rows, columns=['Parameter', 'Value'])

    def statistics_frame(self, result: AnyResult) -> pd.DataFrame:
        stats: Dict[str, Any] = {}
        if isinstance(result, CombinedResult):
            stats.update(result.statistics)
            stats.update(result.complexity)
        stats.update(result.metadata or {})
        stats['export_date'] = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        rows = [{'Parameter': key, 'Value': value} for key, value in _flatten(stats).items()]
        return pd.DataFrame(rows, columns=['Parameter', 'Value'])

    def export_to_excel(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """
        Экспортирует результат в Excel формат.

        Листы: Overview, Keywords, Emotions, Statistics (пустые таблицы не пишутся).

        Args:
            result: Результат анализа
            filepath: Путь для сохранения файла

        Returns:
            Путь к файлу или None при ошибке
        """
        if result is None:
            logger.info("Нет данных для экспорта в Excel")
            return None

        try:
            filepath = Path(filepath)
            if not filepath.suffix:
                filepath = filepath.with_suffix('.xlsx')
            filepath.parent.mkdir(parents=True, exist_ok=True)

            with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
                self.overview_frame(result).to_excel(writer, sheet_name='Overview', index=False)

                keywords_df = self.keywords_frame(result)
                if not keywords_df.empty:
                    keywords_df.to_excel(writer, sheet_name='Keywords', index=False)

                emotions_df = self.emotions_frame(result)
                if not emotions_df.empty:
                    emotions_df.to_excel(writer, sheet_name='Emotions', index=False)

                self.statistics_frame(result).to_excel(writer, sheet_name='Statistics', index=False)

            logger.info(f"Результат экспортирован в Excel: {filepath}")
            return filepath

        except (OSError, ValueError) as e:
            logger.error(f"Ошибка экспорта в Excel: {e}")
            return None

    def export_to_csv(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """
        Экспортирует результат в CSV формат.

        Для ключевых слов (и сводного результата) пишется таблица ключевых
        слов, для остальных результатов - пары параметр/значение.
        """
        if result is None:
            logger.info("Нет данных для экспорта в CSV")
            return None

        try:
            filepath = Path(filepath)
            if not filepath.suffix:
                filepath = filepath.with_suffix('.csv')
            filepath.parent.mkdir(parents=True, exist_ok=True)

            keywords = self._keywords_of(result)
            with open(filepath, 'w', newline='', encoding='utf-8') as csvfile:
                writer = csv.writer(csvfile)
                if keywords is not None:
                    writer.writerow(['Keyword', 'Frequency', 'Score', 'Method'])
                    for kw in keywords.keywords:
                        writer.writerow([kw.word, kw.frequency, kw.score, keywords.method])
                else:
                    writer.writerow(['Parameter', 'Value'])
                    for key, value in _flatten(result.to_dict()).items():
                        writer.writerow([key, value])

            logger.info(f"Результат экспортирован в CSV: {filepath}")
            return filepath

        except OSError as e:
            logger.error(f"Ошибка экспорта в CSV: {e}")
            return None

    def export_to_json(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """
        Экспортирует результат в JSON формат.

        Args:
            result: Результат анализа
            filepath: Путь для сохранения файла
        """
        if result is None:
            logger.info("Нет данных для экспорта в JSON")
            return None

        try:
            filepath = Path(filepath)
            if not filepath.suffix:
                filepath = filepath.with_suffix('.json')
            filepath.parent.mkdir(parents=True, exist_ok=True)

            json_data = {
                'exported_at': datetime.now().isoformat(),
                'result_type': type(result).__name__,
                'result': result.to_dict(),
            }

            with open(filepath, 'w', encoding='utf-8') as jsonfile:
                json.dump(json_data, jsonfile, ensure_ascii=False, indent=2)

            logger.info(f"Результат экспортирован в JSON: {filepath}")
            return filepath

        except (OSError, TypeError) as e:
            logger.error(f"Ошибка экспорта в JSON: {e}")
            return None

    def export(self, result: AnyResult, filepath: Union[str, Path]) -> Optional[Path]:
        """Экспорт по расширению файла (.json, .csv, .xlsx)."""
        suffix = Path(filepath).suffix.lower()
        if suffix == '.csv':
            return self.export_to_csv(result, filepath)
        if suffix in ('.xlsx', '.xls'):
            return self.export_to_excel(result, Path(filepath).with_suffix('.xlsx'))
        if suffix in ('', '.json'):
            return self.export_to_json(result, filepath)
        logger.error(f"Неподдерживаемый формат экспорта: {suffix}")
        return None

    def export_all_formats(self, result: AnyResult, base_filename: str) -> Dict[str, Path]:
        """
        Экспортирует результат во все доступные форматы.

        Args:
            result: Результат анализа
            base_filename: Базовое имя файла без расширения

        Returns:
            Словарь с путями к успешно экспортированным файлам
        """
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        base_filename = f"{base_filename}_{timestamp}"

        exported_files: Dict[str, Path] = {}
        targets = {
            'excel': (self.export_to_excel, self.output_dir / f"{base_filename}.xlsx"),
            'csv': (self.export_to_csv, self.output_dir / f"{base_filename}.csv"),
            'json': (self.export_to_json, self.output_dir / f"{base_filename}.json"),
        }
        for fmt, (exporter, path) in targets.items():
            written = exporter(result, path)
            if written is not None:
                exported_files[fmt] = written

        logger.info(f"Результат экспортирован в {len(exported_files)} формат(а) в папку: {self.output_dir}")
        return exported_files

#!/usr/bin/env python3
"""
Интерфейс командной строки для Smart Text Analyzer

Команды:
1. sentiment / keywords / emotion / summarize - отдельные анализы
2. all - все анализы, статистика и общая оценка
3. basic - базовая статистика текста
4. diagnostics - проверка анализаторов и подключения к Hugging Face
"""

import os
import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from .exceptions import InputValidationError

EXIT_OK = 0
EXIT_INVALID_INPUT = 2

TEXT_COMMANDS = ('sentiment', 'keywords', 'emotion', 'summarize', 'all', 'basic')


def build_parser() -> argparse.ArgumentParser:
    """Создаёт парсер аргументов с подкомандами"""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--offline', action='store_true', help='Не обращаться к удалённому инференсу')
    common.add_argument('--json', action='store_true', help='Вывести результат в формате JSON')
    common.add_argument('--export', metavar='PATH', help='Сохранить результат (.json, .csv или .xlsx)')
    common.add_argument('--timeout', type=float, default=None, help='Таймаут удалённой попытки (секунды)')

    text_options = argparse.ArgumentParser(add_help=False)
    text_options.add_argument('text', nargs='?', help='Текст для анализа (иначе --file или stdin)')
    text_options.add_argument('--file', help='Прочитать текст из файла')
    text_options.add_argument('--html', action='store_true', help='Удалить HTML разметку перед анализом')

    parser = argparse.ArgumentParser(
        prog='smart-text-analyzer',
        description="Smart Text Analyzer - тональность, эмоции, ключевые слова и реферат",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  smart-text-analyzer sentiment "I love this! It is amazing!!"
  smart-text-analyzer keywords --file article.txt --offline
  smart-text-analyzer all --file page.html --export report.xlsx
  echo "Some text here" | smart-text-analyzer emotion --json
  smart-text-analyzer diagnostics
        """
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    helps = {
        'sentiment': 'Анализ тональности',
        'keywords': 'Извлечение ключевых слов',
        'emotion': 'Определение эмоций',
        'summarize': 'Экстрактивный реферат',
        'all': 'Все анализы, статистика и общая оценка',
        'basic': 'Базовая статистика текста',
    }
    for name in TEXT_COMMANDS:
        subparsers.add_parser(name, parents=[common, text_options], help=helps[name])
    diagnostics = subparsers.add_parser('diagnostics', parents=[common], help='Проверка анализаторов и подключения')
    diagnostics.add_argument('--sample', help='Свой текст для проверки')
    return parser


def _print_sentiment(result) -> None:
    print(f"💬 Тональность: {result.label} (уверенность {result.confidence}%, оценка {result.score})")
    for label, value in result.scores.items():
        print(f"   • {label}: {value}%")


def _print_keywords(result) -> None:
    print(f"🔑 Ключевые слова ({result.total_keywords} кандидатов, {result.word_count} слов):")
    for kw in result.keywords:
        print(f"   • {kw.word}: частота {kw.frequency}, вес {kw.score}")
    if not result.keywords:
        print("   (нет)")


def _print_emotion(result) -> None:
    print(f"🎭 Эмоция: {result.primary} ({result.primary_score}%)")
    for name, value in result.all_scores.items():
        print(f"   • {name}: {value}%")


def _print_summary(result) -> None:
    print(f"📝 Реферат (сокращение {result.reduction_pct}%, предложений в тексте: {result.sentence_count}):")
    print(f"   {result.summary}")


def _print_basic(result) -> None:
    print(f"📊 Слов: {result.word_count}, уникальных: {result.unique_words}, символов: {result.char_count}")
    print(f"   Предложений: {result.sentence_count}, время чтения: {result.reading_time_minutes} мин")
    if result.most_common_words:
        print("🏆 Частые слова:")
        for word, freq in result.most_common_words.items():
            print(f"   • {word}: {freq}")


def print_result(command: str, result) -> None:
    """Печатает результат в человекочитаемом виде"""
    method = getattr(result, 'method', '')
    if command == 'all':
        for part, printer in ((result.sentiment, _print_sentiment), (result.keywords, _print_keywords),
                              (result.emotion, _print_emotion), (result.summary, _print_summary)):
            printer(part)
            print(f"   ↳ метод: {part.method}")
        stats = result.statistics
        print(f"📊 Слов: {stats['word_count']}, предложений: {stats['sentence_count']}, "
              f"лексическое разнообразие: {result.complexity['lexical_diversity']}%")
        print(f"⭐ Общая оценка: {result.overall['score']} ({result.overall['rating']}) - "
              f"{result.overall['interpretation']}")
        return

    printers = {
        'sentiment': _print_sentiment,
        'keywords': _print_keywords,
        'emotion': _print_emotion,
        'summarize': _print_summary,
        'basic': _print_basic,
    }
    printers[command](result)
    if method:
        print(f"   ↳ метод: {method}")


def print_diagnostics(report: dict) -> None:
    print(f"🩺 Диагностика: {report['successful_tests']}/{report['total_tests']} "
          f"({report['success_rate']}%)")
    for name, item in report['test_results'].items():
        if name == 'huggingface_connection':
            status = "✅" if item.get('connected') else "⚠️"
            print(f"   {status} {name}: {item.get('message')}")
        else:
            print(f"   ✅ {name}: {item.get('method')}")


def main(argv: Optional[List[str]] = None) -> int:
    """Основная функция CLI"""
    # Инициализируем логирование из конфигурации в самом начале
    from .config import config

    if os.environ.get('SMART_TEXT_ANALYZER_DEBUG') == '1':
        os.environ['SMART_TEXT_ANALYZER_LOGGING__CONSOLE_LEVEL'] = 'DEBUG'
        config._apply_env_overrides()
        config._configure_logging_if_needed(force=True)

    args = build_parser().parse_args(argv)

    from .text_analyzer import TextAnalyzer

    analyzer = TextAnalyzer.from_config(config, offline=args.offline)
    try:
        return run_command(args, analyzer, config)
    finally:
        analyzer.close()


def run_command(args: argparse.Namespace, analyzer, config) -> int:
    """Выполняет разобранную команду готовым анализатором"""
    from .components.exporter import ResultExporter
    from .source_reader import read_text, validate_text

    if args.command == 'diagnostics':
        report = analyzer.run_diagnostics(args.sample)
        if args.json:
            print(json.dumps(report, ensure_ascii=False, indent=2))
        else:
            print_diagnostics(report)
        return EXIT_OK

    try:
        raw = read_text(text=args.text, file=args.file, html=args.html)
        text = validate_text(raw, config.get_min_text_length(), config.get_max_text_length())
    except (InputValidationError, OSError, UnicodeDecodeError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    analysis_type = {'all': 'advanced'}.get(args.command, args.command)
    result = analyzer.analyze(text, analysis_type, timeout=args.timeout)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_result(args.command, result)

    if args.export:
        # Имя без папки сохраняется в папку результатов из конфигурации
        target = Path(args.export)
        if target.parent == Path('.'):
            target = Path(config.get_results_folder()) / target
        exporter = ResultExporter(str(target.parent))
        written = exporter.export(result, target)
        if written:
            print(f"📁 Результат сохранён: {written}", file=sys.stderr if args.json else sys.stdout)
        else:
            print(f"❌ Не удалось сохранить результат в {args.export}", file=sys.stderr)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

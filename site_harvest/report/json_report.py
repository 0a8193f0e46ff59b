# site_harvest/report/json_report.py

"""
Генерация JSON-отчёта для проекта SiteHarvest.

Сериализация объекта ScrapedData в строку или файл.
"""
import json
from pathlib import Path

from site_harvest.crawler.models import ScrapedData
from site_harvest.errors import SerializationError


def dumps_json(data: ScrapedData, pretty: bool = True) -> str:
    """Возвращает JSON-представление ScrapedData."""
    return json.dumps(data.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def render_json(data: ScrapedData, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Сохраняет data в формате JSON по указанному пути.

    :param data: объект ScrapedData с результатами обхода
    :param output_path: путь к JSON-файлу
    :param pretty: форматировать с отступом 2
    :return: Path сохранённого файла
    :raises SerializationError: если файл не удалось записать

    Пример:
    ```python
    from site_harvest.report.json_report import render_json
    report_path = render_json(data, 'reports/scraped_data.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    try:
        text = dumps_json(data, pretty=pretty)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding='utf-8')
    except (OSError, TypeError, ValueError) as exc:
        raise SerializationError(output, exc) from exc
    return output

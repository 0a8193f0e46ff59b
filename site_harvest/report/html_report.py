# File: site_harvest/report/html_report.py
"""site_harvest.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from site_harvest.crawler.models import ScrapedData
from site_harvest.errors import SerializationError

#: шаблоны, поставляемые вместе с пакетом
TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    data: ScrapedData,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        data: объект ScrapedData.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с шаблоном ``report.html.j2``;
            по умолчанию используется встроенный шаблон.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from site_harvest.report.html_report import render_html
    html_path = render_html(data, output_path='reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else TEMPLATE_DIR
    output_path = Path(output_path)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )

    context: dict[str, Any] = data.to_dict()

    try:
        html_content = env.get_template("report.html.j2").render(**context)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html_content, encoding="utf-8")
    except (OSError, TemplateError) as exc:
        raise SerializationError(output_path, exc) from exc

    return output_path

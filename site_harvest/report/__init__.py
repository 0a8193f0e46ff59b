"""site_harvest.report: JSON- и HTML-отчёты по результатам обхода."""

from site_harvest.report.html_report import render_html
from site_harvest.report.json_report import dumps_json, render_json

__all__ = ["dumps_json", "render_json", "render_html"]

"""HTML digest rendering."""

from typing import Sequence

from jinja2 import BaseLoader, Environment

from ..clock import format_date
from ..models import Article

REPORT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>{{ title }}</title>
  <style>
    body { font-family: sans-serif; max-width: 900px; margin: 2em auto; padding: 0 1em; background: #f4f4f4; color: #333; }
    h1 { text-align: center; color: #444; }
    .article { background: #fff; padding: 1.5em; margin-bottom: 1.5em; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
    .header { display: flex; justify-content: space-between; align-items: baseline; border-bottom: 2px solid #eee; padding-bottom: 0.5em; margin-bottom: 1em; }
    .title { font-size: 1.4em; font-weight: bold; }
    .title a { text-decoration: none; color: #2c3e50; }
    .title a:hover { color: #3498db; }
    .link { font-size: 0.85em; margin-top: 0.2em; }
    .link a { text-decoration: none; color: #3498db; }
    .link a:hover { text-decoration: underline; }
    .meta { font-size: 0.85em; color: #888; text-align: right; }
    .score { font-weight: bold; color: #e67e22; font-size: 1.1em; }
    .model { font-size: 0.8em; }
    .analysis { font-style: italic; background: #f9f9f9; padding: 1em; border-left: 4px solid #3498db; margin: 1em 0; white-space: pre-wrap; }
    .description { line-height: 1.6; }
    details { margin-top: 1em; }
    summary { cursor: pointer; color: #3498db; font-size: 0.9em; }
    .content { margin-top: 1em; padding-top: 1em; border-top: 1px dashed #ccc; font-size: 0.9em; color: #555; }
    .empty { text-align: center; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  {% for article in articles %}
  <div class="article">
    <div class="header">
      <div>
        <div class="title"><a href="{{ article.link }}" target="_blank" rel="noopener noreferrer">{{ article.title }}</a></div>
        <div class="link"><a href="{{ article.link }}" target="_blank" rel="noopener noreferrer">{{ article.link }}</a></div>
      </div>
      <div class="meta">
        <span class="score">Score: {{ article.score }}</span><br>
        {{ article.published_date | date }}<br>
        <span class="model">{{ article.model }}</span>
      </div>
    </div>
    {% if article.analysis %}
    <div class="analysis"><strong>Analysis:</strong><br>{{ article.analysis }}</div>
    {% endif %}
    <div class="description">{{ article.description }}</div>
    {% if article.content %}
    <details>
      <summary>Show/Hide Full Content</summary>
      <div class="content">{{ article.content }}</div>
    </details>
    {% endif %}
  </div>
  {% else %}
  <p class="empty">No articles found.</p>
  {% endfor %}
</body>
</html>
"""


class ReportRenderer:
    """Render a list of articles into a standalone HTML document.

    All article text is escaped, so markup that survived ingestion is shown
    literally rather than interpreted.
    """

    def __init__(self, template_source: str = REPORT_TEMPLATE) -> None:
        env = Environment(loader=BaseLoader(), autoescape=True)
        env.filters["date"] = format_date
        self.template = env.from_string(template_source)

    def render(self, title: str, articles: Sequence[Article]) -> str:
        return self.template.render(title=title, articles=articles)

"""Article list and bulk actions over HTTP."""

import logging

from flask import Blueprint, Flask, abort, current_app, redirect, render_template_string, request
from sqlalchemy.exc import SQLAlchemyError

from ..clock import format_date
from ..db import ArticleStore
from ..scoring import parse_score

log = logging.getLogger(__name__)

HIGH_SCORE = 50

LIST_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>AI RSS Scraper - Articles</title>
  <style>
    body { font-family: sans-serif; margin: 2em; }
    table { width: 100%; border-collapse: collapse; }
    th, td { text-align: left; padding: 8px; border-bottom: 1px solid #ddd; }
    th { background-color: #f2f2f2; }
    .actions { margin-bottom: 1em; padding: 1em; background: #eee; border-radius: 4px; display: flex; justify-content: space-between; align-items: center; }
    button { padding: 0.5em 1em; cursor: pointer; margin-right: 0.5em; }
    .score-high { color: green; font-weight: bold; }
    .score-low { color: #888; }
    .filter { font-size: 0.9em; }
  </style>
  <script>
    function toggleAll(source) {
      var boxes = document.getElementsByName('guids');
      for (var i = 0; i < boxes.length; i++) { boxes[i].checked = source.checked; }
    }
    function updateFilter() {
      var reported = document.getElementById('reportedOnly').checked;
      window.location.href = "/?reported=" + reported;
    }
  </script>
</head>
<body>
  <h1>Articles</h1>
  <form action="/action" method="POST">
    <div class="actions">
      <div>
        <button type="submit" name="action" value="rescore">Rescore Selected</button>
        <button type="submit" name="action" value="reset-reported">Reset Reported Status</button>
      </div>
      <div class="filter">
        <input type="checkbox" id="reportedOnly" onclick="updateFilter()"{% if reported_only %} checked{% endif %}>
        <label for="reportedOnly">Show Reported Only</label>
      </div>
    </div>
    <table>
      <thead>
        <tr>
          <th><input type="checkbox" onclick="toggleAll(this)"></th>
          <th>Score</th>
          <th>Title</th>
          <th>Date</th>
          <th>Reported</th>
        </tr>
      </thead>
      <tbody>
        {% for article in articles %}
        <tr>
          <td><input type="checkbox" name="guids" value="{{ article.guid }}"></td>
          <td>
            {% if article.score %}
            <span class="{{ 'score-high' if article.score | score_value >= high_score else 'score-low' }}">{{ article.score }}</span>
            {% else %}-{% endif %}
          </td>
          <td><a href="{{ article.link }}" target="_blank" rel="noopener noreferrer">{{ article.title }}</a></td>
          <td>{{ article.published_date | date }}</td>
          <td>{{ 'Yes' if article.reported else 'No' }}</td>
        </tr>
        {% endfor %}
      </tbody>
    </table>
  </form>
</body>
</html>
"""

web_bp = Blueprint("web", __name__)

ACTIONS = {
    "rescore": ArticleStore.clear_scores,
    "reset-reported": ArticleStore.clear_reported,
}


def _store() -> ArticleStore:
    return current_app.extensions["article_store"]


@web_bp.route("/", methods=["GET"])
def list_articles():
    reported_only = request.args.get("reported") == "true"
    try:
        articles = _store().select_recent(current_app.config["ARTICLE_LIMIT"], reported_only)
    except SQLAlchemyError as exc:
        log.error("Error fetching articles: %s", exc)
        return f"Error fetching articles: {exc}", 500

    return render_template_string(
        LIST_TEMPLATE,
        articles=articles,
        reported_only=reported_only,
        high_score=HIGH_SCORE,
    )


@web_bp.route("/action", methods=["POST"])
def bulk_action():
    action = request.form.get("action", "")
    guids = request.form.getlist("guids")

    if not guids:
        return redirect("/", code=303)

    handler = ACTIONS.get(action)
    if handler is None:
        abort(400, description="Unknown action")

    try:
        changed = handler(_store(), guids)
    except SQLAlchemyError as exc:
        log.error("Error performing action %s: %s", action, exc)
        return f"Error performing action: {exc}", 500

    log.info("Applied %s to %d articles", action, changed)
    return redirect("/", code=303)


def create_app(store: ArticleStore, limit: int = 100) -> Flask:
    """Application factory for the article list view."""
    app = Flask(__name__)
    app.config["ARTICLE_LIMIT"] = limit
    app.extensions["article_store"] = store
    app.add_template_filter(format_date, "date")
    app.add_template_filter(parse_score, "score_value")
    app.register_blueprint(web_bp)
    return app

"""
HTML rendering for inspection result cards.

Every piece of record text goes through escape_html before it is placed in
markup, attribute values included.
"""
import re
from typing import Optional, Sequence, Union

from inspection_finder.models import InspectionRecord, RenderedView

MAX_VIOLATIONS_SHOWN = 3
EMPTY_STATE_HTML = '<p class="empty-state">No inspections match your filters.</p>'
NO_RESULTS_SUMMARY = "No results."

_ESCAPE_TABLE = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
})

Score = Optional[Union[int, float]]


def escape_html(value) -> str:
    """Escape the five HTML-significant characters."""
    return str(value).translate(_ESCAPE_TABLE)


def status_slug(status: str) -> str:
    """One CSS class token per status: "Pass w/ Conditions" -> "pass-w/-conditions"."""
    return re.sub(r"\s+", "-", status.strip().lower()) or "unknown"


def score_badge(score: Score) -> str:
    """Bucket a score into great/good/ok/poor, or unknown when absent."""
    if score is None:
        return "unknown"
    if score >= 95:
        return "great"
    if score >= 90:
        return "good"
    if score >= 80:
        return "ok"
    return "poor"


def score_class(score: Score) -> str:
    return f"score-{score_badge(score)}"


def format_score(score: Score) -> str:
    if score is None:
        return "–"
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)


def render_summary(count: int) -> str:
    if count == 0:
        return NO_RESULTS_SUMMARY
    return f"{count} location{'' if count == 1 else 's'} shown"


def render_card(record: InspectionRecord) -> str:
    """Render one inspection as a card."""
    status = record.status or "Unknown"

    date_badge = ""
    if record.last_inspection_date:
        date_badge = f'''
            <span class="badge date-badge">
              Last inspection: {escape_html(record.last_inspection_date)}
            </span>'''

    if record.violations:
        items = "".join(
            f"<li>{escape_html(v)}</li>" for v in record.violations[:MAX_VIOLATIONS_SHOWN]
        )
        violations_html = f'''
          <div class="violations">
            <div class="violations-title">Recent violations:</div>
            <ul>
              {items}
            </ul>
          </div>'''
    else:
        violations_html = '''
          <div class="violations none">No violations listed.</div>'''

    return f'''
    <div class="inspection-card">
      <div class="card-header">
        <div>
          <h2 class="restaurant-name">{escape_html(record.name or 'Unknown')}</h2>
          <div class="restaurant-meta">
            <span>{escape_html(record.city)}</span> ·
            <span>{escape_html(record.address)}</span>
          </div>
        </div>
        <div class="score-pill {score_class(record.score)}">
          {escape_html(format_score(record.score))}
        </div>
      </div>
      <div class="card-body">
        <div class="badge-row">
          <span class="badge status-{escape_html(status_slug(status))}">
            {escape_html(status)}
          </span>{date_badge}
        </div>{violations_html}
      </div>
    </div>'''


def render_results(records: Sequence[InspectionRecord]) -> RenderedView:
    """Render the filtered view: cards plus summary, or the empty placeholder."""
    if not records:
        return RenderedView(results_html=EMPTY_STATE_HTML, summary=NO_RESULTS_SUMMARY, count=0)

    cards = "".join(render_card(record) for record in records)
    return RenderedView(
        results_html=cards,
        summary=render_summary(len(records)),
        count=len(records),
    )

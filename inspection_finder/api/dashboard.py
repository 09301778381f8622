from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from inspection_finder.api.inspections import get_board, get_criteria
from inspection_finder.models import CityOption, FilterCriteria, SortMode
from inspection_finder.services.board import InspectionBoard
from inspection_finder.services.renderer import escape_html, render_results

router = APIRouter()

SORT_CHOICES = [
    (SortMode.SCORE_DESC, "Score (high to low)"),
    (SortMode.SCORE_ASC, "Score (low to high)"),
    (SortMode.NAME, "Name (A-Z)"),
]

# Kept out of the f-string template below so the braces need no escaping
PAGE_STYLE = """
    <style>
        .inspection-card { background: #fff; border-radius: 0.5rem; box-shadow: 0 1px 3px rgba(0,0,0,0.1); padding: 1rem; }
        .card-header { display: flex; justify-content: space-between; gap: 1rem; }
        .restaurant-name { font-size: 1.125rem; font-weight: 600; color: #111827; }
        .restaurant-meta { font-size: 0.875rem; color: #6b7280; }
        .score-pill { min-width: 3rem; height: 3rem; border-radius: 9999px; display: flex; align-items: center; justify-content: center; font-weight: 700; }
        .score-great { background: #dcfce7; color: #166534; }
        .score-good { background: #d1fae5; color: #065f46; }
        .score-ok { background: #fef9c3; color: #854d0e; }
        .score-poor { background: #fee2e2; color: #991b1b; }
        .score-unknown { background: #f3f4f6; color: #4b5563; }
        .badge-row { display: flex; flex-wrap: wrap; gap: 0.5rem; margin-top: 0.75rem; }
        .badge { padding: 0.125rem 0.5rem; border-radius: 9999px; font-size: 0.75rem; font-weight: 500; background: #f3f4f6; color: #1f2937; }
        .status-pass { background: #dcfce7; color: #166534; }
        .status-conditional { background: #fef9c3; color: #854d0e; }
        .status-fail { background: #fee2e2; color: #991b1b; }
        .violations { margin-top: 0.75rem; font-size: 0.875rem; color: #374151; }
        .violations ul { list-style: disc; padding-left: 1.25rem; }
        .violations-title { font-weight: 600; }
        .violations.none { color: #6b7280; font-style: italic; }
        .empty-state { text-align: center; color: #6b7280; padding: 3rem 0; }
    </style>
"""

PAGE_SCRIPT = """
    <script>
        const CONTROL_IDS = ['searchInput', 'cityFilter', 'statusFilter', 'sortSelect', 'top10Toggle'];

        function currentQuery() {
            const params = new URLSearchParams();
            const searchInput = document.getElementById('searchInput');
            const cityFilter = document.getElementById('cityFilter');
            const statusFilter = document.getElementById('statusFilter');
            const sortSelect = document.getElementById('sortSelect');
            const top10Toggle = document.getElementById('top10Toggle');

            if (searchInput) params.set('search', searchInput.value);
            if (cityFilter) params.set('city', cityFilter.value);
            if (statusFilter) params.set('status', statusFilter.value);
            if (sortSelect) params.set('sort', sortSelect.value);
            if (top10Toggle && top10Toggle.checked) params.set('top10', 'true');
            return params.toString();
        }

        // Only the latest request may update the page
        let requestSeq = 0;
        let inflight = null;

        async function applyFilters() {
            const query = currentQuery();
            const seq = ++requestSeq;
            if (inflight) inflight.abort();
            const controller = new AbortController();
            inflight = controller;
            try {
                const res = await fetch('/api/inspections/view?' + query, { signal: controller.signal });
                if (seq !== requestSeq) return;
                if (!res.ok) {
                    console.error('Failed to fetch results:', res.status, res.statusText);
                    return;
                }
                const data = await res.json();
                if (seq !== requestSeq) return;
                const container = document.getElementById('resultsContainer');
                const summary = document.getElementById('summaryText');
                if (container) container.innerHTML = data.results_html;
                if (summary) summary.textContent = data.summary;
                if (data.error) showError(data.error);
                history.replaceState(null, '', '/?' + query);
            } catch (err) {
                if (err.name === 'AbortError') return;
                console.error('Error applying filters:', err);
            } finally {
                if (inflight === controller) inflight = null;
            }
        }

        function showError(message) {
            const msgEl = document.getElementById('errorMessage');
            if (msgEl) {
                msgEl.textContent = message;
                msgEl.style.display = 'block';
            } else {
                alert(message);
            }
        }

        document.addEventListener('DOMContentLoaded', () => {
            CONTROL_IDS.forEach(id => {
                const el = document.getElementById(id);
                if (!el) return;
                el.addEventListener(id === 'searchInput' ? 'input' : 'change', applyFilters);
            });

            const form = document.getElementById('filterForm');
            if (form) {
                form.addEventListener('submit', (event) => {
                    event.preventDefault();
                    applyFilters();
                });
            }

            const initialError = document.body.dataset.loadError;
            if (initialError) showError(initialError);
        });
    </script>
"""


def _city_options_html(options: List[CityOption], selected: str) -> str:
    return "".join(
        f'<option value="{escape_html(o.value)}"{" selected" if o.value == selected else ""}>'
        f'{escape_html(o.label)}</option>'
        for o in options
    )


def _status_options_html(statuses: List[str], selected: str) -> str:
    html = f'<option value="all"{" selected" if selected == "all" else ""}>All statuses</option>'
    for status in statuses:
        is_selected = " selected" if status.lower() == selected.lower() else ""
        html += f'<option value="{escape_html(status)}"{is_selected}>{escape_html(status)}</option>'
    return html


def _sort_options_html(selected: SortMode) -> str:
    return "".join(
        f'<option value="{mode.value}"{" selected" if mode is selected else ""}>{label}</option>'
        for mode, label in SORT_CHOICES
    )


def render_page(board: InspectionBoard, criteria: FilterCriteria, filtered: bool) -> str:
    """Render the full inspection page with controls and the current results."""
    if filtered:
        rendered = board.render(criteria)
    else:
        # Load order straight from the dataset; board.view is not touched
        rendered = render_results(board.records)
    error = board.error_message or ""
    error_display = "block" if error else "none"

    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Inspection Finder</title>
    <script src="https://cdn.tailwindcss.com"></script>
{PAGE_STYLE}
</head>
<body class="bg-gray-100 min-h-screen" data-load-error="{escape_html(error)}">
    <nav class="bg-gray-900 text-white shadow-lg">
        <div class="container mx-auto px-4">
            <div class="flex items-center h-16">
                <h1 class="text-xl font-bold">Inspection Finder</h1>
            </div>
        </div>
    </nav>

    <main class="container mx-auto px-4 py-6">
        <div id="errorMessage" class="mb-4 p-3 rounded bg-red-100 text-red-800 text-sm" role="alert" style="display: {error_display}">{escape_html(error)}</div>

        <form id="filterForm" method="get" action="/" class="bg-white rounded-lg shadow p-4 mb-6 grid md:grid-cols-5 gap-4">
            <input id="searchInput" name="search" type="search" value="{escape_html(criteria.search)}"
                   placeholder="Search name or address" class="md:col-span-2 border rounded px-3 py-2 text-sm">
            <select id="cityFilter" name="city" class="border rounded px-3 py-2 text-sm">
                {_city_options_html(board.city_options, criteria.city)}
            </select>
            <select id="statusFilter" name="status" class="border rounded px-3 py-2 text-sm">
                {_status_options_html(board.status_options, criteria.status)}
            </select>
            <select id="sortSelect" name="sort" class="border rounded px-3 py-2 text-sm">
                {_sort_options_html(criteria.sort)}
            </select>
            <label class="flex items-center gap-2 text-sm text-gray-700 md:col-span-4">
                <input id="top10Toggle" name="top10" type="checkbox" value="true"{" checked" if criteria.top_only else ""}>
                Top {board.settings.TOP_N} only
            </label>
            <noscript><button type="submit" class="px-3 py-2 rounded bg-blue-600 text-white text-sm">Apply</button></noscript>
        </form>

        <p id="summaryText" class="text-sm text-gray-600 mb-4">{escape_html(rendered.summary)}</p>
        <div id="resultsContainer" class="grid md:grid-cols-2 lg:grid-cols-3 gap-4">
            {rendered.results_html}
        </div>
    </main>
{PAGE_SCRIPT}
</body>
</html>
'''


@router.get("/", response_class=HTMLResponse)
async def inspection_page(
    request: Request,
    criteria: FilterCriteria = Depends(get_criteria),
    board: InspectionBoard = Depends(get_board),
):
    """Serve the inspection finder page. Without query parameters the results are in load order."""
    filtered = bool(request.query_params)
    return HTMLResponse(content=render_page(board, criteria, filtered), media_type="text/html; charset=utf-8")

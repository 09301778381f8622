"""
HTTP tests for the inspection finder app.

    GET /                        page with controls + server-rendered results
    GET /api/inspections         filtered records (JSON)
    GET /api/inspections/cities  city options
    GET /api/inspections/view    rendered cards + summary for the page script
    GET /api/health
"""
import pytest
from fastapi.testclient import TestClient

from inspection_finder.config import Settings
from inspection_finder.main import create_app


@pytest.fixture
def client(test_settings):
    with TestClient(create_app(settings=test_settings)) as c:
        yield c


@pytest.fixture
def broken_client(tmp_path):
    settings = Settings(DATA_URL=str(tmp_path / "missing.json"), _env_file=None)
    with TestClient(create_app(settings=settings)) as c:
        yield c


class TestHealth:
    def test_health(self, client, raw_records):
        data = client.get("/api/health").json()
        assert data["status"] == "healthy"
        assert data["records"] == len(raw_records)
        assert data["data_available"] is True

    def test_health_without_data(self, broken_client):
        data = broken_client.get("/api/health").json()
        assert data["records"] == 0
        assert data["data_available"] is False


class TestListInspections:
    def test_default_sort_is_score_desc(self, client):
        data = client.get("/api/inspections").json()
        assert [i["name"] for i in data["items"]] == [
            "Cafe Luna", "Harbor Fish Market", "Blue Door Diner", "Golden Wok", "Taco Stop",
        ]
        assert data["total"] == 5

    def test_filters(self, client):
        resp = client.get("/api/inspections", params={"search": "HARBOR", "city": "portland", "status": "Pass"})
        assert [i["name"] for i in resp.json()["items"]] == ["Cafe Luna", "Harbor Fish Market"]

    def test_score_asc_with_top10(self, client):
        resp = client.get("/api/inspections", params={"sort": "score-asc", "top10": "true"})
        scores = [i["score"] for i in resp.json()["items"]]
        assert scores == [None, 68, 84, 92, 97]

    def test_unknown_sort_is_name(self, client):
        resp = client.get("/api/inspections", params={"sort": "alphabetical"})
        names = [i["name"] for i in resp.json()["items"]]
        assert names == sorted(names)

    def test_empty_values_mean_all(self, client):
        resp = client.get("/api/inspections", params={"city": "", "status": ""})
        assert resp.json()["total"] == 5

    def test_invalid_top10_is_rejected(self, client):
        assert client.get("/api/inspections", params={"top10": "maybe"}).status_code == 422


class TestCities:
    def test_city_options(self, client):
        data = client.get("/api/inspections/cities").json()
        assert data[0] == {"value": "all", "label": "All cities"}
        assert [o["value"] for o in data[1:]] == ["Portland", "Scarborough", "Westbrook"]


class TestView:
    def test_view_fragment(self, client):
        data = client.get("/api/inspections/view", params={"status": "fail"}).json()
        assert data["count"] == 1
        assert data["summary"] == "1 location shown"
        assert "Golden Wok" in data["results_html"]
        assert data["error"] is None

    def test_view_no_results(self, client):
        data = client.get("/api/inspections/view", params={"search": "nothing-matches"}).json()
        assert data["summary"] == "No results."
        assert "No inspections match your filters." in data["results_html"]

    def test_view_reports_load_error(self, broken_client):
        data = broken_client.get("/api/inspections/view").json()
        assert data["error"] == "Could not load inspection data file. Showing no results."
        assert data["count"] == 0


class TestPage:
    def test_page_has_controls(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.text
        for element_id in ("searchInput", "cityFilter", "statusFilter", "sortSelect",
                           "top10Toggle", "resultsContainer", "summaryText", "errorMessage"):
            assert f'id="{element_id}"' in html
        assert "5 locations shown" in html
        assert '<option value="all" selected>All cities</option>' in html

    def test_page_without_params_keeps_load_order(self, client, raw_records):
        html = client.get("/").text
        positions = [html.index(f'<h2 class="restaurant-name">{r["name"]}</h2>') for r in raw_records]
        assert positions == sorted(positions)

    def test_page_with_params_filters(self, client):
        html = client.get("/", params={"search": "wok", "sort": "name", "top10": "true"}).text
        assert "1 location shown" in html
        assert 'value="wok"' in html
        assert '<option value="name" selected>' in html
        assert "checked" in html

    def test_search_value_is_escaped(self, client):
        html = client.get("/", params={"search": '"><script>alert(1)</script>'}).text
        assert "<script>alert(1)</script>" not in html
        assert "&quot;&gt;&lt;script&gt;" in html

    def test_page_shows_load_error(self, broken_client):
        html = broken_client.get("/").text
        assert "Could not load inspection data file. Showing no results." in html
        assert "No results." in html

    def test_csp_header(self, client):
        assert "Content-Security-Policy" in client.get("/").headers

    def test_script_ignores_stale_responses(self, client):
        html = client.get("/").text
        assert "new AbortController()" in html
        assert "if (seq !== requestSeq) return;" in html


class TestSharedView:
    def _view_names(self, client):
        return [r.name for r in client.app.state.board.view]

    def test_json_list_leaves_view_alone(self, client):
        client.get("/api/inspections/view", params={"status": "fail"})
        assert self._view_names(client) == ["Golden Wok"]

        data = client.get("/api/inspections", params={"search": "cafe"}).json()
        assert [i["name"] for i in data["items"]] == ["Cafe Luna"]
        assert self._view_names(client) == ["Golden Wok"]

    def test_plain_page_load_leaves_view_alone(self, client):
        client.get("/api/inspections/view", params={"status": "fail"})
        html = client.get("/").text
        assert "5 locations shown" in html
        assert self._view_names(client) == ["Golden Wok"]

"""Tests for the browser-based web UI.

Tests use ``pytest.importorskip`` so they are skipped gracefully when
Flask is not installed.
"""

from __future__ import annotations

from typing import Any

import pytest

flask = pytest.importorskip("flask")

from pagesim.config import SimulationConfig  # noqa: E402
from pagesim.logging import Logger  # noqa: E402
from pagesim.simulator import simulate_fifo  # noqa: E402
from pagesim.web.app import create_app, main, result_to_dict  # noqa: E402

HTTP_OK = 200
HTTP_BAD_REQUEST = 400


def _create_client(config: SimulationConfig | None = None) -> Any:
    """Create a test client from a fresh app."""
    app = create_app(config)
    app.config["TESTING"] = True
    return app.test_client()


class TestAppCreation:
    """Verify app factory and landing page."""

    def test_create_app_returns_flask(self) -> None:
        """create_app should return a Flask application."""
        assert isinstance(create_app(), flask.Flask)

    def test_index_returns_html(self) -> None:
        """GET / should render the form."""
        response = _create_client().get("/")
        assert response.status_code == HTTP_OK
        assert "text/html" in response.content_type
        assert b"Page Replacement Simulator" in response.data

    def test_policies(self) -> None:
        """GET /api/policies lists policies and defaults."""
        data = _create_client().get("/api/policies").get_json()
        assert data["policies"] == ["fifo", "lru"]
        assert data["defaults"]["frames"] == "3"


class TestSimulateEndpoint:
    """Verify POST /api/simulate."""

    def test_lru_run(self) -> None:
        """A valid request returns the history and counters."""
        response = _create_client().post(
            "/api/simulate", json={"policy": "lru", "frames": 3, "reference": [1, 2, 3, 1, 2, 4]}
        )
        assert response.status_code == HTTP_OK
        data = response.get_json()
        assert data["policy"] == "LRU"
        assert data["faults"] == 4
        assert data["hits"] == 2
        assert data["total_requests"] == 6
        assert data["steps"][0]["frames"] == [1, None, None]
        assert data["steps"][-1]["frames"] == [1, 2, 4]
        assert data["steps"][-1]["evicted"] == 3
        assert "LRU Algorithm Simulation" in data["table"]

    def test_string_reference_and_defaults(self) -> None:
        """Omitted fields fall back to the app's settings."""
        client = _create_client(SimulationConfig(policy="fifo", frames=2))
        data = client.post("/api/simulate", json={"reference": "1,2,3"}).get_json()
        assert data["policy"] == "FIFO"
        assert data["frames"] == 2
        assert [s["outcome"] for s in data["steps"]] == ["F", "F", "F"]

    def test_empty_reference(self) -> None:
        """An empty reference string is valid."""
        data = _create_client().post("/api/simulate", json={"reference": []}).get_json()
        assert data["steps"] == []
        assert data["faults"] == 0

    @pytest.mark.parametrize(
        "body",
        [
            {"frames": 0, "reference": [1]},
            {"frames": 3, "reference": "1 x"},
            {"policy": "clock", "reference": [1]},
            {"frames": 3},
            [1, 2, 3],
        ],
    )
    def test_invalid_input(self, body: Any) -> None:
        """Bad input returns 400 with an error message."""
        response = _create_client().post("/api/simulate", json=body)
        assert response.status_code == HTTP_BAD_REQUEST
        assert "error" in response.get_json()

    def test_missing_body(self) -> None:
        """A non-JSON body is rejected."""
        response = _create_client().post("/api/simulate", data="frames=3")
        assert response.status_code == HTTP_BAD_REQUEST

    def test_runs_are_logged(self) -> None:
        """Each simulation writes to the app's log."""
        app = create_app()
        client = app.test_client()
        client.post("/api/simulate", json={"frames": 1, "reference": [1, 1]})
        logger: Logger = app.extensions["pagesim.logger"]
        assert len(logger) == 3


class TestResultToDict:
    """Verify JSON conversion."""

    def test_hit_rate_is_rounded(self) -> None:
        """Hit rate is rounded to two decimals."""
        data = result_to_dict(simulate_fifo([1, 2, 1], 2))
        assert data["hit_rate"] == 33.33


class TestOversizedInput:
    """Huge frame counts are client errors, not server errors."""

    @pytest.mark.parametrize("frames", [10**20, 1025, "100000000000000000000"])
    def test_frames_above_limit(self, frames: Any) -> None:
        """Oversized frame counts return 400 with an error message."""
        response = _create_client().post("/api/simulate", json={"frames": frames, "reference": [1]})
        assert response.status_code == HTTP_BAD_REQUEST
        assert "at most" in response.get_json()["error"]


class TestMain:
    """Verify the pagesim-web entry point."""

    def test_bad_environment_exits(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """An invalid PAGESIM_* value is reported instead of a traceback."""
        monkeypatch.setenv("PAGESIM_FRAMES", "none")
        with pytest.raises(SystemExit) as excinfo:
            main()
        assert excinfo.value.code == 1
        assert capsys.readouterr().err.startswith("Error:")

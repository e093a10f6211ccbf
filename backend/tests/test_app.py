"""
Tests for the application shell: health, metrics and request correlation.
"""


class TestAppShell:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}

    def test_metrics_are_exposed(self, client, auth_headers):
        client.get("/conversations", headers=auth_headers)

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "http_server_request_duration_seconds" in response.text
        assert "productboards_active_sends" in response.text

    def test_correlation_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Correlation-ID": "req-42"})

        assert response.headers["X-Correlation-ID"] == "req-42"

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

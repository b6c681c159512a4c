from lib.test import ViewTestMixin
from alertlab.peanuts.cache import CacheError


class UnreachableCache:
    def ping(self):
        raise CacheError("PING failed: Connection refused")

    def clear(self):
        pass


class TestUp(ViewTestMixin):
    def test_up(self):
        """Liveness check should respond with an empty 200."""
        response = self.client.get("/up/")

        assert response.status_code == 200
        assert response.data == b""

    def test_up_databases(self):
        response = self.client.get("/up/databases")

        assert response.status_code == 200

    def test_health_reports_components(self):
        response = self.client.get("/up/health")

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert data["service"] == "alertlab"
        assert data["components"]["database"]["healthy"] is True
        assert data["components"]["cache"]["healthy"] is True

    def test_health_unhealthy_cache(self, app, monkeypatch):
        monkeypatch.setitem(app.extensions, "peanuts_cache", UnreachableCache())

        response = self.client.get("/up/health")

        assert response.status_code == 503
        data = response.get_json()
        assert data["status"] == "unhealthy"
        assert data["components"]["database"]["healthy"] is True
        assert data["components"]["cache"]["healthy"] is False
        assert "Connection refused" in data["components"]["cache"]["error"]

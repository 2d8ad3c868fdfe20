import unittest

from fastapi.testclient import TestClient

from campus_survey.db.memory import InMemoryDocumentStore
from campus_survey.db.mongodb import MongoDocumentStore
from campus_survey.main import create_app
from tests.factories import make_feedback, make_survey


class HealthTests(unittest.TestCase):
    def test_health_connected(self):
        client = TestClient(create_app(store=InMemoryDocumentStore()))
        response = client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["status"], "OK")
        self.assertEqual(payload["message"], "Campus Survey API is running!")
        self.assertEqual(payload["database"], "Connected")
        self.assertIn("timestamp", payload)

    def test_unknown_route_uses_error_body(self):
        client = TestClient(create_app(store=InMemoryDocumentStore()))
        response = client.get("/api/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Not Found"})


class DisconnectedStoreTests(unittest.TestCase):
    """A store whose connection failed keeps the API up in a degraded state."""

    def setUp(self):
        self.client = TestClient(create_app(store=MongoDocumentStore()))

    def test_health_reports_disconnected(self):
        response = self.client.get("/api/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["database"], "Disconnected")

    def test_reads_fail_with_500(self):
        for path in [
            "/api/analytics/overview",
            "/api/analytics/interview-candidates",
            "/api/analytics/detailed",
            "/api/feedback",
            "/api/feedback/stats",
        ]:
            response = self.client.get(path)
            self.assertEqual(response.status_code, 500, path)
            self.assertEqual(response.json(), {"error": "Database is not connected"})

    def test_writes_fail_with_400(self):
        response = self.client.post("/api/survey", json=make_survey())
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Database is not connected"})

        response = self.client.post("/api/feedback", json=make_feedback())
        self.assertEqual(response.status_code, 400)

    def test_validation_runs_before_storage(self):
        response = self.client.post("/api/feedback", json=make_feedback(rating=9))
        self.assertEqual(response.status_code, 400)
        self.assertIn("rating", response.json()["error"])


if __name__ == "__main__":
    unittest.main()

import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from campus_survey.db.memory import InMemoryDocumentStore
from campus_survey.main import create_app
from tests.factories import make_feedback


class FeedbackApiTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryDocumentStore()
        self.client = TestClient(create_app(store=self.store))

    def test_submit_feedback(self):
        response = self.client.post("/api/feedback", json=make_feedback())
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["message"], "Feedback submitted successfully!")

        stored = self.store.collections["feedback"][0]
        self.assertEqual(stored["_id"], payload["id"])
        self.assertEqual(stored["status"], "new")
        self.assertNotIn("response", stored)

    def test_rating_out_of_range_is_rejected(self):
        for rating in [0, 6, -1, 2.5, "five"]:
            response = self.client.post("/api/feedback", json=make_feedback(rating=rating))
            self.assertEqual(response.status_code, 400, rating)
            self.assertIn("rating", response.json()["error"])

        stats = self.client.get("/api/feedback/stats").json()
        self.assertEqual(stats["total"], 0)

    def test_null_status_defaults_to_new(self):
        response = self.client.post("/api/feedback", json=make_feedback(status=None))
        self.assertEqual(response.status_code, 201)
        self.assertEqual(self.store.collections["feedback"][0]["status"], "new")

    def test_boolean_rating_is_rejected(self):
        response = self.client.post("/api/feedback", json=make_feedback(rating=True))
        self.assertEqual(response.status_code, 400)
        self.assertIn("rating", response.json()["error"])
        self.assertEqual(self.store.collections["feedback"], [])

    def test_missing_message_is_rejected(self):
        body = make_feedback()
        del body["message"]
        response = self.client.post("/api/feedback", json=body)
        self.assertEqual(response.status_code, 400)
        self.assertIn("message", response.json()["error"])

    def test_stats_without_feedback(self):
        response = self.client.get("/api/feedback/stats")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"total": 0, "averageRating": 0, "categories": []})

    def test_stats(self):
        self.client.post("/api/feedback", json=make_feedback(rating=5, category="food"))
        self.client.post("/api/feedback", json=make_feedback(rating=4, category="food"))
        self.client.post("/api/feedback", json=make_feedback(rating=3, category="wifi"))

        payload = self.client.get("/api/feedback/stats").json()
        self.assertEqual(payload["total"], 3)
        self.assertAlmostEqual(payload["averageRating"], 4.0)
        categories = {item["_id"]: item["count"] for item in payload["categories"]}
        self.assertEqual(categories, {"food": 2, "wifi": 1})

    def test_list_is_newest_first_and_capped(self):
        start = datetime(2024, 3, 1, tzinfo=timezone.utc)
        for i in range(105):
            timestamp = (start + timedelta(minutes=i)).isoformat()
            response = self.client.post(
                "/api/feedback",
                json=make_feedback(message=f"entry {i}", timestamp=timestamp),
            )
            self.assertEqual(response.status_code, 201)

        response = self.client.get("/api/feedback")
        self.assertEqual(response.status_code, 200)
        entries = response.json()
        self.assertEqual(len(entries), 100)
        self.assertEqual(entries[0]["message"], "entry 104")
        self.assertEqual(entries[-1]["message"], "entry 5")
        self.assertIn("_id", entries[0])
        self.assertEqual(entries[0]["status"], "new")


if __name__ == "__main__":
    unittest.main()

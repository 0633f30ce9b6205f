import unittest

from fastapi.testclient import TestClient

from college_scorecard.main import app


class TestMain(unittest.TestCase):
    def test_app_metadata(self):
        self.assertEqual(app.title, "College Scorecard Client")

    def test_healthz(self):
        resp = TestClient(app).get("/healthz")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()

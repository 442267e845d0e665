from django.test import TestCase
from rest_framework.test import APIClient


class ProviderApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_lists_providers(self):
        res = self.client.get("/api/providers/")

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual([p["key"] for p in data], ["videasy", "vidsrc", "moviesapi", "vidora"])
        moviesapi = next(p for p in data if p["key"] == "moviesapi")
        self.assertTrue(moviesapi["has_ads"])
        self.assertFalse(moviesapi["sandboxed"])
        self.assertTrue(next(p for p in data if p["key"] == "videasy")["is_default"])

    def test_embed_for_series_uses_default_provider(self):
        res = self.client.get(
            "/api/providers/embed/",
            {"media_type": "tv", "media_id": "1399", "season": "1", "episode": "1"},
        )

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual(data["provider"], "videasy")
        self.assertTrue(data["src"].startswith("https://player.videasy.net/tv/1399/1/1?"))
        self.assertIsNone(data["advisory"])

    def test_embed_for_ad_risk_provider(self):
        res = self.client.get(
            "/api/providers/embed/",
            {"provider": "moviesapi", "media_type": "movie", "media_id": "550"},
        )

        self.assertEqual(res.status_code, 200)
        data = res.json()["data"]
        self.assertEqual(data["src"], "https://moviesapi.club/movie/550")
        self.assertIsNone(data["sandbox"])
        self.assertEqual(data["advisory"], "This player may contain ads")

    def test_series_without_episode_is_bad_request(self):
        res = self.client.get(
            "/api/providers/embed/",
            {"media_type": "tv", "media_id": "1399"},
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["error"]["code"], "invalid_request")

    def test_unknown_provider_is_not_found(self):
        res = self.client.get(
            "/api/providers/embed/",
            {"provider": "nope", "media_type": "movie", "media_id": "550"},
        )

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()["error"]["code"], "unknown_provider")

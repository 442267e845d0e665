from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from core.exceptions import UnknownProviderError
from providers.registry import PROVIDERS, available_providers, default_key, describe


class ProviderRegistryTests(SimpleTestCase):
    def test_known_providers_exist(self):
        for key in ("videasy", "vidsrc", "moviesapi", "vidora"):
            provider = describe(key)
            self.assertEqual(provider.key, key)

    def test_every_key_maps_to_its_own_descriptor(self):
        for key, descriptor in PROVIDERS.items():
            self.assertEqual(descriptor.key, key)
        self.assertEqual(len({d.key for d in available_providers()}), len(PROVIDERS))

    def test_unknown_provider_raises(self):
        with self.assertRaises(UnknownProviderError):
            describe("unknown")

    def test_unknown_provider_is_a_value_error(self):
        with self.assertRaises(ValueError):
            describe("unknown")

    def test_default_key(self):
        self.assertEqual(default_key(), "videasy")

    @override_settings(PLAYBACK_DEFAULT_PROVIDER="vidora")
    def test_default_key_follows_settings(self):
        self.assertEqual(default_key(), "vidora")

    @override_settings(PLAYBACK_DEFAULT_PROVIDER="nope")
    def test_unregistered_default_is_a_configuration_error(self):
        with self.assertRaises(ImproperlyConfigured):
            default_key()

    def test_descriptors_are_immutable(self):
        provider = describe("videasy")
        with self.assertRaises(AttributeError):
            provider.has_ads = True

    def test_only_moviesapi_is_flagged_for_ads(self):
        flagged = [d.key for d in available_providers() if d.has_ads]
        self.assertEqual(flagged, ["moviesapi"])

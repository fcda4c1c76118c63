from unittest import mock

from django.core.cache.backends.locmem import LocMemCache
from django.test import SimpleTestCase, override_settings

from maintenance_cache.cache import (
    MaintenanceCache,
    get_cache_config,
    initialize_cache,
    make_key,
)

LOCMEM_BACKEND = "django.core.cache.backends.locmem.LocMemCache"


class InitializeCacheTests(SimpleTestCase):
    def test_missing_configuration(self):
        with mock.patch("maintenance_cache.cache.structured_logger") as slog:
            self.assertIsNone(initialize_cache(None))
            self.assertIsNone(initialize_cache({}))
        slog.warning.assert_not_called()

    def test_configuration_that_is_not_a_mapping(self):
        with mock.patch("maintenance_cache.cache.structured_logger") as slog:
            self.assertIsNone(initialize_cache("redis://localhost:6379/5"))
            self.assertIsNone(initialize_cache(["BACKEND"]))
        slog.warning.assert_not_called()

    def test_configuration_without_backend(self):
        with mock.patch("maintenance_cache.cache.structured_logger") as slog:
            self.assertIsNone(initialize_cache({"LOCATION": "somewhere"}))
        slog.warning.assert_not_called()

    def test_backend_import_failure_is_logged(self):
        with mock.patch("maintenance_cache.cache.structured_logger") as slog:
            handle = initialize_cache({"BACKEND": "does.not.exist.Cache"})

        self.assertIsNone(handle)
        slog.warning.assert_called_once()
        kwargs = slog.warning.call_args.kwargs
        self.assertEqual(kwargs["event_code"], "maintenance_cache_init_failed")
        self.assertEqual(kwargs["reason_code"], "cache_init_failed")
        self.assertEqual(kwargs["backend"], "does.not.exist.Cache")

    def test_backend_constructor_failure_is_logged(self):
        with (
            mock.patch(
                "maintenance_cache.cache.import_string",
                return_value=mock.Mock(side_effect=ConnectionError("refused")),
            ),
            mock.patch("maintenance_cache.cache.structured_logger") as slog,
        ):
            handle = initialize_cache({"BACKEND": "some.Backend"})

        self.assertIsNone(handle)
        self.assertEqual(slog.warning.call_args.kwargs["reason"], "refused")

    def test_builds_backend_with_options(self):
        handle = initialize_cache(
            {
                "BACKEND": LOCMEM_BACKEND,
                "LOCATION": "initialize-cache-tests",
                "OPTIONS": {"MAX_ENTRIES": 10},
            }
        )

        self.assertIsInstance(handle, MaintenanceCache)
        self.assertIsInstance(handle.backend, LocMemCache)
        self.assertEqual(handle.backend._max_entries, 10)

    def test_keys_are_stored_verbatim(self):
        handle = initialize_cache(
            {"BACKEND": LOCMEM_BACKEND, "LOCATION": "verbatim-key-tests"}
        )
        self.assertEqual(
            handle.backend.make_key("MAINTENANCE_MODE_STATUS"),
            "MAINTENANCE_MODE_STATUS",
        )
        self.assertEqual(make_key("KEY", "prefix", 2), "KEY")

    @override_settings(
        CACHES={"default": {"BACKEND": LOCMEM_BACKEND}},
    )
    def test_get_cache_config_without_alias(self):
        self.assertIsNone(get_cache_config())

    @override_settings(
        CACHES={
            "default": {"BACKEND": LOCMEM_BACKEND},
            "state": {"BACKEND": LOCMEM_BACKEND, "LOCATION": "state"},
        },
        MAINTENANCE_CACHE_ALIAS="state",
    )
    def test_get_cache_config_uses_alias_setting(self):
        self.assertEqual(get_cache_config()["LOCATION"], "state")


class MaintenanceCacheTests(SimpleTestCase):
    def setUp(self):
        self.backend = mock.MagicMock()
        self.cache = MaintenanceCache(self.backend)

    def test_load(self):
        self.backend.get.return_value = "true"
        self.assertEqual(self.cache.load("KEY"), "true")
        self.backend.get.assert_called_once_with("KEY")

    def test_save_success(self):
        self.backend.set_many.return_value = []
        self.assertTrue(self.cache.save("true", "KEY"))
        self.backend.set_many.assert_called_once_with({"KEY": "true"}, timeout=None)

    def test_save_failure(self):
        self.backend.set_many.return_value = ["KEY"]
        self.assertFalse(self.cache.save("true", "KEY"))

    def test_remove(self):
        self.cache.remove("KEY")
        self.backend.delete.assert_called_once_with("KEY")

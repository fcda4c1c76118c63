import os
import shutil
import tempfile
from unittest import mock

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from maintenance_cache.fallback import FilesystemMaintenanceMode, get_addresses_file_path


class FallbackTestMixin:
    def setUp(self):
        self.state_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.state_dir, ignore_errors=True)
        self.state_file_path = os.path.join(self.state_dir, "state.txt")
        self.addresses_file_path = os.path.join(self.state_dir, "addresses.txt")

        settings_override = override_settings(
            MAINTENANCE_MODE_STATE_FILE_PATH=self.state_file_path,
            MAINTENANCE_CACHE_ADDRESSES_FILE_PATH=self.addresses_file_path,
        )
        settings_override.enable()
        self.addCleanup(settings_override.disable)

    def write_addresses(self, content):
        with open(self.addresses_file_path, "w") as f:
            f.write(content)

    def read_addresses(self):
        with open(self.addresses_file_path) as f:
            return f.read()


class FilesystemMaintenanceModeTests(FallbackTestMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.state_backend = mock.MagicMock()
        self.fallback = FilesystemMaintenanceMode(state_backend=self.state_backend)

    def test_is_on_when_disabled(self):
        self.state_backend.get_value.return_value = False
        self.write_addresses("10.0.0.1")
        self.assertFalse(self.fallback.is_on("192.168.1.1"))

    def test_is_on_respects_allow_list(self):
        self.state_backend.get_value.return_value = True
        self.write_addresses("10.0.0.1,192.168.1.2")

        self.assertFalse(self.fallback.is_on("10.0.0.1"))
        self.assertTrue(self.fallback.is_on("10.0.0.2"))

    def test_is_enabled(self):
        self.state_backend.get_value.return_value = True
        self.write_addresses("10.0.0.1")
        self.assertTrue(self.fallback.is_enabled())

    def test_set(self):
        self.fallback.set(True)
        self.state_backend.set_value.assert_called_once_with(True)

    def test_get_address_info_without_file(self):
        self.assertEqual(self.fallback.get_address_info(), [])

    def test_get_address_info_with_empty_file(self):
        self.write_addresses("\n")
        self.assertEqual(self.fallback.get_address_info(), [])

    def test_set_addresses(self):
        self.fallback.set_addresses("192.168.1.1, 10.0.0.1")

        self.assertEqual(self.read_addresses(), "192.168.1.1,10.0.0.1")
        self.assertEqual(
            self.fallback.get_address_info(), ["192.168.1.1", "10.0.0.1"]
        )

    def test_set_addresses_with_empty_string_removes_file(self):
        self.write_addresses("10.0.0.1")
        self.fallback.set_addresses("")
        self.assertFalse(os.path.exists(self.addresses_file_path))

        # Clearing twice is not an error
        self.fallback.set_addresses("")

    def test_set_addresses_rejects_invalid_address(self):
        with self.assertRaises(ValidationError):
            self.fallback.set_addresses("10.0.0.1, not-an-address")
        self.assertFalse(os.path.exists(self.addresses_file_path))

    def test_set_addresses_accepts_ipv6(self):
        self.fallback.set_addresses("::1")
        self.assertEqual(self.fallback.get_address_info(), ["::1"])


class LocalFileStateBackendTests(FallbackTestMixin, SimpleTestCase):
    def test_flag_round_trip_through_state_file(self):
        fallback = FilesystemMaintenanceMode()

        fallback.set(True)
        self.assertTrue(fallback.is_on("10.0.0.1"))

        fallback.set(False)
        self.assertFalse(fallback.is_on("10.0.0.1"))


class AddressesFilePathTests(SimpleTestCase):
    @override_settings(
        MAINTENANCE_MODE_STATE_FILE_PATH="/var/maintenance/state.txt",
        MAINTENANCE_CACHE_ADDRESSES_FILE_PATH=None,
    )
    def test_defaults_next_to_state_file(self):
        self.assertEqual(
            get_addresses_file_path(),
            "/var/maintenance/maintenance_mode_addresses.txt",
        )

    @override_settings(MAINTENANCE_CACHE_ADDRESSES_FILE_PATH="/tmp/addresses.txt")
    def test_uses_setting(self):
        self.assertEqual(get_addresses_file_path(), "/tmp/addresses.txt")

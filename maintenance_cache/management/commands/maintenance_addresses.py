from django.core.management.base import BaseCommand

from maintenance_cache.maintenance import get_maintenance_mode


class Command(BaseCommand):
    help = "Show or replace the maintenance mode address allow-list"

    def add_arguments(self, parser):
        group = parser.add_mutually_exclusive_group()
        group.add_argument(
            "--set",
            dest="addresses",
            help="Comma-separated list of addresses allowed during maintenance",
        )
        group.add_argument(
            "--clear",
            action="store_true",
            help="Remove every address from the allow-list",
        )

    def handle(self, *, addresses=None, clear=False, **options):
        maintenance_mode = get_maintenance_mode()

        if clear:
            maintenance_mode.set_addresses("")
            self.stdout.write("Set exempt IP-addresses: none")
            if maintenance_mode.is_enabled():
                self.stderr.write(
                    "Maintenance mode is on and no allow-list is stored in the "
                    "cache: until addresses are set again, allow-list checks "
                    "are answered by the filesystem fallback."
                )
        elif addresses is not None:
            maintenance_mode.set_addresses(addresses)
            self.stdout.write(
                "Set exempt IP-addresses: {}".format(
                    ", ".join(maintenance_mode.get_address_info()) or "none"
                )
            )
        else:
            address_list = maintenance_mode.get_address_info()
            if address_list:
                self.stdout.write("List of exempt IP-addresses:")
                for address in address_list:
                    self.stdout.write(address)
            else:
                self.stdout.write("Exempt IP-addresses: none")

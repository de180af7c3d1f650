from django.core.management.base import BaseCommand

from apps.financing.application.reference_data import ReferenceDataLoader


class Command(BaseCommand):
    help = 'Fetch the country and currency catalogs used by the financing form'

    def add_arguments(self, parser):
        parser.add_argument(
            '--list',
            action='store_true',
            help='Print every country and currency, not only the totals'
        )

    def handle(self, **options):
        self.stdout.write('Fetching reference data...')

        reference_data = ReferenceDataLoader().load()

        self.stdout.write(
            self.style.SUCCESS(
                f"Loaded {len(reference_data.countries)} countries and "
                f"{len(reference_data.currencies)} currencies"
            )
        )

        if options['list']:
            for country in reference_data.countries:
                self.stdout.write(f"{country.code}  {country.name}")
            for code, name in reference_data.currencies.items():
                self.stdout.write(f"{code}  {name}")

        for warning in reference_data.warnings:
            self.stdout.write(self.style.WARNING(f"[{warning.catalog}] {warning.message}"))

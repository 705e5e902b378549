# ABOUTME: Query management command to look up representatives for a country and location.
# ABOUTME: Interactive tool for checking adapters and cached datasets from the shell.

from django.core.management.base import BaseCommand
from reps.constants import SUPPORTED_COUNTRIES
from reps.exceptions import RepresentativeLookupError
from reps.records import Locator
from reps.services import RepresentativeQueryService


class Command(BaseCommand):
    help = 'Find representatives by country and postal code, address or EU member state'

    def add_arguments(self, parser):
        parser.add_argument(
            'country',
            type=str,
            help=f"Country code ({', '.join(SUPPORTED_COUNTRIES)})"
        )
        parser.add_argument('--postal', type=str, help='Postal code (e.g., "10117", "SW1A 1AA")')
        parser.add_argument('--street', type=str, help='Street address (US only)')
        parser.add_argument('--city', type=str, help='City (US only)')
        parser.add_argument('--state', type=str, help='State (US only)')
        parser.add_argument(
            '--member-state',
            type=str,
            help='EU member state ISO code (e.g., "DE") - only for EU'
        )

    def handle(self, *args, **options):
        locator = Locator.from_query({
            'postal': options.get('postal'),
            'street': options.get('street'),
            'city': options.get('city'),
            'state': options.get('state'),
            'memberState': options.get('member_state'),
        })

        try:
            reps = RepresentativeQueryService().find(options['country'], locator)
        except RepresentativeLookupError as e:
            self.stderr.write(self.style.ERROR(f'Error ({e.status_code}): {e.message}'))
            return
        except Exception as e:
            self.stderr.write(self.style.ERROR(f'Error: {str(e)}'))
            return

        for rep in reps:
            self.stdout.write(f'{rep.name} ({rep.title}) - {rep.district}')
            if rep.email:
                self.stdout.write(f'  Email: {rep.email}')
            if rep.party:
                self.stdout.write(f'  Party: {rep.party}')
            if rep.committee:
                self.stdout.write(f'  Committees: {rep.committee}')
            if rep.contact_form:
                self.stdout.write(f'  Contact: {rep.contact_form}')

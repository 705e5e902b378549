"""
Management command to refresh the cached representative datasets.

Fetches the slow or bulk-only sources into the Cache Store:
- France: NosDéputés deputies
- Sweden: Riksdagen members
- Australia: OpenAustralia House members and Senators
- EU: Europarl MEP list and AFET/DROI/D-IR committee memberships
"""

import logging
from django.core.management.base import BaseCommand
from reps.services import RepresentativeSyncService

logger = logging.getLogger('reps.services')


class Command(BaseCommand):
    help = 'Sync cached representative datasets (France, Sweden, Australia, EU)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dataset',
            action='append',
            choices=list(RepresentativeSyncService.DATASETS),
            help='Dataset to sync (repeatable). Syncs every dataset when omitted.',
        )

    def handle(self, *args, **options):
        datasets = options.get('dataset')
        verbosity = options.get('verbosity', 1)

        # Configure logging based on verbosity
        if verbosity >= 3:
            logger.setLevel(logging.DEBUG)
        elif verbosity >= 2:
            logger.setLevel(logging.INFO)
        else:
            logger.setLevel(logging.WARNING)

        # Add console handler if not already present
        if not logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter('%(levelname)s: %(message)s')
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        try:
            outcome = RepresentativeSyncService.sync(datasets=datasets, progress=verbosity >= 1)
        except Exception:
            logger.exception("Sync failed")
            raise

        for name, result in outcome['results'].items():
            if result['success']:
                self.stdout.write(self.style.SUCCESS(f"  {name}: {result['count']} records"))
            else:
                self.stdout.write(self.style.ERROR(f"  {name}: {result['error']}"))
        self.stdout.write(self.style.SUCCESS(f"Sync completed at {outcome['syncedAt']}"))

# ABOUTME: Test the sync job and the per-source fetch/transform functions it drives.
# ABOUTME: One dataset failing must not block the others, and the timestamp is always written.

from unittest.mock import patch

from django.core.cache import caches
from django.test import SimpleTestCase, override_settings

from reps.exceptions import DataNotCached, UpstreamUnavailable
from reps.services.cache import CACHE_KEYS, RepresentativeCache
from reps.services.countries import australia, france, sweden
from reps.services.representative_sync import RepresentativeSyncService

TEST_CACHES = {
    'default': {'BACKEND': 'django.core.cache.backends.locmem.LocMemCache', 'LOCATION': 'reps-sync-tests'},
}

COUNTRIES = 'reps.services.countries'


@override_settings(CACHES=TEST_CACHES)
class RepresentativeSyncServiceTests(SimpleTestCase):
    """Test dataset isolation and result reporting."""

    def setUp(self):
        caches['default'].clear()
        self.cache = RepresentativeCache()

    @patch(f'{COUNTRIES}.eu.CommitteeMembership.build')
    @patch(f'{COUNTRIES}.eu.fetch_meps')
    @patch(f'{COUNTRIES}.australia.fetch_senators')
    @patch(f'{COUNTRIES}.australia.fetch_house_members')
    @patch(f'{COUNTRIES}.sweden.fetch_members')
    @patch(f'{COUNTRIES}.france.fetch_deputies')
    def test_failing_dataset_does_not_block_others(
        self, mock_france, mock_sweden, mock_house, mock_senators, mock_meps, mock_committees,
    ):
        # Arrange
        mock_france.side_effect = UpstreamUnavailable('Could not fetch French deputy data')
        mock_sweden.return_value = [{'name': 'Anna Andersson', 'valkrets': 'Stockholms kommun'}]
        mock_house.return_value = [{'name': 'H'}]
        mock_senators.return_value = [{'name': 'S1'}, {'name': 'S2'}]
        mock_meps.return_value = [{'name': 'M', 'mep_id': '1'}]
        mock_committees.return_value = {'1': ['AFET']}

        # Act
        outcome = RepresentativeSyncService.sync(cache=self.cache)

        # Assert
        results = outcome['results']
        self.assertTrue(outcome['success'])
        self.assertEqual(results['france'], {'success': False, 'error': 'Could not fetch French deputy data'})
        self.assertEqual(results['sweden'], {'success': True, 'count': 1})
        self.assertEqual(results['australiaSenators'], {'success': True, 'count': 2})
        self.assertEqual(results['euCommitteeMembers'], {'success': True, 'count': 1})
        self.assertEqual(outcome['syncedAt'], self.cache.last_synced())
        self.assertEqual(len(self.cache.get_dataset(CACHE_KEYS['SWEDEN_MPS'])), 1)
        self.assertEqual(self.cache.get_committee_map(), {'1': ['AFET']})
        with self.assertRaises(DataNotCached):
            self.cache.get_dataset(CACHE_KEYS['FRANCE_DEPUTIES'])

    @patch(f'{COUNTRIES}.sweden.fetch_members')
    @patch(f'{COUNTRIES}.france.fetch_deputies')
    def test_failed_sync_keeps_previous_entry(self, mock_france, mock_sweden):
        self.cache.set_dataset(CACHE_KEYS['FRANCE_DEPUTIES'], [{'name': 'Old'}])
        mock_france.side_effect = UpstreamUnavailable()
        mock_sweden.return_value = []

        outcome = RepresentativeSyncService.sync(datasets=['france', 'sweden'], cache=self.cache)

        self.assertEqual(list(outcome['results']), ['france', 'sweden'])
        self.assertEqual(self.cache.get_dataset(CACHE_KEYS['FRANCE_DEPUTIES']), [{'name': 'Old'}])
        self.assertEqual(outcome['results']['sweden'], {'success': True, 'count': 0})

    @patch(f'{COUNTRIES}.eu.CommitteeMembership.build')
    def test_empty_committee_map_is_an_error(self, mock_committees):
        mock_committees.return_value = {}

        outcome = RepresentativeSyncService.sync(datasets=['euCommitteeMembers'], cache=self.cache)

        self.assertFalse(outcome['results']['euCommitteeMembers']['success'])
        self.assertIsNone(self.cache.get_committee_map())
        self.assertIsNotNone(self.cache.last_synced())

    @patch(f'{COUNTRIES}.france.fetch_deputies')
    def test_unknown_dataset_is_rejected_before_any_sync(self, mock_france):
        with self.assertRaises(ValueError) as ctx:
            RepresentativeSyncService.sync(datasets=['france', 'atlantis'], cache=self.cache)

        self.assertIn('atlantis', str(ctx.exception))
        mock_france.assert_not_called()
        self.assertIsNone(self.cache.last_synced())

    @patch(f'{COUNTRIES}.australia.fetch_senators')
    def test_progress_flag_reaches_senator_fetch(self, mock_senators):
        mock_senators.return_value = [{'name': 'S1'}]

        RepresentativeSyncService.sync(datasets=['australiaSenators'], cache=self.cache, progress=True)

        mock_senators.assert_called_once_with(progress=True)


class FranceSyncTests(SimpleTestCase):
    """Test NosDéputés fetching and transformation."""

    @patch(f'{COUNTRIES}.france.fetch_json')
    def test_falls_back_to_full_list(self, mock_fetch):
        mock_fetch.side_effect = [
            {'deputes': []},
            {'deputes': [{'depute': {
                'nom': 'Alice Martin',
                'nom_circo': 'Paris',
                'num_circo': 1,
                'num_deptmt': '1',
                'id_an': 'PA1',
                'emails': [{'email': 'alice@example.fr'}, {'email': 'alice.martin@assemblee-nationale.fr'}],
            }}]},
        ]

        deputies = france.fetch_deputies()

        self.assertEqual(mock_fetch.call_count, 2)
        self.assertEqual(deputies, [{
            'name': 'Alice Martin',
            'district': 'Paris (1)',
            'email': 'alice.martin@assemblee-nationale.fr',
            'photo': 'https://www.assemblee-nationale.fr/dyn/deputes/PA1/image',
            'dept_code': '01',
        }])

    @patch(f'{COUNTRIES}.france.fetch_json')
    def test_nothing_fetched(self, mock_fetch):
        mock_fetch.return_value = {'deputes': []}

        with self.assertRaises(UpstreamUnavailable):
            france.fetch_deputies()


class SwedenSyncTests(SimpleTestCase):
    """Test Riksdagen person list transformation."""

    @patch(f'{COUNTRIES}.sweden.fetch_json')
    def test_only_serving_members_are_kept(self, mock_fetch):
        mock_fetch.return_value = {'personlista': {'person': [
            {
                'tilltalsnamn': 'Anna',
                'efternamn': 'Andersson',
                'valkrets': 'Stockholms kommun',
                'status': 'Tjänstgörande riksdagsledamot',
                'bild_url_192': 'https://data.riksdagen.se/filarkiv/bilder/ledamot/1_192.jpg',
                'personuppgift': {'uppgift': [
                    {'kod': 'Webbsida', 'uppgift': ['https://example.se']},
                    {'kod': 'Officiell e-postadress', 'uppgift': ['anna.andersson[på]riksdagen.se']},
                ]},
            },
            {'tilltalsnamn': 'Ersättare', 'efternamn': 'X', 'status': 'Ersättare'},
        ]}}

        members = sweden.fetch_members()

        self.assertEqual(len(members), 1)
        self.assertEqual(members[0]['name'], 'Anna Andersson')
        self.assertEqual(members[0]['email'], 'anna.andersson@riksdagen.se')
        self.assertEqual(members[0]['valkrets'], 'Stockholms kommun')
        self.assertEqual(mock_fetch.call_args.kwargs['params'], {'utformat': 'json', 'rdlstatus': 'tjg'})


@override_settings(OPENAUSTRALIA_API_KEY='oa-key')
class AustraliaSyncTests(SimpleTestCase):
    """Test per-state senator fetching."""

    @patch(f'{COUNTRIES}.australia.fetch_json')
    def test_failing_state_is_skipped(self, mock_fetch):
        def fake_fetch(url, params=None, timeout=None):
            if params['state'] == 'NSW':
                raise UpstreamUnavailable()
            return [{'full_name': f"{params['state']} Senator", 'first_name': 'Sam', 'last_name': 'Smith'}]

        mock_fetch.side_effect = fake_fetch

        senators = australia.fetch_senators()

        self.assertEqual(len(senators), 7)
        self.assertNotIn('NSW', {s['state'] for s in senators})
        self.assertTrue(all(s['type'] == 'sen' for s in senators))
        self.assertEqual(senators[0]['email'], 'sam.smith@aph.gov.au')

    @patch(f'{COUNTRIES}.australia.fetch_json')
    def test_no_state_returns_senators(self, mock_fetch):
        mock_fetch.return_value = []

        with self.assertRaises(UpstreamUnavailable):
            australia.fetch_senators()

# ABOUTME: Test the /reps and /sync-reps JSON endpoints.
# ABOUTME: Services are patched; these tests check status codes and response shapes.

from unittest.mock import patch

from django.core.exceptions import ImproperlyConfigured
from django.test import SimpleTestCase, override_settings

from reps.exceptions import DataNotCached, InvalidMemberState, UpstreamUnavailable
from reps.records import Representative

QUERY = 'reps.views.RepresentativeQueryService.find'
SYNC = 'reps.views.RepresentativeSyncService.sync'
SUMMARY = 'reps.views.RepresentativeCache.summary'


class RepsLookupViewTests(SimpleTestCase):
    """Test GET /reps."""

    @patch(QUERY)
    def test_returns_serialized_reps(self, mock_find):
        mock_find.return_value = [Representative(
            name='Nickie Aiken', district='Cities of London and Westminster', country='UK',
            title='Member of Parliament', type='mp', party='Conservative',
        )]

        response = self.client.get('/reps', {'country': 'UK', 'postal': 'SW1A 1AA'})

        self.assertEqual(response.status_code, 200)
        rep = response.json()['reps'][0]
        self.assertEqual(rep['name'], 'Nickie Aiken')
        self.assertEqual(rep['party'], 'Conservative')
        self.assertEqual(rep['email'], '')
        country, locator = mock_find.call_args.args
        self.assertEqual(country, 'UK')
        self.assertEqual(locator.postal, 'SW1A 1AA')

    def test_missing_country(self):
        response = self.client.get('/reps', {'postal': '10117'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Missing country parameter'})

    def test_missing_postal(self):
        response = self.client.get('/reps', {'country': 'FR'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Missing postal parameter'})

    def test_invalid_canadian_postal_code(self):
        response = self.client.get('/reps', {'country': 'CA', 'postal': '12345'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Invalid format.'})

    def test_unsupported_country(self):
        response = self.client.get('/reps', {'country': 'JP', 'postal': '1000001'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Unsupported country'})

    @patch(QUERY)
    def test_member_state_is_passed_for_eu(self, mock_find):
        mock_find.side_effect = InvalidMemberState()

        response = self.client.get('/reps', {'country': 'EU', 'memberState': 'XX'})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(mock_find.call_args.args[1].member_state, 'XX')

    @patch(QUERY)
    def test_unsynced_data_reports_needs_sync(self, mock_find):
        mock_find.side_effect = DataNotCached(cache_key='reps:france:deputies')

        response = self.client.get('/reps', {'country': 'FR', 'postal': '75001'})

        self.assertEqual(response.status_code, 503)
        body = response.json()
        self.assertTrue(body['needsSync'])
        self.assertIn('retryAfter', body)

    @patch(QUERY)
    def test_upstream_failure_is_retryable(self, mock_find):
        mock_find.side_effect = UpstreamUnavailable()

        response = self.client.get('/reps', {'country': 'UK', 'postal': 'SW1A 1AA'})

        self.assertEqual(response.status_code, 503)
        self.assertTrue(response.json()['retryable'])

    @patch(QUERY)
    def test_unexpected_error_is_500(self, mock_find):
        mock_find.side_effect = ImproperlyConfigured('GEOCODIO_API_KEY is not set')

        with self.assertLogs('reps.services', level='ERROR'):
            response = self.client.get('/reps', {'country': 'US', 'postal': '20500'})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'error': 'GEOCODIO_API_KEY is not set'})

    def test_post_not_allowed(self):
        response = self.client.post('/reps')

        self.assertEqual(response.status_code, 405)


class SyncRepsViewTests(SimpleTestCase):
    """Test GET/POST /sync-reps."""

    @patch(SUMMARY)
    def test_get_returns_status(self, mock_summary):
        mock_summary.return_value = {'lastSync': None, 'france': {'cached': False, 'count': 0}}

        response = self.client.get('/sync-reps')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['france'], {'cached': False, 'count': 0})

    @override_settings(SYNC_SECRET='')
    @patch(SYNC)
    def test_post_runs_sync(self, mock_sync):
        mock_sync.return_value = {
            'success': True,
            'results': {'france': {'success': True, 'count': 577}},
            'syncedAt': '2026-01-01T00:00:00+00:00',
        }

        response = self.client.post('/sync-reps')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['results']['france']['count'], 577)
        mock_sync.assert_called_once_with()

    @override_settings(SYNC_SECRET='s3cret')
    @patch(SYNC)
    def test_post_with_wrong_secret_is_forbidden(self, mock_sync):
        response = self.client.post('/sync-reps?secret=wrong')

        self.assertEqual(response.status_code, 403)
        mock_sync.assert_not_called()

    @override_settings(SYNC_SECRET='s3cret')
    @patch(SYNC)
    def test_post_with_secret(self, mock_sync):
        mock_sync.return_value = {'success': True, 'results': {}, 'syncedAt': '2026-01-01T00:00:00+00:00'}

        response = self.client.post('/sync-reps?secret=s3cret')

        self.assertEqual(response.status_code, 200)

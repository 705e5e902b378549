# ABOUTME: Test the Representative/Locator records and the email name helpers.
# ABOUTME: Covers wire serialization and the best-effort MEP address heuristic.

from django.test import SimpleTestCase

from reps.constants import dotted_email, mep_email
from reps.records import Locator, Representative


class RepresentativeRecordTests(SimpleTestCase):
    """Test Representative normalization and serialization."""

    def test_to_dict_uses_camel_case_and_omits_missing_optionals(self):
        rep = Representative(
            name=' Jane Doe ',
            district='CA-12',
            country='US',
            title='Representative',
            type='rep',
            bioguide_id='D000001',
            contact_form='https://doe.house.gov/contact',
        )

        data = rep.to_dict()

        self.assertEqual(data['name'], 'Jane Doe')
        self.assertEqual(data['bioguideId'], 'D000001')
        self.assertEqual(data['contactForm'], 'https://doe.house.gov/contact')
        self.assertEqual(data['email'], '')
        self.assertEqual(data['photo'], '')
        self.assertNotIn('party', data)
        self.assertNotIn('memberState', data)

    def test_none_email_and_photo_become_empty_strings(self):
        rep = Representative(name='A', district='B', country='UK', title='Member of Parliament',
                             type='mp', email=None, photo=None)
        self.assertEqual(rep.email, '')
        self.assertEqual(rep.photo, '')

    def test_is_complete_requires_name_and_district(self):
        self.assertTrue(Representative('A', 'B', 'FR', 'Député(e)', 'mp').is_complete)
        self.assertFalse(Representative('A', '  ', 'FR', 'Député(e)', 'mp').is_complete)
        self.assertFalse(Representative('', 'B', 'FR', 'Député(e)', 'mp').is_complete)

    def test_unknown_country_or_type_is_rejected(self):
        with self.assertRaises(ValueError):
            Representative('A', 'B', 'XX', 'Title', 'mp')
        with self.assertRaises(ValueError):
            Representative('A', 'B', 'UK', 'Title', 'lord')


class LocatorTests(SimpleTestCase):
    """Test building a Locator from query parameters."""

    def test_from_query_strips_and_blanks_become_none(self):
        locator = Locator.from_query({'postal': ' 10117 ', 'street': '', 'memberState': 'de'})

        self.assertEqual(locator.postal, '10117')
        self.assertIsNone(locator.street)
        self.assertIsNone(locator.city)
        self.assertEqual(locator.member_state, 'de')

    def test_full_address_joins_present_parts(self):
        locator = Locator(postal='20500', street='1600 Pennsylvania Ave NW', city='Washington', state='DC')
        self.assertEqual(locator.full_address(), '1600 Pennsylvania Ave NW Washington DC 20500')


class EmailHelperTests(SimpleTestCase):
    """Test name -> email address construction."""

    def test_dotted_email_keeps_letters_only(self):
        self.assertEqual(dotted_email("Mary-Jo", "O'Brien", 'aph.gov.au'), 'maryjo.obrien@aph.gov.au')

    def test_dotted_email_transliterates_german_umlauts(self):
        self.assertEqual(
            dotted_email('Jürgen', 'Weiß', 'bundestag.de', transliterate=True),
            'juergen.weiss@bundestag.de',
        )

    def test_dotted_email_needs_both_names(self):
        self.assertEqual(dotted_email('Anna', '', 'bundestag.de'), '')

    def test_mep_email_is_plausible_or_empty(self):
        for name in ('Mika AALTOLA', 'Maria Teresa GIMÉNEZ BARBAT', 'X', ''):
            with self.subTest(name=name):
                email = mep_email(name)
                if email:
                    self.assertRegex(email, r'^[a-z-]+\.[a-z-]+@europarl\.europa\.eu$')

    def test_mep_email_simple_name(self):
        self.assertEqual(mep_email('Mika AALTOLA'), 'mika.aaltola@europarl.europa.eu')

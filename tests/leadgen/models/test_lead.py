"""Tests for leadgen.models.lead — wire form of Lead records."""
from leadgen.models.lead import Lead, SocialMedia


class TestLeadToDict:

    def test_camel_case_wire_keys(self):
        lead = Lead(name='A', social_media=SocialMedia(facebook='fb'), image_url='img')
        d = lead.to_dict()
        assert d['socialMedia'] == {'facebook': 'fb', 'instagram': '', 'twitter': '', 'linkedin': ''}
        assert d['imageUrl'] == 'img'
        assert 'social_media' not in d

    def test_defaults_are_empty_strings_not_none(self):
        d = Lead(name='A').to_dict()
        assert all(v is not None for v in d.values())
        assert d['priority'] == ''


class TestLeadFromDict:

    def test_round_trip(self):
        lead = Lead(
            name='A', category='Cafe', priority='High', notes='n',
            social_media=SocialMedia(linkedin='li'), image_url='img',
        )
        assert Lead.from_dict(lead.to_dict()) == lead

    def test_missing_and_null_fields_become_empty(self):
        lead = Lead.from_dict({'name': 'A', 'email': None, 'socialMedia': None})
        assert lead.email == ''
        assert lead.social_media == SocialMedia()

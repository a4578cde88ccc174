"""
CSV export of a lead snapshot.
"""
import csv
import io
from typing import Any, Dict, Iterable, Union

from leadgen.models.lead import Lead

CSV_HEADERS = [
    'Name', 'Category', 'Priority', 'Notes', 'Email', 'Phone', 'Address',
    'Website', 'Image URL', 'Facebook', 'LinkedIn', 'Twitter', 'Instagram',
]


def _row(lead: Lead):
    social = lead.social_media
    return [
        lead.name, lead.category, lead.priority, lead.notes, lead.email,
        lead.phone, lead.address, lead.website, lead.image_url,
        social.facebook, social.linkedin, social.twitter, social.instagram,
    ]


def leads_to_csv(leads: Iterable[Union[Lead, Dict[str, Any]]]) -> str:
    """Every value quoted, one row per lead. Returns '' when there are no leads."""
    leads = [Lead.from_dict(l) if isinstance(l, dict) else l for l in leads or []]
    if not leads:
        return ''

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    for lead in leads:
        writer.writerow(_row(lead))
    return buf.getvalue()

"""
Lead model — one business candidate parsed from the generated text.

Every optional field is a string that defaults to '' ("unknown"), never None,
so consumers never have to tell "absent" from "empty".
"""
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class SocialMedia:
    facebook: str = ''
    instagram: str = ''
    twitter: str = ''
    linkedin: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {
            'facebook': self.facebook,
            'instagram': self.instagram,
            'twitter': self.twitter,
            'linkedin': self.linkedin,
        }


@dataclass
class Lead:
    """A validated lead record. `name` is the identity key and is never empty."""
    name: str
    category: str = ''
    address: str = ''
    phone: str = ''
    website: str = ''
    email: str = ''
    priority: str = ''                    # 'High' | 'Medium' | 'Low' | ''
    notes: str = ''
    social_media: SocialMedia = field(default_factory=SocialMedia)
    image_url: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Wire form consumed by the UI (camelCase keys)."""
        return {
            'name': self.name,
            'category': self.category,
            'address': self.address,
            'phone': self.phone,
            'website': self.website,
            'email': self.email,
            'priority': self.priority,
            'notes': self.notes,
            'socialMedia': self.social_media.to_dict(),
            'imageUrl': self.image_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Lead':
        """Inverse of to_dict(). Missing keys fall back to ''."""
        social = data.get('socialMedia') or {}
        return cls(
            name=data.get('name') or '',
            category=data.get('category') or '',
            address=data.get('address') or '',
            phone=data.get('phone') or '',
            website=data.get('website') or '',
            email=data.get('email') or '',
            priority=data.get('priority') or '',
            notes=data.get('notes') or '',
            social_media=SocialMedia(
                facebook=social.get('facebook') or '',
                instagram=social.get('instagram') or '',
                twitter=social.get('twitter') or '',
                linkedin=social.get('linkedin') or '',
            ),
            image_url=data.get('imageUrl') or '',
        )

"""
Grounding source — one web citation backing the generated text. Keyed by uri.
"""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class GroundingSource:
    uri: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return {'uri': self.uri, 'title': self.title}

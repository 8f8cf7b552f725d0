"""Pull doctor entries out of the prediction Space's markdown prose.

The Space answers with a numbered list where each entry looks like::

    **1. Dr. Smith
    📍123 Elm St
    📞555-1234
    ⭐4.8
    🌐http://x.com

There is no grammar behind this; it is whatever formatting the upstream model
happens to use. Anything unmatched falls back to a default value instead of
raising.
"""
import re
from typing import List, Optional

from healthbuddy.application.ports import DoctorProseParser
from healthbuddy.domain.models import ExtractedDoctor


ENTRY_SPLIT = re.compile(r"\*\*\d+\.\s*")
NAME_PATTERN = re.compile(r"Dr[^\n]*")

GLYPH_FIELDS = {
    "address": re.compile(r"📍(.*)"),
    "phone": re.compile(r"📞(.*)"),
    "rating": re.compile(r"⭐(.*)"),
    "website": re.compile(r"🌐(.*)"),
}


def _is_doctor_block(block: str) -> bool:
    return block.strip().startswith("Dr") or "Dr." in block


class EmojiListDoctorParser:
    """Parses the numbered, emoji-tagged doctor list."""

    def parse(self, text: str) -> List[ExtractedDoctor]:
        if not text:
            return []

        doctors: List[ExtractedDoctor] = []
        for block in ENTRY_SPLIT.split(text):
            if not _is_doctor_block(block):
                continue
            doctors.append(self._parse_block(block))
        return doctors

    def _parse_block(self, block: str) -> ExtractedDoctor:
        fields = {}

        name_match = NAME_PATTERN.search(block)
        if name_match:
            fields["name"] = name_match.group(0).strip()

        for field, pattern in GLYPH_FIELDS.items():
            match = pattern.search(block)
            if match:
                fields[field] = match.group(1).strip()

        return ExtractedDoctor(**fields)


_default_parser = EmojiListDoctorParser()


def extract_doctors(text: str, parser: Optional[DoctorProseParser] = None) -> List[ExtractedDoctor]:
    return (parser or _default_parser).parse(text)


def strip_bold(text: str) -> str:
    return text.replace("**", "")


def specialist_line(text: str) -> str:
    """First line of the specialist block, relabelled for display."""
    first = text.split("\n")[0]
    return strip_bold(first).replace("Recommended Specialist:", "Specialist:")

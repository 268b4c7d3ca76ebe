"""
Immutable wrapper around the prompt shared by every extractor
"""

import re
from dataclasses import dataclass

# Amount with optional thousands separators, e.g. 1,500 or 99.50
AMOUNT_PATTERN = r"(\d+(?:,\d{3})*(?:\.\d{1,2})?)"


@dataclass(frozen=True)
class InvoiceText:
    """The raw prompt and its lowercase form"""
    raw: str

    @property
    def normalized(self) -> str:
        return self.raw.lower()


def parse_amount(value: str) -> float:
    """Convert a matched amount such as '1,500.00' to a float"""
    return float(value.replace(",", ""))


def collapse_whitespace(value: str) -> str:
    return re.sub(r"\s+", " ", value).strip()

"""Item name proposal for content tree items.

Converts arbitrary display names into names that are valid as a tree path
segment, preserving case and readable spacing.
"""

import re

INVALID_NAME_CHARS = r'[\\/:?"<>|\[\]*%]'
MAX_ITEM_NAME_LENGTH = 100
FALLBACK_ITEM_NAME = "Unnamed item"


class ItemNameConverter:
    """Converts display names into valid item names with case preservation.

    Conversion rules:
    - Path and query characters (\\, /, :, ?, ", <, >, |, [, ], *, %) → space
    - Runs of whitespace → single space
    - Leading/trailing spaces and dots → trimmed
    - Names longer than 100 characters → truncated
    - Nothing left → "Unnamed item"

    Examples:
        - "Logo" → "Logo"
        - "Brochure: Spring/Summer" → "Brochure Spring Summer"
        - "  ...  " → "Unnamed item"
    """

    @staticmethod
    def propose_valid_item_name(name: str) -> str:
        """Propose a valid item name for a display name.

        Args:
            name: Display name, possibly containing invalid characters

        Returns:
            A name safe to use as a single tree path segment

        Examples:
            >>> ItemNameConverter.propose_valid_item_name("Q&A: Setup")
            'Q&A Setup'
            >>> ItemNameConverter.propose_valid_item_name("logo.png")
            'logo.png'
        """
        proposed = re.sub(INVALID_NAME_CHARS, ' ', name or '')
        proposed = re.sub(r'\s+', ' ', proposed)
        proposed = proposed.strip(' .')

        if len(proposed) > MAX_ITEM_NAME_LENGTH:
            proposed = proposed[:MAX_ITEM_NAME_LENGTH].rstrip(' .')

        return proposed or FALLBACK_ITEM_NAME

"""
Group Page Parsers - Transform Layer

Pure functions for pulling identifiers out of fetched group pages.
"""

import re
from typing import Optional

# Deep link embedded in group pages, e.g. <meta content="fb://group/1234">
FB_GROUP_ID_REGEX = re.compile(r'"fb://group/(\d+)"')

# Same link inside inline JSON, where slashes are escaped
FB_GROUP_ID_ESCAPED_REGEX = re.compile(r'"fb:\\/\\/group\\/(\d+)"')

GROUP_ID_PATTERNS = (FB_GROUP_ID_REGEX, FB_GROUP_ID_ESCAPED_REGEX)


def extract_group_id(html: Optional[str]) -> Optional[str]:
    """
    Find the Facebook group id in a group page

    Args:
        html: Page body

    Returns:
        Optional[str]: Digits of the first group deep link, or None
    """
    if not html:
        return None

    for pattern in GROUP_ID_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)

    return None

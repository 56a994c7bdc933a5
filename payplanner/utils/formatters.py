"""
Data formatting utilities
"""

from typing import Optional

ELLIPSIS = '…'

def truncate_text(text: Optional[str], limit: int, marker: str = ELLIPSIS) -> Optional[str]:
    """Cut text to limit characters, appending a marker when shortened"""
    if text is None or len(text) <= limit:
        return text
    return text[:limit] + marker

def fit_column(text: Optional[str], limit: int) -> Optional[str]:
    """Hard cut to a column width, no marker"""
    if text is None:
        return None
    return text[:limit]

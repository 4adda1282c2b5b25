"""
Helper utility functions
"""
import re
from typing import Optional
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


def sanitize_search_query(query: str) -> str:
    """Sanitize search query"""
    # Remove special characters that could be problematic
    sanitized = re.sub(r'[<>"\';\\]', '', query)
    return sanitized.strip()


def extract_year_from_date(date_str: Optional[str]) -> Optional[int]:
    """Extract year from date string"""
    if not date_str:
        return None

    try:
        return datetime.fromisoformat(date_str.replace('Z', '+00:00')).year
    except (ValueError, AttributeError):
        return None


def build_image_url(base_url: str, size: str, path: Optional[str]) -> Optional[str]:
    """Build a TMDB image URL from a poster/backdrop path"""
    if not path:
        return None
    return f"{base_url}/{size}{path}"

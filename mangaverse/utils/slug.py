"""
Slug generation utilities.
"""

import re
import unicodedata


def generate_slug(text: str, max_length: int = 100) -> str:
    """
    Build a lowercase, hyphenated, accent-free slug.

    ``"One Piece"`` and ``"one-piece"`` both become ``"one-piece"``.
    """
    # "đ" has no decomposition
    text = text.replace("đ", "d").replace("Đ", "D")

    # Decompose accented characters, then drop the combining marks
    text = unicodedata.normalize("NFKD", text)
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)

    # Spaces and underscores become dashes
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")

    return text[:max_length].rstrip("-")

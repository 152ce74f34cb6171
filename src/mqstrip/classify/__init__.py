"""Rule classifier: pure predicates and partitions over stylesheet nodes."""

from mqstrip.classify.rules import (
    condition_matches,
    is_extract_candidate,
    is_matching_media,
    is_not_extract_candidate,
    is_plain_or_non_matching_media,
    matching_media,
    strip_and_extract,
    strip_nodes,
    stripped_content,
)

__all__ = [
    "condition_matches",
    "is_extract_candidate",
    "is_matching_media",
    "is_not_extract_candidate",
    "is_plain_or_non_matching_media",
    "matching_media",
    "strip_and_extract",
    "strip_nodes",
    "stripped_content",
]

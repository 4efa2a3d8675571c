"""Announce-list (BEP12) helpers."""

AnnounceList = list[list[str]]


def overrides_announce(announce_list: AnnounceList, announce: str) -> bool:
    """Whether the tiered list should be used in place of the single announce URL.

    It does when it holds any non-empty URL, or any entry at all when there
    is no primary announce URL to lose.
    """
    for tier in announce_list:
        for url in tier:
            if url or not announce:
                return True
    return False


def upvert(announce_list: AnnounceList, announce: str) -> AnnounceList:
    if overrides_announce(announce_list, announce):
        return announce_list
    if announce:
        return [[announce]]
    return []


def distinct_values(announce_list: AnnounceList) -> list[str]:
    """Return every URL once, in first-seen order."""
    seen: dict[str, None] = {}
    for tier in announce_list:
        for url in tier:
            seen.setdefault(url, None)
    return list(seen)

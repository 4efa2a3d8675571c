"""Magnet link view of a torrent."""

from dataclasses import dataclass, field
from urllib.parse import urlencode

from torrent_metainfo.hashing import Hash


@dataclass
class Magnet:
    info_hash: Hash
    display_name: str = ""
    trackers: list[str] = field(default_factory=list)
    params: dict[str, list[str]] = field(default_factory=dict)

    def __str__(self) -> str:
        values: dict[str, list[str]] = {k: list(v) for k, v in self.params.items()}
        for tracker in self.trackers:
            values.setdefault("tr", []).append(tracker)
        if self.display_name:
            values.setdefault("dn", []).append(self.display_name)
        # Clients expect "urn:btih:" unescaped
        query = f"xt=urn:btih:{self.info_hash.hex()}"
        pairs = [(k, v) for k in sorted(values) for v in values[k]]
        if pairs:
            query += "&" + urlencode(pairs)
        return f"magnet:?{query}"

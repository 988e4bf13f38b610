from __future__ import annotations

import re
from typing import List

# Link captures are capped at 1000 chars.
_RSS_LINK_RE = re.compile(r"<link>([^<]{1,1000})</link>")
_ATOM_LINK_RE = re.compile(r"""<link[^>]+href=["']([^"']{1,1000})["'][^>]*>""")


def is_cap_alert_link(link: str) -> bool:
    return "/cap/" in link or "alert" in link


def extract_alert_links(feed_text: str) -> List[str]:
    """
    Candidate CAP alert URLs from an RSS or Atom feed, first-seen order.

    RSS <link>text</link> matches come before Atom <link href="..."> ones.
    An empty list is a normal result (no active alerts).
    """
    links: List[str] = []
    for rx in (_RSS_LINK_RE, _ATOM_LINK_RE):
        for m in rx.finditer(feed_text or ""):
            link = m.group(1).strip()
            if is_cap_alert_link(link):
                links.append(link)

    return list(dict.fromkeys(links))

"""Link header entries used for pagination navigation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class LinkHeader:
    """A single navigation link: ``<uri>; rel="next"; range="10-19"``."""

    uri: str
    rel: str
    range: str

    def __str__(self) -> str:
        return f'<{self.uri}>; rel="{self.rel}"; range="{self.range}"'


@dataclass(frozen=True)
class LinkHeaders:
    """Ordered collection of navigation links, rendered comma-joined."""

    links: tuple[LinkHeader, ...]

    def __str__(self) -> str:
        return ", ".join(str(link) for link in self.links)

    def __iter__(self) -> Iterator[LinkHeader]:
        return iter(self.links)

    def __len__(self) -> int:
        return len(self.links)

    def get(self, rel: str) -> LinkHeader | None:
        """Return the link with relation *rel*, or ``None``."""
        for link in self.links:
            if link.rel == rel:
                return link
        return None

    def as_dict(self) -> dict[str, str]:
        """Map each relation name to its range string."""
        return {link.rel: link.range for link in self.links}

"""Allowlist policy: which tags survive and which attributes they may carry."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Policy:
    """Immutable tag → allowed-attribute table.

    Tags missing from ``allowed_attributes`` are disallowed. Names are
    normalized to lowercase so lookups are case-insensitive.
    """

    allowed_attributes: Mapping[str, Collection[str]]
    url_attributes: Collection[str] = field(default_factory=lambda: frozenset({"href", "src"}))

    def __post_init__(self) -> None:
        # Accept plain dicts/lists from callers, freeze for sharing across calls.
        normalized = {
            str(tag).lower(): frozenset(str(a).lower() for a in attrs)
            for tag, attrs in self.allowed_attributes.items()
        }
        object.__setattr__(self, "allowed_attributes", MappingProxyType(normalized))
        object.__setattr__(
            self, "url_attributes", frozenset(str(a).lower() for a in self.url_attributes)
        )

    @property
    def allowed_tags(self) -> frozenset[str]:
        return frozenset(self.allowed_attributes)

    def allows_tag(self, tag: str) -> bool:
        return tag.lower() in self.allowed_attributes

    def allows_attribute(self, tag: str, name: str) -> bool:
        return name.lower() in self.allowed_attributes.get(tag.lower(), frozenset())

    def is_url_attribute(self, name: str) -> bool:
        return name.lower() in self.url_attributes

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Collection[str]]) -> "Policy":
        return cls(allowed_attributes=mapping)


AD_POLICY: Policy = Policy(
    allowed_attributes={
        "p": [],
        "br": [],
        "strong": [],
        "b": [],
        "em": [],
        "i": [],
        "a": ["href", "title", "target"],
        "img": ["src", "alt", "width", "height", "class"],
        "div": ["class"],
        "span": ["class"],
    },
)

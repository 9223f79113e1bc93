"""Collection of tags keyed by tag key."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from tracewire.tags.tag import Tag


class TagMap:
    """Map of tag key to Tag; adding a tag with an existing key replaces it."""

    def __init__(self, tags: Iterable[Tag] = ()) -> None:
        self._tags: Dict[str, Tag] = {tag.key: tag for tag in tags}

    def add(self, tag: Tag) -> None:
        self._tags[tag.key] = tag

    def delete(self, key: str) -> None:
        self._tags.pop(key, None)

    @property
    def tags(self) -> List[Tag]:
        return list(self._tags.values())

    def is_empty(self) -> bool:
        return not self._tags

    def __getitem__(self, key: str) -> Optional[Tag]:
        return self._tags.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._tags

    def __iter__(self) -> Iterator[Tag]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self._tags)

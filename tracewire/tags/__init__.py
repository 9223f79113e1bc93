"""Tag key/value context."""

from tracewire.tags.tag import Tag
from tracewire.tags.tag_map import TagMap

__all__ = ["Tag", "TagMap"]

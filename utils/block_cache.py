"""
Session-scoped block map cache.
The calendar GET stores each room's block map here; the calendar POST reads
and clears it. Lifetime is the session lifetime.
"""

from models.errors import MissingCacheState

KEY_PREFIX = 'block_map_'


class BlockMapCache:
    """
    Keyed cache of per-room block maps over any mapping-like store.

    Args:
        store: Mapping with item access and pop(), e.g. flask.session
    """

    def __init__(self, store):
        self._store = store

    @staticmethod
    def key(room_id: int) -> str:
        return f'{KEY_PREFIX}{room_id}'

    def put(self, room_id: int, block_map: dict) -> None:
        self._store[self.key(room_id)] = dict(block_map)

    def get(self, room_id: int) -> dict:
        """
        Cached block map for a room.

        Raises:
            MissingCacheState: If nothing was cached for the room
        """
        value = self._store.get(self.key(room_id))
        if value is None:
            raise MissingCacheState(room_id)
        return {day: int(restriction_id) for day, restriction_id in value.items()}

    def pop(self, room_id: int) -> dict:
        """Cached block map for a room, removed from the cache."""
        block_map = self.get(room_id)
        self._store.pop(self.key(room_id), None)
        return block_map

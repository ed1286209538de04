"""
Calendar block reconciliation.
Turns a posted calendar form into owner block deletes and inserts by
diffing it against the block maps cached when the calendar was rendered.

Form fields:
    keep_block_<room_id>_<YYYY-MM-DD>  existing block stays
    add_block_<room_id>_<YYYY-MM-DD>   new one-day block

Every cached block without a keep field is deleted. Reservation
restrictions are never touched.
"""

import re
from dataclasses import dataclass, field
from datetime import timedelta

from models.errors import BookingError, MissingCacheState
from models.restriction import RestrictionKind, RoomRestriction
from utils.datetime_helpers import parse_date

KEEP_PREFIX = 'keep_block'
ADD_PREFIX = 'add_block'

ADD_FIELD_RE = re.compile(r'^add_block_(\d+)_(\d{4}-\d{2}-\d{2})$')


def keep_field(room_id: int, day: str) -> str:
    return f'{KEEP_PREFIX}_{room_id}_{day}'


def add_field(room_id: int, day: str) -> str:
    return f'{ADD_PREFIX}_{room_id}_{day}'


@dataclass
class BlockChanges:
    """Planned mutations: deletes are (room_id, restriction_id), inserts (room_id, date)."""

    deletes: list = field(default_factory=list)
    inserts: list = field(default_factory=list)


@dataclass
class ReconcileResult:
    deleted: list = field(default_factory=list)
    unchanged: list = field(default_factory=list)
    inserted: list = field(default_factory=list)
    failed: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def plan_block_changes(cached_maps: dict, posted_fields, logger=None) -> BlockChanges:
    """
    Diff cached block maps against posted form field names.

    Args:
        cached_maps: {room_id: {'YYYY-MM-DD': restriction_id or 0}}
        posted_fields: Iterable of posted field names
        logger: Optional logger for ignored fields

    Returns:
        BlockChanges
    """
    posted = set(posted_fields)
    changes = BlockChanges()
    kept = set()

    for room_id, block_map in cached_maps.items():
        for day, restriction_id in sorted(block_map.items()):
            if restriction_id <= 0:
                continue
            if keep_field(room_id, day) in posted:
                kept.add((room_id, day))
            else:
                changes.deletes.append((room_id, restriction_id))

    for name in sorted(posted):
        if not name.startswith(ADD_PREFIX):
            continue

        match = ADD_FIELD_RE.match(name)
        if not match:
            if logger:
                logger.warning(f'Ignoring malformed block field {name!r}')
            continue

        room_id = int(match.group(1))
        day = match.group(2)
        try:
            start = parse_date(day)
        except ValueError:
            if logger:
                logger.warning(f'Ignoring block field with invalid date {name!r}')
            continue

        if (room_id, day) in kept:
            continue
        changes.inserts.append((room_id, start))

    return changes


def apply_block_changes(ctx, changes: BlockChanges) -> ReconcileResult:
    """
    Execute planned block changes one by one.

    A failing item is logged and recorded; the remaining items still run.
    A delete that removes nothing (block already gone, or not an owner
    block) is recorded as unchanged, not as a failure.
    """
    result = ReconcileResult()

    for room_id, restriction_id in changes.deletes:
        try:
            found = ctx.store.delete_by_id(restriction_id, kind=RestrictionKind.OWNER_BLOCK)
        except BookingError as e:
            ctx.logger.error(f'Failed to delete block {restriction_id} of room {room_id}: {e}')
            result.failed.append(('delete', room_id, restriction_id))
            continue

        if not found:
            ctx.logger.info(f'Block {restriction_id} of room {room_id} not removed: no owner block with that id')
            result.unchanged.append(restriction_id)
            continue
        result.deleted.append(restriction_id)

    for room_id, start in changes.inserts:
        block = RoomRestriction(
            room_id=room_id,
            start_date=start,
            end_date=start + timedelta(days=1),
            restriction_kind=RestrictionKind.OWNER_BLOCK,
        )
        try:
            block_id = ctx.store.insert(block)
        except (BookingError, ValueError) as e:
            ctx.logger.error(f'Failed to add block for room {room_id} on {start}: {e}')
            result.failed.append(('insert', room_id, start))
            continue

        result.inserted.append((room_id, start, block_id))

    return result


def reconcile_calendar(ctx, room_ids, cache, posted_fields) -> ReconcileResult:
    """
    Apply a posted calendar form using the cached block maps.

    Each room's cached map is consumed. A room without a cached map is
    treated as having no blocks, so only adds apply to it.

    Args:
        ctx: Booking context
        room_ids: Rooms shown on the submitted calendar
        cache: BlockMapCache
        posted_fields: Iterable of posted field names

    Returns:
        ReconcileResult
    """
    cached_maps = {}
    for room_id in room_ids:
        try:
            cached_maps[room_id] = cache.pop(room_id)
        except MissingCacheState as e:
            ctx.logger.warning(f'{e}; applying adds only')
            cached_maps[room_id] = {}

    changes = plan_block_changes(cached_maps, posted_fields, logger=ctx.logger)
    result = apply_block_changes(ctx, changes)

    ctx.logger.info(
        f'Calendar saved: {len(result.deleted)} blocks removed, '
        f'{len(result.inserted)} added, {len(result.unchanged)} unchanged, '
        f'{len(result.failed)} failed'
    )
    return result

"""Tab ordering by file type and name.

Ordering rules, applied per pair:

1. If a custom type order is given and both extensions appear in it, order by
   position in that list, then by file name.
2. If only one extension appears in it, that tab goes first.
3. Otherwise order by extension, then by file name.

Extensions are lower-cased without the leading dot.  The path comes from the
document URI, the modified side of a diff, or, for unresolved panes, the label
read as if it were a path.
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Sequence
from functools import cmp_to_key
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from loguru import logger

from tabkeeper.execution.extractor import extract_descriptors
from tabkeeper.models.enums import DescriptorKind
from tabkeeper.models.tab import TabDescriptor, uri_to_path
from tabkeeper.models.workspace import TabStatistics

if TYPE_CHECKING:
    from tabkeeper.execution.reopen import TabReopener
    from tabkeeper.host.base import EditorHost
    from tabkeeper.models.workspace import ReopenResult

NO_EXTENSION = "no-extension"


def _descriptor_path(descriptor: TabDescriptor) -> str | None:
    if descriptor.kind == DescriptorKind.UNRESOLVED:
        return None
    return uri_to_path(descriptor.resolved_uri)


def file_extension(descriptor: TabDescriptor) -> str:
    path = _descriptor_path(descriptor)
    suffix = PurePosixPath(path if path is not None else descriptor.label).suffix
    return suffix[1:].lower()


def sort_key(descriptor: TabDescriptor) -> str:
    path = _descriptor_path(descriptor)
    if path is None:
        return descriptor.label.lower()
    return PurePosixPath(path).name.lower()


def normalize_custom_order(custom_order: Sequence[str]) -> list[str]:
    """``[" .TS", "md"]`` -> ``["ts", "md"]``; blanks dropped."""
    normalized = []
    for entry in custom_order:
        ext = entry.strip().lower().removeprefix(".")
        if ext:
            normalized.append(ext)
    return normalized


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_descriptors(a: TabDescriptor, b: TabDescriptor, custom_order: Sequence[str] = ()) -> int:
    a_ext, b_ext = file_extension(a), file_extension(b)
    a_key, b_key = sort_key(a), sort_key(b)

    if custom_order:
        a_index = custom_order.index(a_ext) if a_ext in custom_order else -1
        b_index = custom_order.index(b_ext) if b_ext in custom_order else -1
        if a_index != -1 and b_index != -1:
            if a_index != b_index:
                return a_index - b_index
            return _cmp(a_key, b_key)
        if a_index != -1:
            return -1
        if b_index != -1:
            return 1

    if a_ext != b_ext:
        return _cmp(a_ext, b_ext)
    return _cmp(a_key, b_key)


def sort_descriptors(descriptors: Sequence[TabDescriptor], custom_order: Sequence[str] = ()) -> list[TabDescriptor]:
    """Return a new list in tab order.  Input is not modified."""
    order = normalize_custom_order(custom_order)
    return sorted(descriptors, key=cmp_to_key(lambda a, b: compare_descriptors(a, b, order)))


class TabSorter:
    """Reorders the live pane set by closing and reopening it in sorted order."""

    def __init__(self, host: EditorHost, reopener: TabReopener, *, lock: asyncio.Lock | None = None) -> None:
        self._host = host
        self._reopener = reopener
        self._lock = lock or asyncio.Lock()

    async def sort_tabs(self, custom_order: Sequence[str] = ()) -> ReopenResult | None:
        """Sort all open tabs.  Returns ``None`` when there is nothing to sort (0 or 1 tab)."""
        async with self._lock:
            panes = await self._host.list_open_panes()
            if len(panes) <= 1:
                logger.debug("Sort skipped: {} open tab(s)", len(panes))
                return None

            ordered = sort_descriptors(extract_descriptors(panes), custom_order)
            result = await self._reopener.execute(ordered, live_panes=panes)
        logger.info("Sorted tabs: {} reopened, {} skipped", result.opened, result.skipped)
        return result

    async def tab_statistics(self) -> TabStatistics:
        descriptors = extract_descriptors(await self._host.list_open_panes())
        counts = Counter(file_extension(d) or NO_EXTENSION for d in descriptors)
        return TabStatistics(total_tabs=len(descriptors), tabs_by_extension=dict(counts))

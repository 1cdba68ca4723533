"""Close-then-reopen executor.

Tears down every open pane in one batch and rebuilds the pane list from an
ordered sequence of descriptors.  The host offers no completion barrier for
close or open requests, so the executor paces itself:

- ``settle_delay`` after the batch close, before the first open;
- ``open_delay`` between successive opens.

Individual panes that fail to open are logged, recorded and skipped.  Only a
failure of the batch close aborts the pass.  There is no rollback: panes
opened before a later failure stay open.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from loguru import logger

from tabkeeper.execution.extractor import active_descriptor, extract_descriptors
from tabkeeper.models.enums import DescriptorKind, SkipReason
from tabkeeper.models.workspace import PaneFailure, ReopenResult

if TYPE_CHECKING:
    from tabkeeper.host.base import EditorHost
    from tabkeeper.models.tab import Pane, TabDescriptor

DEFAULT_SETTLE_DELAY = 0.1
DEFAULT_OPEN_DELAY = 0.05

_BINARY_MARKERS = ("binary", "cannot be opened as text")


class BatchCloseError(RuntimeError):
    """Raised when the host refuses to close the current panes."""


def classify_failure(exc: BaseException) -> SkipReason:
    """Binary resources are an expected skip; anything else is unreadable."""
    message = str(exc).lower()
    if any(marker in message for marker in _BINARY_MARKERS):
        return SkipReason.BINARY
    return SkipReason.UNREADABLE


class TabReopener:
    """Replaces the live pane set with an ordered target sequence."""

    def __init__(
        self,
        host: EditorHost,
        *,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        open_delay: float = DEFAULT_OPEN_DELAY,
    ) -> None:
        self._host = host
        self.settle_delay = settle_delay
        self.open_delay = open_delay

    async def execute(
        self,
        targets: Sequence[TabDescriptor],
        *,
        live_panes: list[Pane] | None = None,
    ) -> ReopenResult:
        """Close everything, reopen ``targets`` in order and restore focus.

        ``live_panes`` lets a caller that already listed the panes skip a
        second host round-trip.  Raises ``BatchCloseError`` if the close fails.
        """
        if live_panes is None:
            live_panes = await self._host.list_open_panes()
        previously_active = active_descriptor(extract_descriptors(live_panes))

        if live_panes:
            try:
                await self._host.close_panes(live_panes, force=True)
            except Exception as exc:
                logger.error("Failed to close {} open tab(s): {}", len(live_panes), exc)
                raise BatchCloseError(str(exc)) from exc
            await asyncio.sleep(self.settle_delay)

        result = ReopenResult()
        reopened: list[TabDescriptor] = []
        for index, descriptor in enumerate(targets):
            if index:
                await asyncio.sleep(self.open_delay)
            failure = await self._open_one(descriptor)
            if failure is None:
                result.opened += 1
                reopened.append(descriptor)
            else:
                result.skipped += 1
                result.failures.append(failure)

        if previously_active is not None and previously_active.is_resolvable:
            if any(previously_active.same_target(d) for d in reopened):
                await self._restore_focus(previously_active)

        return result

    # -- Per-pane --------------------------------------------------------------

    async def _open_one(self, descriptor: TabDescriptor) -> PaneFailure | None:
        try:
            match descriptor.kind:
                case DescriptorKind.DOCUMENT:
                    await self._host.stat_resource(descriptor.uri)
                    document = await self._host.open_document(descriptor.uri)
                    await self._host.show_document(
                        document,
                        view_column=descriptor.view_column,
                        preview=not descriptor.is_pinned,
                        focus=False,
                    )
                case DescriptorKind.DIFF:
                    await self._host.open_diff(
                        descriptor.original_uri,
                        descriptor.modified_uri,
                        descriptor.label,
                        view_column=descriptor.view_column,
                        preview=not descriptor.is_pinned,
                    )
                case _:
                    logger.debug("Skipping tab without a resource: {}", descriptor.label)
                    return PaneFailure(label=descriptor.label, reason=SkipReason.UNSUPPORTED)
        except Exception as exc:
            reason = classify_failure(exc)
            uri = descriptor.resolved_uri
            if reason == SkipReason.BINARY:
                logger.debug("Skipped binary file: {}", uri)
            else:
                logger.error("Failed to open {}: {}", uri, exc)
            return PaneFailure(label=descriptor.label, uri=uri, reason=reason, message=str(exc))

        logger.debug("Opened {}", descriptor.resolved_uri)
        return None

    async def _restore_focus(self, descriptor: TabDescriptor) -> None:
        try:
            if descriptor.kind == DescriptorKind.DIFF:
                await self._host.open_diff(
                    descriptor.original_uri,
                    descriptor.modified_uri,
                    descriptor.label,
                    view_column=descriptor.view_column,
                    preview=not descriptor.is_pinned,
                )
            else:
                document = await self._host.open_document(descriptor.uri)
                await self._host.show_document(
                    document,
                    view_column=descriptor.view_column,
                    preview=not descriptor.is_pinned,
                    focus=True,
                )
        except Exception as exc:
            logger.warning("Failed to restore focus to {}: {}", descriptor.label, exc)

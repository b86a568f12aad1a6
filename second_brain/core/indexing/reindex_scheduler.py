"""
Single-flight reindex scheduler.

Runs background reindex passes as detached asyncio tasks, at most one per
document. Edits arriving during a pass mark the document dirty; exactly one
follow-up pass runs once the current pass ends, however many edits arrived.

Dependencies: asyncio, sqlalchemy, second_brain.core.indexing.indexer
System role: Asynchronous index maintenance after note edits
"""

import asyncio
import logging
import uuid
from typing import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from second_brain.core.document_processing import IndexResult
from second_brain.core.indexing.indexer import Indexer
from second_brain.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

ReindexPass = Callable[[uuid.UUID, uuid.UUID], Awaitable[IndexResult]]


def session_scoped_pass(
    indexer: Indexer,
    session_factory: async_sessionmaker[AsyncSession],
) -> ReindexPass:
    """Build a reindex pass that opens its own database session."""

    async def run(document_id: uuid.UUID, owner_id: uuid.UUID) -> IndexResult:
        async with session_factory() as session:
            return await indexer.reindex(session, document_id, owner_id)

    return run


class ReindexScheduler:
    """Coalescing, single-flight background reindexing."""

    def __init__(self, run_pass: ReindexPass) -> None:
        self._run_pass = run_pass
        self._tasks: dict[uuid.UUID, asyncio.Task] = {}
        self._owners: dict[uuid.UUID, uuid.UUID] = {}
        self._dirty: set[uuid.UUID] = set()

    def is_running(self, document_id: uuid.UUID) -> bool:
        return document_id in self._tasks

    async def schedule(self, document_id: uuid.UUID, owner_id: uuid.UUID) -> None:
        """
        Request a reindex of document_id.

        Starts a pass when none is in flight, otherwise marks the
        document for one follow-up pass.
        """
        self._owners[document_id] = owner_id
        if self.is_running(document_id):
            self._dirty.add(document_id)
            logger.debug(f"{__name__}:schedule - document_id={document_id} marked dirty")
            return

        task = asyncio.create_task(self._run(document_id), name=f"reindex-{document_id}")
        self._tasks[document_id] = task

    async def _run(self, document_id: uuid.UUID) -> None:
        try:
            while True:
                self._dirty.discard(document_id)
                owner_id = self._owners[document_id]
                try:
                    result = await self._run_pass(document_id, owner_id)
                    logger.info(
                        f"{__name__}:_run - document_id={document_id} "
                        f"chunks_created={result.chunks_created}"
                    )
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    log_exception_with_context(
                        logger,
                        "Background reindex failed",
                        e,
                        document_id=str(document_id),
                        owner_id=str(owner_id),
                    )
                if document_id not in self._dirty:
                    break
        finally:
            self._tasks.pop(document_id, None)
            self._owners.pop(document_id, None)
            self._dirty.discard(document_id)

    async def drain(self) -> None:
        """Wait until no pass is in flight, including follow-up passes."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel outstanding passes and wait for them to unwind."""
        tasks = list(self._tasks.values())
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info(f"{__name__}:shutdown - cancelled {len(tasks)} reindex task(s)")

"""
Batched write operations on top of the elasticsearch bulk helpers.
"""

import json
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from elasticsearch import helpers

from es_types.errors import EmptyInputError, OperationError
from es_types.primitives import BulkProcessorParameters
from utils.connection import ElasticSession


logger = logging.getLogger(__name__)


class BulkProcessor:
    """
    Buffers bulk actions and sends them in batches.

    A batch is sent when ``bulk_actions`` actions or ``bulk_size`` bytes are
    buffered, every ``flush_interval`` seconds, and on close(). Actions use
    the elasticsearch.helpers format, e.g.
    ``{"_op_type": "index", "_index": "blocks-0", "_id": "1", "_source": {...}}``.
    """

    def __init__(self, session: ElasticSession, params: BulkProcessorParameters):
        if params.workers < 1:
            raise ValueError("Bulk processor needs at least one worker")

        self.session = session
        self.params = params
        self.succeeded = 0
        self.failed = 0

        self._buffer: List[Dict[str, Any]] = []
        self._buffer_bytes = 0
        self._lock = threading.Lock()
        self._send_lock = threading.Lock()
        self._stop = threading.Event()
        self._flusher: Optional[threading.Thread] = None
        self._closed = False

    def start(self) -> "BulkProcessor":
        """Start the periodic flusher, if a flush interval is configured."""
        if self.params.flush_interval and self._flusher is None:
            self._flusher = threading.Thread(
                target=self._flush_periodically,
                name=f"bulk-{self.params.name}",
                daemon=True,
            )
            self._flusher.start()
        return self

    def add(self, action: Dict[str, Any]) -> None:
        """Queue one action, sending the buffer if a threshold is reached."""
        size = len(json.dumps(action, default=str))
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Bulk processor {self.params.name} is closed")
            self._buffer.append(action)
            self._buffer_bytes += size
            full = (
                len(self._buffer) >= self.params.bulk_actions
                or self._buffer_bytes >= self.params.bulk_size
            )

        if full:
            self.flush()

    def index(self, index: str, document: Dict[str, Any], doc_id: Optional[str] = None) -> None:
        action: Dict[str, Any] = {"_op_type": "index", "_index": index, "_source": document}
        if doc_id is not None:
            action["_id"] = doc_id
        self.add(action)

    def create(self, index: str, document: Dict[str, Any], doc_id: str) -> None:
        self.add({"_op_type": "create", "_index": index, "_id": doc_id, "_source": document})

    def flush(self) -> None:
        """
        Send everything buffered so far.

        A batch whose bulk request fails goes back to the front of the
        buffer and is sent again by the next flush() or close().

        Raises:
            OperationError: If the bulk request itself fails
        """
        with self._lock:
            batch = self._buffer
            batch_bytes = self._buffer_bytes
            self._buffer = []
            self._buffer_bytes = 0

        if not batch:
            return

        try:
            self._send(batch)
        except OperationError:
            with self._lock:
                self._buffer[:0] = batch
                self._buffer_bytes += batch_bytes
            raise

    def close(self) -> None:
        """Stop the periodic flusher and send what is left."""
        with self._lock:
            self._closed = True
        self._stop.set()
        if self._flusher is not None:
            self._flusher.join()
            self._flusher = None
        self.flush()

    def __enter__(self) -> "BulkProcessor":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _flush_periodically(self) -> None:
        while not self._stop.wait(self.params.flush_interval):
            try:
                self.flush()
            except OperationError as e:
                # Nobody to raise to on this thread
                logger.error("periodic flush of %s failed: %s", self.params.name, e)

    def _streaming(self, actions: List[Dict[str, Any]]):
        p = self.params
        return helpers.streaming_bulk(
            self.session.client,
            actions,
            chunk_size=p.bulk_actions,
            max_chunk_bytes=p.bulk_size,
            raise_on_error=False,
            raise_on_exception=False,
            max_retries=p.backoff.max_retries,
            initial_backoff=p.backoff.initial,
            max_backoff=p.backoff.maximum,
        )

    def _results(self, batch: List[Dict[str, Any]]):
        workers = self.params.workers
        if workers == 1:
            yield from self._streaming(batch)
            return

        # One retrying stream per worker, each over a contiguous slice
        step = -(-len(batch) // workers)
        slices = [batch[i:i + step] for i in range(0, len(batch), step)]
        with ThreadPoolExecutor(
            max_workers=len(slices),
            thread_name_prefix=f"bulk-{self.params.name}",
        ) as pool:
            for results in pool.map(lambda part: list(self._streaming(part)), slices):
                yield from results

    def _send(self, batch: List[Dict[str, Any]]) -> None:
        name = self.params.name
        if self.params.before:
            self.params.before(name, len(batch))

        ok_count = 0
        errors: List[Dict[str, Any]] = []

        with self._send_lock:
            try:
                for ok, item in self._results(batch):
                    if ok:
                        ok_count += 1
                    else:
                        errors.append(item)
            except Exception as e:
                raise OperationError(f"bulk [{name}]", e) from e

            self.succeeded += ok_count
            self.failed += len(errors)

        logger.debug("bulk %s: sent %d actions, %d failed", name, len(batch), len(errors))
        if errors:
            logger.warning("bulk %s: %d actions failed", name, len(errors))

        if self.params.after:
            self.params.after(name, ok_count, errors)


def run_bulk_processor(session: ElasticSession, params: BulkProcessorParameters) -> BulkProcessor:
    """
    Create and start a bulk processor.

    The caller owns it and must close() it (or use it as a context manager).
    """
    return BulkProcessor(session, params).start()


def bulk_index(
    session: ElasticSession,
    index: str,
    documents: Dict[str, Dict[str, Any]],
    params: Optional[BulkProcessorParameters] = None,
) -> int:
    """
    Index a mapping of id to document in batches and wait for completion.

    Returns:
        Number of documents indexed successfully

    Raises:
        EmptyInputError: If documents is empty
        OperationError: If a bulk request fails
    """
    if not documents:
        raise EmptyInputError("bulk_index")

    # No periodic flusher for one-shot loads
    params = params or BulkProcessorParameters(name=f"bulk-index-{index}", flush_interval=0)
    processor = BulkProcessor(session, params)
    for doc_id, document in documents.items():
        processor.index(index, document, doc_id)
    processor.close()
    return processor.succeeded

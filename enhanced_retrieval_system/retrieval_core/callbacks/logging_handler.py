# Defines LoggingCallbackHandler
# File: retrieval_core/callbacks/logging_handler.py

import logging
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from langchain_core.callbacks import BaseCallbackHandler

logger = logging.getLogger(__name__)


class LoggingCallbackHandler(BaseCallbackHandler):
    """
    Writes retriever lifecycle events to the standard logging module.

    Attached automatically to a retrieval run when the retriever is verbose.
    """

    def __init__(self, level: int = logging.INFO, log: Optional[logging.Logger] = None):
        self.level = level
        self.log = log or logger

    def on_retriever_start(
        self,
        serialized: Dict[str, Any],
        query: str,
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        tags: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        name = kwargs.get("name") or (serialized or {}).get("name", "retriever")
        self.log.log(self.level, f"[retriever:{name}] run {run_id} started for query '{query[:100]}' tags={tags or []}")

    def on_retriever_end(
        self,
        documents: Sequence[Any],
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        self.log.log(self.level, f"[retriever] run {run_id} returned {len(documents)} documents")

    def on_retriever_error(
        self,
        error: BaseException,
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        # Logged without traceback; the caller receives the exception itself.
        self.log.error(f"[retriever] run {run_id} failed: {type(error).__name__}: {error}")

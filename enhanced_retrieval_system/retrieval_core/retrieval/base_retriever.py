# Defines BaseRetriever (Interface)
# File: retrieval_core/retrieval/base_retriever.py

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from langchain_core.callbacks import BaseCallbackHandler, BaseCallbackManager, Callbacks
from langchain_core.callbacks.manager import (
    AsyncCallbackManagerForRetrieverRun,
    CallbackManagerForRetrieverRun,
)
from langchain_core.load.serializable import to_json_not_implemented
from langchain_core.runnables import Runnable, RunnableConfig
from langchain_core.runnables.config import ensure_config, run_in_executor

from ..data_models.document import Document
from .run_config import CallbackConfigArg, RunScope, parse_callback_config_arg

logger = logging.getLogger(__name__)


class RetrieverError(Exception):
    """Custom exception for Retriever errors."""
    pass


class RetrieverInput(BaseModel):
    """Construction fields shared by every retriever. Omitted fields get defaults."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    callbacks: Optional[Any] = None
    tags: List[str] = Field(default_factory=list)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    verbose: bool = False

    @field_validator("tags", "metadata", "verbose", mode="before")
    @classmethod
    def _default_when_none(cls, value: Any, info) -> Any:
        if value is None:
            return {"tags": [], "metadata": {}, "verbose": False}[info.field_name]
        return value

    @field_validator("callbacks")
    @classmethod
    def _check_callbacks(cls, value: Any) -> Any:
        if value is None or isinstance(value, BaseCallbackManager):
            return value
        if isinstance(value, list) and all(isinstance(h, BaseCallbackHandler) for h in value):
            return value
        raise ValueError("callbacks must be a list of callback handlers or a callback manager")


class BaseRetriever(Runnable[str, List[Document]]):
    """
    Base class for document retrieval strategies.

    A retriever takes a query string and returns the most relevant Documents
    from some source. Subclasses implement ``_get_relevant_documents`` (and
    optionally ``_aget_relevant_documents``); the public methods wrap that
    call with retriever start/end/error callback events.

    Being a Runnable, a retriever can be invoked, batched and piped into
    other pipeline steps like any other Runnable.
    """

    def __init__(self,
                 *,
                 callbacks: Callbacks = None,
                 tags: Optional[List[str]] = None,
                 metadata: Optional[Dict[str, Any]] = None,
                 verbose: Optional[bool] = None):
        """
        Initializes the retriever's identity fields.

        Args:
            callbacks: Handlers (or a callback manager) notified on every call.
            tags: Labels attached to every run of this retriever.
            metadata: Free-form metadata attached to every run.
            verbose: When True, lifecycle events are also written to the log.

        Raises:
            RetrieverError: If any field has the wrong type.
        """
        try:
            fields = RetrieverInput(callbacks=callbacks, tags=tags, metadata=metadata, verbose=verbose)
        except ValidationError as e:
            logger.error(f"Invalid fields for {self.__class__.__name__}: {e}")
            raise RetrieverError(f"Invalid retriever fields: {e}") from e
        self.callbacks: Callbacks = fields.callbacks
        self.tags: List[str] = fields.tags
        self.metadata: Dict[str, Any] = fields.metadata
        self.verbose: bool = fields.verbose

    def _get_relevant_documents(self,
                                query: str,
                                *,
                                run_manager: CallbackManagerForRetrieverRun) -> List[Document]:
        """
        Retrieve documents relevant to the query. Subclasses override this.

        Args:
            query: The query string.
            run_manager: The per-call run manager, for emitting sub-events or
                building child callbacks.

        Raises:
            NotImplementedError: Always, unless overridden.
        """
        raise NotImplementedError(f"{self.__class__.__name__} does not implement _get_relevant_documents")

    async def _aget_relevant_documents(self,
                                       query: str,
                                       *,
                                       run_manager: AsyncCallbackManagerForRetrieverRun) -> List[Document]:
        """Async twin of ``_get_relevant_documents``; runs the sync one in an executor by default."""
        return await run_in_executor(
            None, self._get_relevant_documents, query, run_manager=run_manager.get_sync()
        )

    def invoke(self, input: str, config: Optional[RunnableConfig] = None) -> List[Document]:
        return self.get_relevant_documents(input, ensure_config(config))

    async def ainvoke(self, input: str, config: Optional[RunnableConfig] = None) -> List[Document]:
        return await self.aget_relevant_documents(input, ensure_config(config))

    def get_relevant_documents(self, query: str, config: CallbackConfigArg = None) -> List[Document]:
        """
        Retrieve documents relevant to a query, with callback events.

        Args:
            query: The query string to retrieve documents for.
            config: Either a bare callback set (list of handlers or a callback
                manager) or a RunnableConfig with callbacks, tags, metadata,
                run_name and run_id.

        Returns:
            The documents returned by ``_get_relevant_documents``, unchanged.

        Raises:
            Whatever ``_get_relevant_documents`` raises, after the error event.
        """
        scope = RunScope.for_call(self, ensure_config(parse_callback_config_arg(config)))
        callback_manager = scope.configure()
        run_manager = callback_manager.on_retriever_start(
            self.to_json(),
            query,
            run_id=scope.run_id,
            name=scope.run_name or self.get_name(),
        )
        try:
            results = self._get_relevant_documents(query, run_manager=run_manager)
        except BaseException as e:
            run_manager.on_retriever_error(e)
            raise
        else:
            run_manager.on_retriever_end(results)
            return results

    async def aget_relevant_documents(self, query: str, config: CallbackConfigArg = None) -> List[Document]:
        """Async version of ``get_relevant_documents``."""
        scope = RunScope.for_call(self, ensure_config(parse_callback_config_arg(config)))
        callback_manager = scope.aconfigure()
        run_manager = await callback_manager.on_retriever_start(
            self.to_json(),
            query,
            run_id=scope.run_id,
            name=scope.run_name or self.get_name(),
        )
        try:
            results = await self._aget_relevant_documents(query, run_manager=run_manager)
        except BaseException as e:
            await run_manager.on_retriever_error(e)
            raise
        else:
            await run_manager.on_retriever_end(results)
            return results

    def to_json(self) -> Dict[str, Any]:
        """JSON-serializable snapshot of this retriever, sent with the start event."""
        serialized = dict(to_json_not_implemented(self))
        serialized["name"] = self.get_name()
        return serialized

    def __repr__(self) -> str:
        return f"<{self.get_name()} tags={self.tags}>"

# Contains FunctionRetriever class
# File: retrieval_core/retrieval/function.py

import logging
from typing import Any, Awaitable, Callable, List, Optional

from langchain_core.callbacks.manager import (
    AsyncCallbackManagerForRetrieverRun,
    CallbackManagerForRetrieverRun,
)

from .base_retriever import BaseRetriever
from ..data_models.document import Document

logger = logging.getLogger(__name__)


class FunctionRetriever(BaseRetriever):
    """
    Adapts a plain ``query -> documents`` callable to the retriever interface.

    Useful for wiring an existing search function into a pipeline so that it
    gets the same callback events as any other retriever.
    """

    def __init__(self,
                 func: Callable[[str], List[Document]],
                 afunc: Optional[Callable[[str], Awaitable[List[Document]]]] = None,
                 name: Optional[str] = None,
                 **fields: Any):
        super().__init__(**fields)
        if not callable(func):
            raise ValueError("FunctionRetriever requires a callable.")
        self.func = func
        self.afunc = afunc
        self.name = name or getattr(func, "__name__", None)
        if self.name == "<lambda>":
            self.name = None
        logger.debug(f"FunctionRetriever initialized for {self.get_name()}")

    def _get_relevant_documents(self,
                                query: str,
                                *,
                                run_manager: CallbackManagerForRetrieverRun) -> List[Document]:
        return self.func(query)

    async def _aget_relevant_documents(self,
                                       query: str,
                                       *,
                                       run_manager: AsyncCallbackManagerForRetrieverRun) -> List[Document]:
        if self.afunc is None:
            return await super()._aget_relevant_documents(query, run_manager=run_manager)
        return await self.afunc(query)

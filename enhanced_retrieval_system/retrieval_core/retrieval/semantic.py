# Contains SemanticRetriever class
# File: retrieval_core/retrieval/semantic.py

import logging
from typing import Any, List, Optional

from langchain_core.callbacks.manager import CallbackManagerForRetrieverRun

from .base_retriever import BaseRetriever, RetrieverError
from ..data_models.document import Document
from ..corpus.vector_stores.base_vector_store import VectorStore, VectorStoreError

logger = logging.getLogger(__name__)


class SemanticRetriever(BaseRetriever):
    """
    Retrieves documents based on semantic similarity using a VectorStore.
    """

    def __init__(self,
                 vector_store: VectorStore,
                 k: int = 4,
                 score_threshold: Optional[float] = None,
                 **fields: Any):
        """
        Initializes the SemanticRetriever.

        Args:
            vector_store: An initialized instance conforming to the VectorStore interface.
            k: Maximum number of documents to return.
            score_threshold: If set, drop results scoring below this value.
            **fields: Retriever identity fields (callbacks, tags, metadata, verbose).

        Raises:
            ValueError: If vector_store is missing or k is not positive.
        """
        super().__init__(**fields)
        if not vector_store:
            raise ValueError("SemanticRetriever requires a valid VectorStore instance.")
        if k <= 0:
            raise ValueError(f"SemanticRetriever requires k > 0, got {k}.")
        self.vector_store = vector_store
        self.k = k
        self.score_threshold = score_threshold
        logger.debug(f"SemanticRetriever initialized with VectorStore: {vector_store.get_name()}, k={k}")

    def _get_relevant_documents(self,
                                query: str,
                                *,
                                run_manager: CallbackManagerForRetrieverRun) -> List[Document]:
        logger.info(f"Performing semantic retrieval for query '{query[:50]}...' with k={self.k}")
        try:
            if self.score_threshold is None:
                retrieved_docs = self.vector_store.similarity_search(query=query, k=self.k)
            else:
                scored = self.vector_store.similarity_search_with_score(query=query, k=self.k)
                retrieved_docs = [doc for doc, score in scored if score >= self.score_threshold]
                logger.debug(f"Score threshold {self.score_threshold} kept {len(retrieved_docs)} of {len(scored)} results.")
        except VectorStoreError as e:
            logger.error(f"VectorStore search failed during semantic retrieval: {e}", exc_info=True)
            raise RetrieverError(f"Semantic retrieval failed due to VectorStore error: {e}") from e
        logger.info(f"Semantic retrieval found {len(retrieved_docs)} documents.")
        return retrieved_docs

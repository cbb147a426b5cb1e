# Defines VectorStore (Interface)
# File: retrieval_core/corpus/vector_stores/base_vector_store.py

import abc
import logging
from typing import List, Tuple

from ...data_models.document import Document

logger = logging.getLogger(__name__)


class VectorStoreError(Exception):
    """Custom exception for Vector Store errors."""
    pass


class VectorStore(abc.ABC):
    """
    Abstract Base Class (Interface) for the search side of a vector store.

    Storage, indexing and embedding live in the implementation; retrievers
    only need the two query methods below.
    """

    @abc.abstractmethod
    def similarity_search(self, query: str, k: int = 4, **kwargs) -> List[Document]:
        """
        Perform a similarity search based on a query string.

        Args:
            query: The query text.
            k: The number of results to return.
            **kwargs: Additional search parameters specific to the implementation.

        Returns:
            Up to k Document objects, most similar first.

        Raises:
            VectorStoreError: If the search fails.
        """
        pass

    @abc.abstractmethod
    def similarity_search_with_score(self, query: str, k: int = 4, **kwargs) -> List[Tuple[Document, float]]:
        """
        Perform a similarity search and return results with similarity scores.

        Higher scores mean more similar. Ordering matches ``similarity_search``.

        Raises:
            VectorStoreError: If the search fails.
        """
        pass

    def get_name(self) -> str:
        """Return the name of the vector store implementation."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"<{self.get_name()}>"

# File: retrieval_core/retrieval/factories.py

import logging
from typing import Callable, List, Optional

from ..config.settings import Configuration
from ..corpus.vector_stores.base_vector_store import VectorStore
from ..data_models.document import Document
from .base_retriever import BaseRetriever, RetrieverError
from .function import FunctionRetriever
from .semantic import SemanticRetriever

logger = logging.getLogger(__name__)


class RetrieverFactory:
    """
    Factory for creating retrievers by strategy name.

    Identity fields (tags, verbose) and search settings (k, score threshold)
    are taken from the Configuration.
    """

    @staticmethod
    def create(
        strategy_name: str,
        config: Configuration,
        vector_store: Optional[VectorStore] = None,
        func: Optional[Callable[[str], List[Document]]] = None,
    ) -> BaseRetriever:
        """
        Creates a retriever for the named strategy.

        Args:
            strategy_name: "semantic" or "function".
            config: The Configuration object.
            vector_store: Required for "semantic".
            func: Required for "function".

        Raises:
            ValueError: If the strategy is unknown or its dependency is missing.
        """
        strategy_lower = strategy_name.lower()
        logger.info(f"Creating retriever for strategy: '{strategy_lower}'")
        fields = dict(tags=config.get_retriever_tags(), verbose=config.get_retriever_verbose())
        try:
            if strategy_lower == "semantic":
                if vector_store is None: raise ValueError("Semantic retriever requires a VectorStore instance.")
                return SemanticRetriever(
                    vector_store=vector_store,
                    k=config.get_retrieval_k(),
                    score_threshold=config.get_score_threshold(),
                    **fields,
                )
            elif strategy_lower == "function":
                if func is None: raise ValueError("Function retriever requires a callable.")
                return FunctionRetriever(func=func, **fields)
            else:
                logger.error(f"Unknown retriever strategy requested: '{strategy_name}'")
                raise ValueError(f"Unknown retriever strategy: {strategy_name}")
        except (ValueError, RetrieverError):
            raise
        except Exception as e:
            logger.error(f"Unexpected error creating retriever '{strategy_name}': {e}", exc_info=True)
            raise ValueError(f"Could not create retriever '{strategy_name}': {e}") from e

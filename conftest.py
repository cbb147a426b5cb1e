# File: conftest.py
# Shared test doubles for the retrieval_core test modules.

from typing import Any, Dict, List, Optional, Sequence, Tuple
from uuid import UUID

import pytest
from langchain_core.callbacks import BaseCallbackHandler

from retrieval_core.corpus.vector_stores.base_vector_store import VectorStore
from retrieval_core.data_models.document import Document
from retrieval_core.retrieval.base_retriever import BaseRetriever

CONFIG_ENV_VARS = [
    "RETRIEVAL_K",
    "RETRIEVAL_SCORE_THRESHOLD",
    "RETRIEVER_TAGS",
    "RETRIEVER_VERBOSE",
    "LOG_LEVEL",
]


class RecordingCallbackHandler(BaseCallbackHandler):
    """Records retriever events in the order they arrive."""

    run_inline = True

    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    @property
    def names(self) -> List[str]:
        return [e["event"] for e in self.events]

    def on_retriever_start(self, serialized: Dict[str, Any], query: str, *, run_id: UUID,
                           parent_run_id: Optional[UUID] = None, tags: Optional[List[str]] = None,
                           metadata: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self.events.append({
            "event": "start",
            "serialized": serialized,
            "query": query,
            "run_id": run_id,
            "parent_run_id": parent_run_id,
            "tags": tags,
            "metadata": metadata,
            "name": kwargs.get("name"),
        })

    def on_retriever_end(self, documents: Sequence[Any], *, run_id: UUID,
                         parent_run_id: Optional[UUID] = None, **kwargs: Any) -> None:
        self.events.append({"event": "end", "documents": documents, "run_id": run_id})

    def on_retriever_error(self, error: BaseException, *, run_id: UUID,
                           parent_run_id: Optional[UUID] = None, **kwargs: Any) -> None:
        self.events.append({"event": "error", "error": error, "run_id": run_id})


class StaticRetriever(BaseRetriever):
    """Returns the same list for every query."""

    def __init__(self, documents: List[Document], **fields: Any):
        super().__init__(**fields)
        self.documents = documents

    def _get_relevant_documents(self, query, *, run_manager):
        return self.documents


class FailingRetriever(BaseRetriever):
    def __init__(self, error: BaseException, **fields: Any):
        super().__init__(**fields)
        self.error = error

    def _get_relevant_documents(self, query, *, run_manager):
        raise self.error

    async def _aget_relevant_documents(self, query, *, run_manager):
        raise self.error


class FakeVectorStore(VectorStore):
    def __init__(self, scored: List[Tuple[Document, float]], error: Optional[Exception] = None):
        self.scored = scored
        self.error = error
        self.calls: List[Tuple[str, str, int]] = []

    def similarity_search(self, query: str, k: int = 4, **kwargs) -> List[Document]:
        self.calls.append(("similarity_search", query, k))
        if self.error:
            raise self.error
        return [doc for doc, _ in self.scored[:k]]

    def similarity_search_with_score(self, query: str, k: int = 4, **kwargs) -> List[Tuple[Document, float]]:
        self.calls.append(("similarity_search_with_score", query, k))
        if self.error:
            raise self.error
        return self.scored[:k]


@pytest.fixture
def recorder() -> RecordingCallbackHandler:
    return RecordingCallbackHandler()


@pytest.fixture
def docs() -> List[Document]:
    return [
        Document(page_content="alpha", metadata={"source": "a.txt"}),
        Document(page_content="beta", metadata={"source": "b.txt"}),
        Document(page_content="gamma", metadata={"source": "c.txt"}),
    ]


@pytest.fixture
def clean_env(monkeypatch):
    """Unset every configuration variable for the duration of a test."""
    for name in CONFIG_ENV_VARS:
        # setenv first so monkeypatch restores the original (possibly absent) value
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch

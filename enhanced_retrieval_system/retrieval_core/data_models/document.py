# Defines Document class
# File: retrieval_core/data_models/document.py

from dataclasses import dataclass, field
from typing import Dict, Any, Optional

from langchain_core.documents import Document as LCDocument


@dataclass
class Document:
    """
    A piece of retrieved text plus its metadata.

    Retrievers return these as-is; the base retriever never looks inside.
    """
    page_content: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    id: Optional[str] = None

    def __str__(self) -> str:
        """String representation showing source and a content snippet."""
        source = self.metadata.get('source', 'unknown')
        snippet_len = 50
        snippet = self.page_content[:snippet_len].replace('\n', ' ')
        if len(self.page_content) > snippet_len:
            snippet += "..."
        return f"Document(id={self.id}, source='{source}', content='{snippet}')"

    @classmethod
    def from_langchain_document(cls, lc_document: LCDocument) -> 'Document':
        """
        Create a Document from a LangChain Document.

        Args:
            lc_document: An instance of langchain_core.documents.Document.

        Returns:
            A new Document instance with a copy of the source metadata.

        Raises:
            TypeError: If lc_document is not a LangChain Document.
        """
        if not isinstance(lc_document, LCDocument):
            raise TypeError(f"Expected a LangChain Document, but got {type(lc_document)}")
        return cls(
            page_content=lc_document.page_content,
            metadata=dict(lc_document.metadata or {}),
            id=lc_document.id,
        )

    def to_langchain_document(self) -> LCDocument:
        """Convert this Document into a LangChain Document."""
        return LCDocument(
            page_content=self.page_content,
            metadata=self.metadata.copy(),
            id=self.id,
        )

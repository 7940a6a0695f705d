"""Search hit converter for Haystack and LangChain integration.

Shaped search results are plain dictionaries. Pipelines built on Haystack or
LangChain expect their own document types, so this module converts normalized
hits and aggregation records into those types.

Key Transformations:
    - ``_id`` -> Haystack ``Document.id`` and ``meta["doc_id"]``; LangChain
      ``metadata["id"]``
    - ``_score`` -> Haystack ``Document.score``
    - content field -> Haystack ``content`` / LangChain ``page_content``
    - every other record key -> ``meta`` / ``metadata``

Usage:
    >>> from searchshaper.utils import HitDocumentConverter
    >>> docs = HitDocumentConverter.convert_hits_to_haystack_documents(
    ...     raw_hits, content_field="description"
    ... )
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from haystack import Document as HaystackDocument
from langchain_core.documents import Document as LangchainDocument

from searchshaper.aggregations import parse_comp_agg_to_hits
from searchshaper.constants import BUCKET_KEY, ID_KEY, SCORE_KEY
from searchshaper.hits import normalize_hits
from searchshaper.types import Bucket, Hit, Record
from searchshaper.utils.logging import LoggerFactory


logger_factory = LoggerFactory(logger_name=__name__, log_level=logging.INFO)
logger = logger_factory.get_logger()


def _content(value: Any) -> str:
    return "" if value is None else str(value)


class HitDocumentConverter:
    """Converts raw search hits and buckets to Haystack/LangChain documents.

    The converter is stateless and all methods are static. Hits are normalized
    first, so highlighted fragments end up in the document content and
    metadata.
    """

    @staticmethod
    def record_to_haystack_document(
        record: Record, content_field: str = "content"
    ) -> HaystackDocument:
        """Convert one normalized record to a Haystack Document.

        Args:
            record: A record produced by ``normalize_hits``.
            content_field: Record key holding the document text.

        Returns:
            A Haystack Document. Records without ``_id`` get Haystack's
            content-derived id.
        """
        meta: Dict[str, Any] = {
            key: value
            for key, value in record.items()
            if key not in (ID_KEY, SCORE_KEY, content_field)
        }
        doc_id = record.get(ID_KEY)
        if doc_id is not None:
            meta["doc_id"] = str(doc_id)

        doc = HaystackDocument(
            id=str(doc_id) if doc_id is not None else "",
            content=_content(record.get(content_field)),
            meta=meta,
        )
        score = record.get(SCORE_KEY)
        if isinstance(score, (int, float)) and not isinstance(score, bool):
            doc.score = float(score)
        return doc

    @staticmethod
    def convert_hits_to_haystack_documents(
        hits: Optional[Sequence[Hit]],
        content_field: str = "content",
        with_click_ids: bool = False,
    ) -> List[HaystackDocument]:
        """Normalize raw hits and convert them to Haystack Documents.

        Args:
            hits: Raw search hits.
            content_field: Source field holding the document text.
            with_click_ids: Whether to keep ``_click_id`` in the metadata.

        Returns:
            Haystack Documents in hit order.
        """
        records = normalize_hits(hits, with_display_ids=with_click_ids)
        documents = [
            HitDocumentConverter.record_to_haystack_document(record, content_field)
            for record in records
        ]
        logger.info(f"Converted {len(documents)} hits into HaystackDocument objects.")
        return documents

    @staticmethod
    def convert_hits_to_langchain_documents(
        hits: Optional[Sequence[Hit]],
        content_field: str = "content",
    ) -> List[LangchainDocument]:
        """Normalize raw hits and convert them to LangChain Documents.

        Args:
            hits: Raw search hits.
            content_field: Source field holding the document text.

        Returns:
            LangChain Documents in hit order. The hit id is stored in
            ``metadata["id"]`` and the score in ``metadata["score"]``.
        """
        documents: List[LangchainDocument] = []
        for record in normalize_hits(hits):
            metadata = {
                key: value
                for key, value in record.items()
                if key not in (ID_KEY, SCORE_KEY, content_field)
            }
            if record.get(ID_KEY) is not None:
                metadata["id"] = str(record[ID_KEY])
            if record.get(SCORE_KEY) is not None:
                metadata["score"] = record[SCORE_KEY]
            documents.append(
                LangchainDocument(
                    page_content=_content(record.get(content_field)),
                    metadata=metadata,
                )
            )

        logger.info(f"Converted {len(documents)} hits into LangChainDocument objects.")
        return documents

    @staticmethod
    def convert_buckets_to_haystack_documents(
        agg_field_name: str, buckets: Optional[Sequence[Bucket]] = None
    ) -> List[HaystackDocument]:
        """Convert aggregation buckets to Haystack Documents.

        The bucket key becomes the content; document count and aggregated
        fields become metadata.
        """
        documents = [
            HitDocumentConverter.record_to_haystack_document(record, BUCKET_KEY)
            for record in parse_comp_agg_to_hits(agg_field_name, buckets)
        ]
        logger.info(f"Converted {len(documents)} buckets into HaystackDocument objects.")
        return documents

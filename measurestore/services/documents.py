from __future__ import annotations

import logging
from typing import List

from ..domain.documents import parse_document
from ..domain.interfaces import DocumentRepository
from ..domain.models import Measurement
from ..domain.projector import project_measurement
from .rendering import TableRenderer

logger = logging.getLogger(__name__)


class MeasurementService:
    """Write path (parse, insert) and read path (query, project, render)."""

    def __init__(self, repo: DocumentRepository, renderer: TableRenderer) -> None:
        self._repo = repo
        self._renderer = renderer

    def save_document(self, raw: bytes) -> str:
        """Store an uploaded document and return the confirmation sentence."""
        document = parse_document(raw)
        inserted_id = self._repo.insert_one(document)
        # ObjectId renders as 24 lowercase hex digits
        hex_id = str(inserted_id)
        logger.info("Document %s saved", hex_id)
        return f"Document {hex_id} saved!"

    def load_measurements(self) -> List[Measurement]:
        records: List[Measurement] = []
        with self._repo.find_all() as documents:
            for doc in documents:
                records.append(project_measurement(doc))
        return records

    def render_table(self) -> str:
        records = self.load_measurements()
        logger.debug("Rendering table with %d records", len(records))
        return self._renderer.render(records)

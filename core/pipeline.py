"""
Email validation pipeline
In-process API over the engine: ingest, classify, apply operator actions, export
"""

import copy
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from utils.email_col_detector import EmailColumnDetector
from utils.io_handler import FileHandler
from utils.output_processor import OutputProcessor
from .email_hygiene_engine import classify_row, DEFAULT_MAX_SIMILARITY_DISTANCE
from .models import Dataset, Row, Stats, normalize_email
from .processor import MutationEngine, Mutation
from .scheduler import BatchValidationScheduler, DEFAULT_CHUNK_SIZE
from .typo_maps import load_typo_maps

logger = logging.getLogger(__name__)


class EmailValidationPipeline:
    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = options or {}

        self.chunk_size = self.options.get('chunk_size', DEFAULT_CHUNK_SIZE)
        self.max_similarity_distance = self.options.get(
            'max_similarity_distance', DEFAULT_MAX_SIMILARITY_DISTANCE
        )
        self.typo_maps = load_typo_maps(self.options.get('typo_maps_path'))

        # Initialize components
        self.file_handler = FileHandler()
        self.detector = EmailColumnDetector()
        self.scheduler = BatchValidationScheduler(
            classifier=partial(
                classify_row,
                typo_maps=self.typo_maps,
                max_similarity_distance=self.max_similarity_distance,
            ),
            chunk_size=self.chunk_size,
        )
        self.mutations = MutationEngine(self.scheduler)
        self.output_processor = OutputProcessor()

    def ingest(self, columns: Sequence[str], records: Sequence[Dict[str, Any]]) -> Dataset:
        """
        Build an unclassified Dataset from a header list and raw records.
        Raises IngestError when fewer than two columns are supplied.
        """
        columns = [str(col) for col in columns]
        name_col, email_col = self.detector.detect_columns(columns)

        rows = []
        for index, record in enumerate(records):
            raw = {str(key): "" if value is None else str(value) for key, value in record.items()}
            email = normalize_email(raw.get(email_col, ""))
            rows.append(Row(
                id=index,
                name=raw.get(name_col, "").strip(),
                email=email,
                original_email=email,
                original_row=copy.deepcopy(raw),
                source_row=raw,
            ))

        logger.info(
            f"Ingested {len(rows)} rows (name column: {name_col!r}, email column: {email_col!r})"
        )
        return Dataset(columns=columns, email_column=email_col, name_column=name_col, rows=rows)

    def classify(self, dataset: Dataset,
                 progress_callback: Optional[Callable] = None) -> Tuple[Dataset, Stats]:
        stats = self.scheduler.run(dataset, progress_callback)
        return dataset, stats

    def apply(self, dataset: Dataset, mutation: Mutation,
              progress_callback: Optional[Callable] = None) -> Tuple[Dataset, Stats]:
        return self.mutations.apply(dataset, mutation, progress_callback)

    def export(self, dataset: Dataset) -> List[Dict[str, str]]:
        return self.output_processor.project(dataset)

    def process_file(self, uploaded_file, progress_callback: Optional[Callable] = None) -> Dataset:
        """
        Load, ingest and classify an uploaded file in one go
        """
        self._update_progress("Loading file...", 0, progress_callback)
        columns, records = self.file_handler.load_file(uploaded_file)

        dataset = self.ingest(columns, records)
        self.classify(dataset, progress_callback)
        return dataset

    def _update_progress(self, status: str, progress: int, callback: Optional[Callable]):
        if callback:
            callback(status, progress, {'processed': 0, 'total': 0})

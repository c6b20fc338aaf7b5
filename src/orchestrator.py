"""
Pipeline Orchestrator.

Coordinates sequential execution of all stages over one review table.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from src.agents.ingestion import ReviewIngestionAgent
from src.agents.normalization import RecordNormalizer
from src.agents.sentiment import SentimentBreakdown, SentimentScorer
from src.agents.feature_assembly import FeatureAssembler, standardization_report
from src.agents.geo_scaling import GeospatialScaler
from src.agents.pca import PCAEngine
from src.models.analysis import FeatureMatrix, PCAResult
from src.models.review import NormalizedRecord, ReviewRecord, ScoredRecord
from src.registry.lexicon_registry import LexiconRegistry
from src.utils.storage import StorageManager
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything one run produces, before export."""
    normalized: List[NormalizedRecord]
    scores: Dict[str, SentimentBreakdown]
    scored: List[ScoredRecord]
    weights: List[Optional[float]]
    features: FeatureMatrix
    pca: PCAResult
    diagnostics: Dict = field(default_factory=dict)


class PipelineOrchestrator:
    """
    Orchestrates the batch analysis pipeline.

    Coordinates:
    1. Lexicon load → 2. Ingestion → 3. Normalization
    → 4. Sentiment scoring + Geospatial scaling → 5. Feature assembly
    → 6. PCA → 7. Export
    """

    def __init__(
        self,
        lexicon_path: str = settings.LEXICON_PATH,
        output_dir: str = str(settings.OUTPUT_ROOT),
        use_mock_data: bool = settings.USE_MOCK_DATA,
        weight_range: Tuple[float, float] = settings.WEIGHT_RANGE
    ):
        """
        Initialize pipeline orchestrator.

        The lexicon is loaded here, so a bad lexicon fails before any
        records are read.

        Args:
            lexicon_path: Path to the sentiment lexicon (.csv or .json)
            output_dir: Directory for output tables
            use_mock_data: Generate synthetic reviews instead of reading a CSV
            weight_range: (min, max) rendering weight for rating counts

        Raises:
            LexiconLoadError: If the lexicon cannot be loaded
        """
        self.output_dir = output_dir

        logger.info("Initializing pipeline components...")

        self.lexicon = LexiconRegistry(lexicon_path).load()

        self.ingestion_agent = ReviewIngestionAgent(use_mock_data=use_mock_data)
        self.normalizer = RecordNormalizer()
        self.sentiment_scorer = SentimentScorer(self.lexicon)
        self.geo_scaler = GeospatialScaler(output_range=weight_range)
        self.feature_assembler = FeatureAssembler()
        self.pca_engine = PCAEngine()

        self._storage: Optional[StorageManager] = None

        logger.info("Pipeline initialized successfully")

    @property
    def storage(self) -> StorageManager:
        if self._storage is None:
            self._storage = StorageManager(self.output_dir)
        return self._storage

    def run(self, input_path: Optional[str] = None) -> PipelineResult:
        """
        Run the pipeline on a review table.

        Args:
            input_path: CSV path (ignored in mock mode)

        Returns:
            PipelineResult

        Raises:
            StoreLensError: On any fatal input or analysis error
        """
        start_time = datetime.now()

        raw_records = self.ingestion_agent.load(input_path)
        return self.run_records(raw_records, input_path=input_path, start_time=start_time)

    def run_records(
        self,
        raw_records: Sequence[ReviewRecord],
        input_path: Optional[str] = None,
        start_time: Optional[datetime] = None
    ) -> PipelineResult:
        """Run every stage after ingestion."""
        start_time = start_time or datetime.now()
        logger.info(f"Starting pipeline on {len(raw_records)} raw reviews")

        # STAGE 1: Normalization
        normalized = self.normalizer.normalize(raw_records)

        # STAGE 2: Sentiment + geospatial weights (independent per record)
        scores = self.sentiment_scorer.score(normalized)
        weights = self.geo_scaler.scale(normalized)

        # STAGE 3: Feature assembly (full record set required)
        scored = self.feature_assembler.join(normalized, scores)
        features = self.feature_assembler.assemble(scored)
        unscored = self.feature_assembler.last_unscored_ids

        for name, stats in standardization_report(features).items():
            logger.debug(f"Standardized {name}: mean={stats['mean']:.2e}, std={stats['std']:.6f}")

        # STAGE 4: PCA
        pca = self.pca_engine.fit(features)

        processing_time = (datetime.now() - start_time).total_seconds()
        diagnostics = {
            "input_path": input_path,
            "input_rows": len(raw_records),
            "coordinate_drops": self.normalizer.last_dropped_count,
            "unscored_drops": len(unscored),
            "complete_case_drops": len(features.dropped_record_ids),
            "analysed_rows": features.n_records,
            "feature_summary": features.summary(),
            "weight_domains": self.geo_scaler.domains(),
            "lexicon_size": len(self.lexicon),
            "processing_time_seconds": processing_time,
        }

        logger.info(
            f"Pipeline complete: {len(raw_records)} rows → {len(normalized)} geolocated "
            f"→ {features.n_records} analysed"
        )

        return PipelineResult(
            normalized=normalized,
            scores=scores,
            scored=scored,
            weights=weights,
            features=features,
            pca=pca,
            diagnostics=diagnostics,
        )

    def export(self, result: PipelineResult) -> Dict[str, str]:
        """
        Write all output tables.

        Returns:
            Mapping of table name -> file path
        """
        sentiment = {record_id: b.score for record_id, b in result.scores.items()}
        scores_path, loadings_path, variance_path = self.storage.save_pca(result.pca)

        return {
            "locations": self.storage.save_locations(result.normalized, result.weights, sentiment),
            "rating_histogram": self.storage.save_rating_histogram(result.normalized),
            "pca_scores": scores_path,
            "pca_loadings": loadings_path,
            "pca_variance": variance_path,
            "metadata": self.storage.save_metadata(result.diagnostics),
        }

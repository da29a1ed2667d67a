import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import yaml
from pydantic import ValidationError

from .dto import Sample, SampleSummary

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50


class SampleStore(Protocol):
    """Read access to coding-problem samples."""

    def __len__(self) -> int: ...

    def get(self, sample_id: str) -> Optional[Sample]: ...

    def list_recent(self, limit: int = DEFAULT_PAGE_SIZE) -> List[SampleSummary]: ...


class InMemorySampleStore:
    """Sample store over a fixed list of samples, newest first on listing."""

    def __init__(self, samples: List[Sample]):
        self._samples = list(samples)
        self._by_id: Dict[str, Sample] = {}
        for sample in self._samples:
            self._by_id.setdefault(sample.id, sample)

    def __len__(self) -> int:
        return len(self._samples)

    def get(self, sample_id: str) -> Optional[Sample]:
        return self._by_id.get(sample_id)

    def list_recent(self, limit: int = DEFAULT_PAGE_SIZE) -> List[SampleSummary]:
        # Samples without a timestamp go last; ties keep their original order
        ordered = sorted(
            self._samples,
            key=lambda s: (s.created_at is None, -s.created_at.timestamp() if s.created_at else 0),
        )
        return [sample.summary() for sample in ordered[: max(limit, 0)]]


class YamlSampleStore(InMemorySampleStore):
    """Sample store loaded once from a YAML (or JSON) file holding a list of samples."""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(self._load(self.path))
        logger.info("Loaded %d samples from %s", len(self), self.path)

    @staticmethod
    def _load(path: Path) -> List[Sample]:
        if not path.is_file():
            raise FileNotFoundError(f"Sample file not found at: {path}")

        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                entries = json.load(f)
            else:
                entries = yaml.safe_load(f)

        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ValueError(f"Sample file {path} must contain a list of samples")

        try:
            return [Sample.model_validate(entry) for entry in entries]
        except ValidationError as e:
            raise ValueError(f"Invalid sample in {path}: {e}") from e


def load_sample_store(samples_path: str) -> InMemorySampleStore:
    """Store for the configured path, or an empty one when no path is configured."""
    if not samples_path:
        logger.info("No sample file configured, sample catalogue is empty")
        return InMemorySampleStore([])
    return YamlSampleStore(Path(samples_path))

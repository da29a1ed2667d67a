from .dto import Sample, SampleSummary
from .store import InMemorySampleStore, SampleStore, YamlSampleStore, load_sample_store

__all__ = [
    "InMemorySampleStore",
    "Sample",
    "SampleStore",
    "SampleSummary",
    "YamlSampleStore",
    "load_sample_store",
]

"""Local sample playlist catalog."""

from .sample_catalog import DEFAULT_SAMPLES_DIR, SampleCatalog

__all__ = ["DEFAULT_SAMPLES_DIR", "SampleCatalog"]

"""
Zero-shot multi-label text classification service.

Takes free text plus an arbitrary set of candidate labels and returns the
labels that apply, each with a confidence score:
- Segmentation of long texts into token-bounded chunks
- Multi-label scoring of every chunk by a shared NLI model
- Threshold + max-score aggregation across chunks

Architecture: FastAPI front + single lazily-loaded transformers pipeline behind a lock
"""

__version__ = "0.1.0"

"""Kubelet stats grouping with volume filtering and Azure volume deduplication."""

__version__ = "0.1.0"

"""Balanced multi-jurisdiction retrieval."""

from .balancer import balance_results, compute_quotas, fetch_sizes
from .retriever import BalancedRetriever

__all__ = ["BalancedRetriever", "balance_results", "compute_quotas", "fetch_sizes"]

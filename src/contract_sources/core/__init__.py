"""Pipeline orchestration package."""

from .engine import ContractSourcePipeline

__all__ = ["ContractSourcePipeline"]

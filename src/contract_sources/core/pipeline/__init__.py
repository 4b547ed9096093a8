"""Pipeline stages split by fetch/write/workflow."""

from .workflow import ContractPipelineMixin

__all__ = ["ContractPipelineMixin"]

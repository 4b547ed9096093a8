"""Public pipeline orchestrator composed from staged mixins."""

from .base import PipelineBase
from .pipeline import ContractPipelineMixin


class ContractSourcePipeline(ContractPipelineMixin, PipelineBase):
    """Drives an ordered address list through fetch, decode, resolve and write."""

    pass

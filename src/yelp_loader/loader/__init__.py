"""
Load orchestration: collect stage, statement batches and the two-phase
transactional pipeline.
"""

from .pipeline import LoadPipeline, LoadResult, PipelineState, ProgressCallback
from .plan import LoadPlan, build_load_plan
from .statements import (
    ENTITY_BATCH,
    SCHEMA_BATCH,
    SPARSE_BATCH,
    LoadBatch,
    Statement,
    StatementBuilder,
)

__all__ = [
    "LoadPipeline",
    "LoadResult",
    "PipelineState",
    "ProgressCallback",
    "LoadPlan",
    "build_load_plan",
    "LoadBatch",
    "Statement",
    "StatementBuilder",
    "SCHEMA_BATCH",
    "SPARSE_BATCH",
    "ENTITY_BATCH",
]

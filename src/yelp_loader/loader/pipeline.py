"""
Two-phase transactional load pipeline.

A run moves through these states::

    IDLE -> SCHEMA_PHASE -> SCHEMA_COMMITTED | SCHEMA_FAILED
         -> DATA_PHASE -> DATA_COMMITTED | DATA_FAILED -> DONE

The schema phase creates every table in one transaction. The data phase runs
two more transactions: the sparse category/attribute rows, then the opening
hours and business rows. Every transaction is rolled back on error and its
connection closed before anything else happens.

Failure policy:
- A schema failure is logged and the run continues with the data phase,
  unless PipelineSettings.continue_on_schema_error is False.
- A data failure always aborts the run with DataExecutionError.
"""

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncEngine

from yelp_loader.config.models import LoaderConfig
from yelp_loader.db.session import get_transaction
from yelp_loader.loader.plan import LoadPlan, build_load_plan
from yelp_loader.loader.statements import LoadBatch, StatementBuilder
from yelp_loader.schema.ddl import DdlAdapter
from yelp_loader.shared.exceptions import (
    BatchExecutionError,
    DataExecutionError,
    SchemaExecutionError,
)
from yelp_loader.shared.logging_utils import get_structured_logger
from yelp_loader.shared.models import BusinessRecord

logger = logging.getLogger(__name__)

# (batch name, statements executed, total statements)
ProgressCallback = Callable[[str, int, int], None]


class PipelineState(str, Enum):
    IDLE = "idle"
    SCHEMA_PHASE = "schema_phase"
    SCHEMA_COMMITTED = "schema_committed"
    SCHEMA_FAILED = "schema_failed"
    DATA_PHASE = "data_phase"
    DATA_COMMITTED = "data_committed"
    DATA_FAILED = "data_failed"
    DONE = "done"


_TRANSITIONS: dict[PipelineState, set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.SCHEMA_PHASE, PipelineState.DATA_PHASE},
    PipelineState.SCHEMA_PHASE: {PipelineState.SCHEMA_COMMITTED, PipelineState.SCHEMA_FAILED},
    PipelineState.SCHEMA_COMMITTED: {PipelineState.DATA_PHASE},
    PipelineState.SCHEMA_FAILED: {PipelineState.DATA_PHASE},
    PipelineState.DATA_PHASE: {PipelineState.DATA_COMMITTED, PipelineState.DATA_FAILED},
    PipelineState.DATA_COMMITTED: {PipelineState.DONE},
    PipelineState.DATA_FAILED: set(),
    PipelineState.DONE: set(),
}


@dataclass
class LoadResult:
    """Outcome of a load run."""

    run_id: str
    state: PipelineState = PipelineState.IDLE
    plan: LoadPlan | None = None
    record_count: int = 0
    statements_executed: dict[str, int] = field(default_factory=dict)
    schema_error: SchemaExecutionError | None = None
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.state is PipelineState.DONE


class LoadPipeline:
    """
    Runs the schema and data phases of a load against one engine.

    A pipeline instance drives a single run; create a new one per run.

    Args:
        engine: Target database engine
        config: Loader configuration (defaults apply when omitted)
        adapter: DDL adapter for the partition tables
        progress_callback: Called every PipelineSettings.progress_interval
            statements and at the end of each batch

    Example:
        >>> pipeline = LoadPipeline(create_engine("data/yelp.db"))
        >>> result = await pipeline.run(records)
        >>> result.success
        True
    """

    def __init__(
        self,
        engine: AsyncEngine,
        config: LoaderConfig | None = None,
        adapter: DdlAdapter | None = None,
        progress_callback: ProgressCallback | None = None,
    ):
        self.engine = engine
        self.config = config or LoaderConfig()
        self.adapter = adapter
        self.progress_callback = progress_callback
        self._state = PipelineState.IDLE
        self.events = get_structured_logger(f"{__name__}.events")
        self.result = LoadResult(run_id=self.events.generate_run_id())

    @property
    def state(self) -> PipelineState:
        return self._state

    def _transition(self, new_state: PipelineState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise RuntimeError(
                f"Invalid pipeline transition {self._state.value} -> {new_state.value}"
            )
        logger.debug(f"Pipeline state {self._state.value} -> {new_state.value}")
        self._state = new_state
        self.result.state = new_state

    def plan(self, records: Iterable[BusinessRecord]) -> LoadPlan:
        """Run the collect stage with this pipeline's partition settings."""
        partitioning = self.config.partitioning
        return build_load_plan(
            list(records),
            partition_count=partitioning.partition_count,
            category_table_prefix=partitioning.category_table_prefix,
            attribute_table_prefix=partitioning.attribute_table_prefix,
            include_attributes=self.config.pipeline.load_attributes,
        )

    async def _execute_batch(
        self, batch: LoadBatch, error_cls: type[BatchExecutionError]
    ) -> int:
        total = len(batch)
        interval = self.config.pipeline.progress_interval
        executed = 0
        try:
            async with get_transaction(self.engine, batch.name) as conn:
                for statement in batch:
                    if statement.params is None:
                        await conn.execute(statement.sql)
                    else:
                        await conn.execute(statement.sql, statement.params)
                    executed += 1
                    if self.progress_callback and executed % interval == 0:
                        self.progress_callback(batch.name, executed, total)
        except Exception as e:
            raise error_cls(batch.name, e) from e

        if self.progress_callback:
            self.progress_callback(batch.name, executed, total)
        self.result.statements_executed[batch.name] = executed
        return executed

    async def create_schema(self, plan: LoadPlan, builder: StatementBuilder | None = None) -> bool:
        """
        Run the schema phase: drop and recreate every table in one transaction.

        Args:
            plan: Load plan from the collect stage
            builder: Statement builder (created from plan when omitted)

        Returns:
            True if the schema transaction committed, False if it failed and
            the failure was tolerated

        Raises:
            SchemaExecutionError: If the schema transaction failed and
                continue_on_schema_error is False
        """
        builder = builder or StatementBuilder(plan, self.adapter)
        self._transition(PipelineState.SCHEMA_PHASE)
        batch = builder.schema_batch()
        self.events.info("Creating tables", phase=batch.name, statements=len(batch))

        try:
            await self._execute_batch(batch, SchemaExecutionError)
        except SchemaExecutionError as e:
            self._transition(PipelineState.SCHEMA_FAILED)
            self.events.error("Table creation rolled back", phase=e.phase, error=str(e.original_error))
            if not self.config.pipeline.continue_on_schema_error:
                raise
            logger.warning(f"✗ Schema phase failed, continuing with data phase: {e}")
            self.result.schema_error = e
            return False

        self._transition(PipelineState.SCHEMA_COMMITTED)
        self.events.info("Tables created", phase=batch.name, tables=len(builder.partition_tables))
        logger.info(f"✓ Created {len(builder.partition_tables)} partition tables")
        return True

    async def load_data(
        self,
        records: Iterable[BusinessRecord],
        plan: LoadPlan,
        builder: StatementBuilder | None = None,
    ) -> None:
        """
        Run the data phase: sparse rows, then business and hours rows.

        Each of the two batches is its own transaction; the entity batch is
        only attempted after the sparse batch committed.

        Args:
            records: Records to insert, in input order
            plan: Load plan the schema was created from
            builder: Statement builder (created from plan when omitted)

        Raises:
            DataExecutionError: If either transaction failed (after rollback)
        """
        records = list(records)
        builder = builder or StatementBuilder(plan, self.adapter)
        self._transition(PipelineState.DATA_PHASE)

        try:
            sparse = builder.sparse_batch(records)
            self.events.info("Inserting categories", phase=sparse.name, statements=len(sparse))
            await self._execute_batch(sparse, DataExecutionError)
            self.events.info("Categories inserted", phase=sparse.name)

            entity = builder.entity_batch(records)
            self.events.info("Inserting businesses and their hours", phase=entity.name, statements=len(entity))
            await self._execute_batch(entity, DataExecutionError)
            self.events.info("Businesses and their hours inserted", phase=entity.name)
        except DataExecutionError as e:
            self._transition(PipelineState.DATA_FAILED)
            self.events.error("Data insert rolled back", phase=e.phase, error=str(e.original_error))
            logger.error(f"✗ Data phase failed: {e}")
            raise

        self._transition(PipelineState.DATA_COMMITTED)

    async def run(self, records: Iterable[BusinessRecord]) -> LoadResult:
        """
        Run a complete load: collect, schema phase, data phase.

        Args:
            records: Every record of the run; consumed once and materialized

        Returns:
            LoadResult with state DONE

        Raises:
            SchemaExecutionError: If the schema failed and the policy is strict
            DataExecutionError: If a data transaction failed
        """
        if self._state is not PipelineState.IDLE:
            raise RuntimeError("LoadPipeline instances run only once")

        start_time = time.monotonic()
        records = list(records)
        self.events.start_run(self.result.run_id)
        self.events.info("Starting load", records=len(records))

        try:
            plan = self.plan(records)
            self.result.plan = plan
            self.result.record_count = len(records)
            builder = StatementBuilder(plan, self.adapter)

            await self.create_schema(plan, builder)
            await self.load_data(records, plan, builder)
            self._transition(PipelineState.DONE)

            self.events.info("Load complete", statements=self.result.statements_executed)
            return self.result
        finally:
            self.result.duration_seconds = time.monotonic() - start_time
            self.events.end_run()

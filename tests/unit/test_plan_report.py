"""Unit tests for the partition summary report."""

from yelp_loader.loader.plan import build_load_plan
from yelp_loader.services.plan_report import SUMMARY_COLUMNS, partition_summary


class TestPartitionSummary:
    """Test partition_summary."""

    def test_one_row_per_table(self, sample_records):
        plan = build_load_plan(sample_records)

        df = partition_summary(plan)

        assert list(df.columns) == SUMMARY_COLUMNS
        assert len(df) == len(plan.tables)
        assert list(df["table"]) == [t.name for t in plan.tables]

    def test_counts(self, sample_records):
        plan = build_load_plan(sample_records)

        df = partition_summary(plan)

        categories = df[df["kind"] == "category"]
        attributes = df[df["kind"] == "attribute"]
        assert categories["columns"].sum() == 3
        assert categories["keys"].sum() == 3
        assert attributes["columns"].sum() == 3

    def test_single_partition(self, sample_records):
        plan = build_load_plan(sample_records, partition_count=1, include_attributes=False)

        df = partition_summary(plan)

        assert df.to_dict("records") == [
            {
                "kind": "category",
                "partition": 0,
                "table": "business_category_1",
                "keys": 3,
                "columns": 3,
            }
        ]

    def test_empty_plan(self):
        df = partition_summary(build_load_plan([]))

        assert df.empty
        assert list(df.columns) == SUMMARY_COLUMNS

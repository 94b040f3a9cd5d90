import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from capbench.benchmark import (
    BATCH_WRITE_ITEM,
    PUT_ITEM,
    PUT_ITEM_CONDITIONAL,
    run_batch_write,
    run_benchmark,
)
from capbench.capacity import CapacityTotals
from capbench.records import build_records
from capbench.services.dynamo import DynamoWriter, StoreWriteError
from capbench.utils.chunk import InvalidArgumentError


def _batch_response(**kwargs):
    requests = kwargs["RequestItems"]["bench"]
    units = float(len(requests))
    return {
        "ConsumedCapacity": [
            {"TableName": "bench", "CapacityUnits": units, "WriteCapacityUnits": units},
        ],
        "UnprocessedItems": {},
    }


class RunBatchWriteTest(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.client.batch_write_item.side_effect = _batch_response
        self.writer = DynamoWriter(client=self.client, table_name="bench")

    def test_sends_one_request_per_group(self) -> None:
        records = build_records(51, 10)

        totals = run_batch_write(self.writer, records, 25)

        sizes = [
            len(call.kwargs["RequestItems"]["bench"])
            for call in self.client.batch_write_item.call_args_list
        ]
        self.assertEqual(sizes, [25, 25, 1])
        self.assertEqual(totals.capacity_units, 51.0)
        self.assertEqual(totals.write_capacity_units, 51.0)

    def test_preserves_record_order_across_requests(self) -> None:
        records = build_records(30, 7)

        run_batch_write(self.writer, records, 25)

        sent = [
            request["PutRequest"]["Item"]["skey"]["S"]
            for call in self.client.batch_write_item.call_args_list
            for request in call.kwargs["RequestItems"]["bench"]
        ]
        self.assertEqual(sent, [record.skey for record in records])

    def test_no_records_means_no_requests(self) -> None:
        totals = run_batch_write(self.writer, [], 25)

        self.assertEqual(totals, CapacityTotals())
        self.client.batch_write_item.assert_not_called()

    def test_invalid_batch_size_aborts_before_writing(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            run_batch_write(self.writer, build_records(5, 5), 0)
        self.client.batch_write_item.assert_not_called()


class RunBenchmarkTest(unittest.TestCase):
    def setUp(self) -> None:
        self.client = MagicMock()
        self.client.put_item.return_value = {
            "ConsumedCapacity": {"TableName": "bench", "CapacityUnits": 1.0, "WriteCapacityUnits": 1.0},
        }
        self.client.batch_write_item.side_effect = _batch_response
        self.writer = DynamoWriter(client=self.client, table_name="bench")

    def test_reports_every_strategy_in_order(self) -> None:
        records = build_records(100, 10)

        with self.assertLogs("capbench.benchmark", level="INFO") as captured:
            report = run_benchmark(self.writer, records, batch_size=25)

        self.assertEqual(list(report), [PUT_ITEM, PUT_ITEM_CONDITIONAL, BATCH_WRITE_ITEM])
        for totals in report.values():
            self.assertEqual(totals, CapacityTotals(100.0, 0.0, 100.0))
        self.assertEqual(self.client.put_item.call_count, 200)
        self.assertEqual(self.client.batch_write_item.call_count, 4)

        headers = [line for line in captured.output if "consumed capacity:" in line]
        self.assertEqual(len(headers), 3)

    def test_first_failure_aborts_remaining_strategies(self) -> None:
        self.client.put_item.side_effect = [
            {"ConsumedCapacity": {"CapacityUnits": 1.0}},
            ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "Slow down"}},
                "PutItem",
            ),
        ]

        with self.assertRaises(StoreWriteError):
            run_benchmark(self.writer, build_records(10, 10), batch_size=25)

        self.assertEqual(self.client.put_item.call_count, 2)
        self.client.batch_write_item.assert_not_called()


if __name__ == "__main__":
    unittest.main()

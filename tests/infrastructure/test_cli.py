"""End-to-end tests for the click CLI against a temporary JSON store."""

import json

import pytest
from click.testing import CliRunner

from procure.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(
            cli,
            ["--data-dir", str(tmp_path), "--log-level", "ERROR", "--actor", "clerk", *args],
        )

    return invoke


def _seed(run):
    assert run("supplier", "add", "--name", "Acme").exit_code == 0
    assert run("product", "add", "--code", "P1", "--name", "Bolt", "--price", "0.50", "--stock", "5").exit_code == 0
    result = run("order", "create", "--number", "PO-1", "--supplier-id", "1", "--line", "1:10")
    assert result.exit_code == 0, result.output


class TestProductCommands:

    def test_add_and_show(self, run):
        result = run("product", "add", "--code", "P1", "--name", "Bolt", "--price", "0.50", "--stock", "3")
        assert result.exit_code == 0
        assert "Product #1 'P1' added at 0.50 (stock=3)" in result.output

        shown = json.loads(run("product", "show", "--code", "P1").output)
        assert shown["currentStock"] == 3

    def test_duplicate_code_is_a_usage_failure(self, run):
        run("product", "add", "--code", "P1", "--name", "Bolt", "--price", "0.50")
        result = run("product", "add", "--code", "P1", "--name", "Other", "--price", "1.00")
        assert result.exit_code == 1
        assert "Duplicate product code: 'P1'" in result.output


class TestOrderCommands:

    def test_receive_prints_summary(self, run):
        _seed(run)
        result = run("order", "receive", "--id", "1", "--line", "1:4", "--date", "2026-03-01")

        assert result.exit_code == 0, result.output
        summary = json.loads(result.output)
        assert summary["status"] == "PARTIAL"
        assert summary["receivedDate"] == "2026-03-01"
        assert summary["receivedDetails"][0]["quantityPending"] == 6

        shown = json.loads(run("order", "show", "--number", "PO-1", "--json").output)
        assert shown["status"] == "PARTIAL"

    def test_receive_from_payload_file(self, run, tmp_path):
        _seed(run)
        payload = tmp_path / "batch.json"
        payload.write_text(json.dumps({
            "receivedDetails": [{"orderDetailId": 1, "quantityReceived": 10}],
            "idempotencyKey": "delivery-7",
        }))

        first = run("order", "receive", "--id", "1", "--payload", str(payload))
        second = run("order", "receive", "--id", "1", "--payload", str(payload))

        assert first.exit_code == 0 and second.exit_code == 0
        assert json.loads(first.output) == json.loads(second.output)
        product = json.loads(run("product", "show", "--id", "1").output)
        assert product["currentStock"] == 15

    def test_over_receipt_rejected(self, run):
        _seed(run)
        result = run("order", "receive", "--id", "1", "--line", "1:11")
        assert result.exit_code == 1
        assert "only 10 pending" in result.output

    def test_line_and_payload_are_exclusive(self, run):
        result = run("order", "receive", "--id", "1")
        assert result.exit_code == 2


class TestStockCommands:

    def test_deduct_success_and_error(self, run):
        _seed(run)
        ok = run("stock", "deduct", "--code", "P1", "--quantity", "2")
        assert ok.exit_code == 0
        assert json.loads(ok.output)["currentStock"] == 3

        short = run("stock", "deduct", "--code", "P1", "--quantity", "9")
        assert short.exit_code == 1
        assert json.loads(short.output)["status"] == "ERROR"

    def test_reconcile_balanced(self, run):
        _seed(run)
        run("order", "receive", "--id", "1", "--line", "1:10")
        run("stock", "adjust", "--product-id", "1", "--to", "12")

        result = run("stock", "reconcile")
        assert result.exit_code == 0
        assert json.loads(result.output)["allBalanced"] is True

    def test_reconcile_reports_drift(self, run, tmp_path):
        _seed(run)
        products = json.loads((tmp_path / "products.json").read_text())
        products[0]["current_stock"] = 99
        (tmp_path / "products.json").write_text(json.dumps(products))

        result = run("stock", "reconcile")
        assert result.exit_code == 1
        assert json.loads(result.output)["allBalanced"] is False

    def test_audit_trail_written(self, run, tmp_path):
        _seed(run)
        run("stock", "deduct", "--code", "P1", "--quantity", "1")

        facts = [json.loads(line) for line in (tmp_path / "audit.jsonl").read_text().splitlines()]
        assert [f["action"] for f in facts] == ["CREATE", "CREATE", "CREATE", "STOCK_DECREASE"]
        assert {f["actor"] for f in facts} == {"clerk"}

"""Application service: Ledger Reconciliation report (query).

Checks, product by product, that the stock on hand equals the signed
sum of the ledger. Any difference means stock changed outside the
ledger and needs investigating.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from procure.application.dto import LedgerBalanceDTO, ReconciliationReportDTO
from procure.domain.repository.unit_of_work import UnitOfWork
from procure.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class ReconcileLedgerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> ReconciliationReportDTO:
        with self._uow as uow:
            ledger = StockLedger(uow.products, uow.movements)
            balances = [ledger.balance(p) for p in uow.products.list_all()]

        report = ReconciliationReportDTO(
            balances=[
                LedgerBalanceDTO(
                    product_id=b.product_id,
                    product_code=b.code,
                    current_stock=b.current_stock,
                    ledger_stock=b.ledger_stock,
                    movement_count=b.movement_count,
                    balanced=b.is_balanced,
                )
                for b in balances
            ],
            generated_at=datetime.now(timezone.utc).isoformat(),
        )
        for bad in report.discrepancies:
            logger.warning(
                "ledger.discrepancy",
                product_code=bad.product_code,
                current_stock=bad.current_stock,
                ledger_stock=bad.ledger_stock,
            )
        return report

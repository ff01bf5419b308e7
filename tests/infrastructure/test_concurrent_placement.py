"""Concurrent placements against one JSON data file must never oversell.

Covers both threads of one process and separate processes (each CLI call
is its own process).
"""

import os
import subprocess
import sys
import threading
from pathlib import Path

import pytest

from checkout.application.dto import CartItemSpec
from checkout.application.place_order import PlaceOrderHandler
from checkout.domain.model.order import CustomerInfo
from checkout.domain.model.placement import PlacementErrorKind
from checkout.domain.model.product import Product
from checkout.domain.model.value_objects import Money, Quantity
from checkout.domain.service.order_placement_service import OrderPlacementService
from checkout.infrastructure.bootstrap import unit_of_work_factory
from checkout.infrastructure.config import Settings

REPO_ROOT = Path(__file__).resolve().parents[2]

CUSTOMER = CustomerInfo("Alice", "alice@example.com", "555", "1 Main St", "12345", "Springfield", "IL")

# Runs in a separate interpreter: place one unit of p1, print the outcome last.
PLACE_ONE_SCRIPT = """
import sys
from pathlib import Path

from checkout.application.dto import CartItemSpec
from checkout.application.place_order import PlaceOrderHandler
from checkout.domain.model.order import CustomerInfo
from checkout.infrastructure.bootstrap import unit_of_work_factory
from checkout.infrastructure.config import Settings

factory = unit_of_work_factory(Settings(data_dir=Path(sys.argv[1]), environment="test"))
customer = CustomerInfo("Bob", "bob@example.com", "556", "2 Side St", "54321", "Shelbyville", "IL")
result = PlaceOrderHandler(factory).handle(customer, [CartItemSpec("p1", 1)])
print("placed" if result.ok else result.error.kind.value)
"""


def _factory(tmp_path, stock: int):
    factory = unit_of_work_factory(Settings(data_dir=tmp_path, environment="test"))
    with factory() as uow:
        uow.products.save(
            Product(id="p1", name="Widget", category="Tools", price=Money.of("10"), stock=stock)
        )
        uow.commit()
    return factory


def _child_env() -> dict[str, str]:
    env = dict(os.environ)
    paths = [str(REPO_ROOT / "src"), str(REPO_ROOT)]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


class TestConcurrentThreads:

    def test_threads_never_oversell(self, tmp_path):
        factory = _factory(tmp_path, stock=5)
        handler = PlaceOrderHandler(factory)
        start = threading.Barrier(8)
        outcomes = []
        outcomes_guard = threading.Lock()

        def place_one():
            start.wait()
            result = handler.handle(CUSTOMER, [CartItemSpec("p1", 1)])
            with outcomes_guard:
                outcomes.append(result)

        workers = [threading.Thread(target=place_one) for _ in range(8)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        placed = [r for r in outcomes if r.ok]
        rejected = [r for r in outcomes if not r.ok]
        assert len(placed) == 5
        assert {r.error.kind for r in rejected} == {PlacementErrorKind.OUT_OF_STOCK}

        with factory() as uow:
            assert uow.products.get_by_id("p1").stock == 0
            assert uow.orders._records.keys() == {r.value.id for r in placed}


class TestConcurrentProcesses:

    def test_other_process_waits_for_open_unit_of_work(self, tmp_path):
        factory = _factory(tmp_path, stock=1)

        with factory() as uow:
            order = OrderPlacementService(uow.products, uow.orders).place(
                CUSTOMER, [("p1", Quantity(1))]
            )

            child = subprocess.Popen(
                [sys.executable, "-c", PLACE_ONE_SCRIPT, str(tmp_path)],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                env=_child_env(),
            )
            # The child must block on the data file while this unit of work is open.
            with pytest.raises(subprocess.TimeoutExpired):
                child.wait(timeout=2)

            uow.commit()

        out, err = child.communicate(timeout=60)
        assert child.returncode == 0, err
        assert out.strip().splitlines()[-1] == PlacementErrorKind.OUT_OF_STOCK.value

        with factory() as uow:
            assert uow.products.get_by_id("p1").stock == 0
            assert list(uow.orders._records) == [order.id]

"""Тесты конкурентного доступа к леджеру.

Coverage:
- Переводы из нескольких потоков сериализуются под RLock
- Сумма балансов сохраняется, каждое событие записано и доставлено один раз
"""

import threading

from src.core.domain import TransferEvent
from tests.conftest import ALICE, BOB, CAROL, DAVE, OWNER, sum_of_balances, tokens

SENDERS = [ALICE, BOB, CAROL, DAVE]
TRANSFERS_PER_THREAD = 50


class TestConcurrentTransfers:
    """Параллельные переводы."""

    def test_threads_are_serialised(self, bare_ledger):
        for sender in SENDERS:
            bare_ledger.transfer(OWNER, sender, tokens(10_000))

        events_before = len(bare_ledger.events)
        delivered = []
        active = []
        overlaps = []

        def recording(event):
            # подписчик вызывается под блокировкой леджера
            if active:
                overlaps.append(event)
            active.append(event)
            delivered.append(event)
            active.pop()

        bare_ledger.subscribe(recording)

        barrier = threading.Barrier(len(SENDERS))
        errors = []

        def worker(index):
            sender = SENDERS[index]
            recipient = SENDERS[(index + 1) % len(SENDERS)]
            try:
                barrier.wait()
                for _ in range(TRANSFERS_PER_THREAD):
                    bare_ledger.transfer(sender, recipient, tokens(10))
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=worker, args=(i,)) for i in range(len(SENDERS))
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert not any(thread.is_alive() for thread in threads)
        assert errors == []
        assert overlaps == []

        expected = len(SENDERS) * TRANSFERS_PER_THREAD
        new_events = bare_ledger.events[events_before:]
        assert len(new_events) == expected
        assert all(isinstance(e, TransferEvent) for e in new_events)
        assert delivered == list(new_events)

        gap = bare_ledger.total_supply() - sum_of_balances(bare_ledger)
        assert 0 <= gap <= len(bare_ledger.holders)

    def test_concurrent_reads_during_transfers(self, bare_ledger):
        bare_ledger.transfer(OWNER, ALICE, tokens(10_000))
        stop = threading.Event()
        errors = []

        def reader():
            try:
                while not stop.is_set():
                    snapshot = bare_ledger.snapshot()
                    assert snapshot.supply.rate > 0
            except Exception as e:
                errors.append(e)

        thread = threading.Thread(target=reader)
        thread.start()
        try:
            for _ in range(TRANSFERS_PER_THREAD):
                bare_ledger.transfer(ALICE, BOB, tokens(1))
        finally:
            stop.set()
            thread.join(timeout=30)

        assert errors == []
        assert bare_ledger.balance_of(BOB) > 0

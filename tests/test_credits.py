from countgame.credits import MILLIS_PER_DAY, CreditLedger, next_midnight_millis
from countgame.models import Credits


def test_next_midnight():
    assert next_midnight_millis(0) == MILLIS_PER_DAY
    assert next_midnight_millis(MILLIS_PER_DAY - 1) == MILLIS_PER_DAY
    assert next_midnight_millis(MILLIS_PER_DAY) == 2 * MILLIS_PER_DAY
    assert next_midnight_millis(5 * MILLIS_PER_DAY + 123) == 6 * MILLIS_PER_DAY


def test_initial_balance_is_daily_grant(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    credits = ledger.get()
    assert credits.current == 10
    assert credits.next_reset_millis == 20001 * MILLIS_PER_DAY


def test_consume_decrements_by_one(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    assert ledger.consume() is True
    assert ledger.get().current == 9


def test_consume_refused_on_empty_balance(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    ledger.update(Credits(current=0, next_reset_millis=ledger.get().next_reset_millis))
    assert ledger.consume() is False
    assert ledger.get().current == 0


def test_read_at_reset_time_refills(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    for _ in range(4):
        ledger.consume()
    reset_at = ledger.get().next_reset_millis

    clock.now = reset_at
    credits = ledger.get()
    assert credits.current == 10
    assert credits.next_reset_millis == reset_at + MILLIS_PER_DAY


def test_consume_after_reset_time_uses_fresh_grant(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    ledger.update(Credits(current=0, next_reset_millis=ledger.get().next_reset_millis))
    clock.now += MILLIS_PER_DAY
    assert ledger.consume() is True
    assert ledger.get().current == 9


def test_grant_daily_publishes_snapshot(config, clock):
    ledger = CreditLedger(config=config, clock=clock)
    seen = []
    ledger.observable.subscribe(seen.append)
    ledger.consume()
    granted = ledger.grant_daily()
    assert granted.current == 10
    assert [c.current for c in seen] == [10, 9, 10]

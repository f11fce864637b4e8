import itertools
import re
from datetime import datetime, timezone

from orders.services import generate_order_code

FIXED = datetime(2025, 1, 14, 9, 30, 12, tzinfo=timezone.utc)


def fixed_now():
    return FIXED


def test_code_format():
    code = generate_order_code(exists=lambda code: False)
    assert re.fullmatch(r"ORD-\d{12}-\d{3}", code)
    suffix = int(code.rsplit("-", 1)[1])
    assert 100 <= suffix <= 999


def test_code_uses_utc_timestamp():
    code = generate_order_code(exists=lambda code: False, now=fixed_now, randint=lambda a, b: 482)
    assert code == "ORD-250114093012-482"


def test_colliding_code_is_regenerated():
    suffixes = iter([111, 111, 222])
    taken = {"ORD-250114093012-111"}
    code = generate_order_code(exists=taken.__contains__, now=fixed_now, randint=lambda a, b: next(suffixes))
    assert code == "ORD-250114093012-222"


def test_every_suffix_in_one_second_is_reachable_and_unique():
    taken = set()
    counter = itertools.count()

    def sequential(low, high):
        return low + next(counter) % (high - low + 1)

    for _ in range(900):
        taken.add(generate_order_code(exists=taken.__contains__, now=fixed_now, randint=sequential))

    assert len(taken) == 900
    assert min(taken) == "ORD-250114093012-100"
    assert max(taken) == "ORD-250114093012-999"

import re
import secrets

from saferoute.common import ids


def test_new_id_is_128_bit_hex():
    value = ids.new_id()
    assert re.fullmatch(r"[0-9a-f]{32}", value)


def test_new_id_does_not_repeat():
    values = {ids.new_id() for _ in range(1000)}
    assert len(values) == 1000


def test_new_id_falls_back_to_counter_without_random_source(monkeypatch):
    def no_entropy(nbytes=None):
        raise NotImplementedError

    monkeypatch.setattr(secrets, "token_hex", no_entropy)

    values = [ids.new_id() for _ in range(50)]

    assert len(set(values)) == 50
    assert all(re.fullmatch(r"[0-9a-f]{32}", v) for v in values)
    assert values == sorted(values)

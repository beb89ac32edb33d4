import threading

import pytest

from mrprime import config, rng
from mrprime.rng import CountingSource, Generator, PyRandomSource


def entropy_file(tmp_path, data: bytes) -> str:
    path = tmp_path / "entropy.bin"
    path.write_bytes(data)
    return str(path)


def test_draws_stay_in_range(gen) -> None:
    for lo, hi in [(0, 1), (2, 9), (-50, 50), (10**30, 10**30 + 5), (0, 2**300)]:
        for _ in range(10_000):
            v = gen.uniform(lo, hi)
            assert lo <= v <= hi
            assert isinstance(v, int)


def test_every_value_reached(gen) -> None:
    seen = {gen.uniform(0, 9) for _ in range(10_000)}
    assert seen == set(range(10))


def test_single_value_range_skips_generator() -> None:
    g = Generator()
    for _ in range(10_000):
        assert g.uniform(42, 42) == 42
    assert not g.initialized


def test_empty_range_is_an_error(gen) -> None:
    with pytest.raises(ValueError):
        gen.uniform(5, 4)


@pytest.mark.parametrize("factory", [rng.GmpRandomSource, PyRandomSource])
def test_fixed_seed_is_reproducible(factory) -> None:
    a, b = Generator(factory), Generator(factory)
    a.seed_from_bytes(b"\x01\x02\x03\x04")
    b.seed_from_bytes(b"\x01\x02\x03\x04")
    assert [a.uniform(0, 2**128) for _ in range(100)] == [b.uniform(0, 2**128) for _ in range(100)]


def test_different_seeds_differ() -> None:
    a, b = Generator(), Generator()
    a.seed_value(1)
    b.seed_value(2)
    assert [a.uniform(0, 2**64) for _ in range(10)] != [b.uniform(0, 2**64) for _ in range(10)]


def test_seed_reads_entropy_msb_first(tmp_path) -> None:
    path = entropy_file(tmp_path, b"\x00\x01\x02\x03\xff")
    g = Generator(entropy_path=path)
    assert g.seed(4) == 4
    assert g.seed_used == 0x00010203

    h = Generator(entropy_path=path)
    h.seed(4)
    assert [g.uniform(0, 1000) for _ in range(20)] == [h.uniform(0, 1000) for _ in range(20)]


def test_missing_entropy_falls_back_to_time(tmp_path, capsys) -> None:
    g = Generator(entropy_path=str(tmp_path / "nope"))
    assert g.seed(32) == 0
    assert g.initialized
    assert g.seed_used > 0
    assert "entropy_unavailable" in capsys.readouterr().err


def test_short_entropy_read_falls_back(tmp_path, capsys) -> None:
    g = Generator(entropy_path=entropy_file(tmp_path, b"\x01\x02"))
    assert g.seed(8) == 0
    assert "entropy_short" in capsys.readouterr().err


def test_zero_bytes_seeds_from_time() -> None:
    g = Generator()
    assert g.seed(0) == 0
    assert g.initialized


def test_negative_byte_count() -> None:
    with pytest.raises(ValueError):
        Generator().seed(-1)


def test_lazy_init_and_release(tmp_path) -> None:
    path = entropy_file(tmp_path, b"\x07\x08\x09\x0a")
    g = Generator(entropy_path=path, default_seed_bytes=4)
    assert not g.initialized
    g.uniform(0, 10)
    assert g.initialized
    assert g.seed_used == 0x0708090A

    g.release()
    assert not g.initialized
    assert g.seed_used is None
    g.uniform(0, 10)
    assert g.seed_used == 0x0708090A


def test_counting_source() -> None:
    g = Generator(source_factory=CountingSource)
    g.seed_value(5)
    for _ in range(17):
        g.uniform(0, 100)
    g.uniform(3, 3)
    assert g.source.calls == 17


def test_module_level_functions() -> None:
    rng.release_generator()
    assert not rng.default_generator().initialized
    assert rng.seed(0) == 0
    for _ in range(1000):
        assert 10 <= rng.uniform(10, 20) <= 20
    rng.release_generator()
    assert not rng.default_generator().initialized
    assert 0 <= rng.uniform(0, 1) <= 1
    assert rng.default_generator().initialized


def test_default_generator_is_per_thread() -> None:
    mine = rng.default_generator()
    theirs = []
    t = threading.Thread(target=lambda: theirs.append(rng.default_generator()))
    t.start()
    t.join()
    assert theirs[0] is not mine
    assert rng.default_generator() is mine


def test_fallback_survives_unwritable_log(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(config, "LOG_PATH", str(tmp_path / "no-such-dir" / "mrprime.log"))
    g = Generator(entropy_path=str(tmp_path / "nope"))
    assert g.seed(32) == 0
    assert g.initialized

    lazy = Generator(entropy_path=str(tmp_path / "nope"))
    assert 0 <= lazy.uniform(0, 10) <= 10
    err = capsys.readouterr().err
    assert "log_file_unwritable" in err
    assert "entropy_unavailable" in err

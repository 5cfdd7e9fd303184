import pytest

from heapsim.address_space import AddressSpace


@pytest.fixture
def space():
    return AddressSpace(base=0x4000, limit=0x4000 + 4096)


def test_initial_break_is_base(space):
    assert space.sbrk(0) == space.base


def test_sbrk_returns_previous_break(space):
    first = space.sbrk(100)
    second = space.sbrk(50)
    assert first == space.base
    assert second == space.base + 100
    assert space.sbrk(0) == space.base + 150


def test_negative_sbrk_shrinks(space):
    space.sbrk(200)
    previous = space.sbrk(-80)
    assert previous == space.base + 200
    assert space.current_break == space.base + 120


def test_sbrk_beyond_limit_fails_and_keeps_break(space):
    space.sbrk(10)
    with pytest.raises(MemoryError):
        space.sbrk(space.limit)
    assert space.sbrk(0) == space.base + 10


def test_sbrk_up_to_limit_is_allowed(space):
    space.sbrk(space.limit - space.base)
    assert space.current_break == space.limit


def test_sbrk_below_base_fails(space):
    with pytest.raises(MemoryError):
        space.sbrk(-1)
    assert space.sbrk(0) == space.base


def test_brk_sets_break(space):
    space.brk(space.base + 64)
    assert space.sbrk(0) == space.base + 64
    space.brk(space.base + 16)
    assert space.sbrk(0) == space.base + 16


def test_brk_outside_range_fails(space):
    with pytest.raises(MemoryError):
        space.brk(space.base - 1)
    with pytest.raises(MemoryError):
        space.brk(space.limit + 1)
    assert space.current_break == space.base


def test_write_read_round_trip(space):
    start = space.sbrk(32)
    space.write(start + 4, b"hello heap")
    assert space.read(start + 4, len(b"hello heap")) == b"hello heap"


def test_new_memory_reads_as_zero(space):
    start = space.sbrk(16)
    assert space.read(start, 16) == bytes(16)


def test_memory_is_cleared_after_shrink_and_regrow(space):
    start = space.sbrk(16)
    space.write(start, b"\xff" * 16)
    space.brk(start)
    space.sbrk(16)
    assert space.read(start, 16) == bytes(16)


def test_read_past_break_raises(space):
    start = space.sbrk(8)
    with pytest.raises(IndexError):
        space.read(start, 9)


def test_write_below_base_raises(space):
    space.sbrk(8)
    with pytest.raises(IndexError):
        space.write(space.base - 1, b"x")


def test_access_after_shrink_raises(space):
    start = space.sbrk(8)
    space.write(start, b"abc")
    space.brk(start)
    with pytest.raises(IndexError):
        space.read(start, 1)


def test_negative_read_size_rejected(space):
    start = space.sbrk(8)
    with pytest.raises(ValueError):
        space.read(start, -1)


def test_limit_below_base_rejected():
    with pytest.raises(ValueError):
        AddressSpace(base=100, limit=50)


def test_default_limit_lies_above_base():
    space = AddressSpace()
    assert space.limit > space.base
    assert space.sbrk(0) == space.base
# heapsim

`heapsim` is a small model of a first-fit heap allocator. The heap sits on top of
a simulated program break. All of it runs inside Python, and nothing touches real
process memory.

You can use it to watch how blocks are cut from slabs and how free neighbours are
merged. You can also see the break move down again once the blocks at the end of
the heap are released.

## Modules

### `heapsim.address_space`

`AddressSpace(base=0x10000000, limit=None)` is a contiguous byte region. It starts
at `base` and ends at the current break. When `limit` is not given, it defaults to
`base` plus 64 MiB.

- `sbrk(delta)` moves the break by `delta` bytes and returns the previous break.
- `brk(address)` sets the break to `address`.
- `current_break` is the first address past the end of the segment.
- `read(address, size)` returns the bytes at that address.
- `write(address, data)` stores bytes at that address.

Memory that was just granted reads as zero bytes.

`sbrk` and `brk` raise `MemoryError` when the break would leave `[base, limit]`.
In that case the break stays where it was. `read` and `write` raise `IndexError`
for any access outside `[base, break)`.

### `heapsim.allocator`

`Allocator(space=None)` manages a heap on an `AddressSpace`. If you do not pass
one, it creates a fresh `AddressSpace`.

- `malloc(size)` returns the address of a block with at least `size` usable
  bytes. It returns `None` if `size` is not positive or if the break cannot grow.
- `calloc(num_memb, size_each)` works like `malloc` for
  `num_memb * size_each` bytes and fills the block with zeros. It returns `None`
  if either argument is not positive.
- `free(ptr)` releases a block. A null pointer (`None` or `0`) is ignored.
- `new(size)` works like `malloc`, but raises `OutOfMemoryError` instead of
  returning `None`.
- `delete(ptr)` works like `free`, but raises `InvalidPointerError` for a null
  pointer.
- `total_used_memory()` returns the number of bytes held by blocks in use.
- `free_block_info(kind)` describes the first free block. It returns the block's
  size when `kind` is non-zero, and its address when `kind` is `0`. It returns `0`
  when there is no free block.
- `blocks()` returns copies of the `MemoryBlock` records, in address order. Each
  record has the fields `address`, `size`, `is_free` and `pointer`.

#### How the heap behaves

- **Slabs.** The heap takes memory from the break in slabs of at least 8 KiB.
  Each block carries a 32-byte header in front of its usable bytes.
- **Reuse.** A free block is reused first-fit and is not split. A reused block
  keeps its full size, and that full size counts towards `total_used_memory()`.
- **Merging.** When a block is freed, neighbouring free blocks are merged.
- **Shrinking.** Free blocks at the end of the heap are given back by lowering
  the break.

## Errors

The allocator's errors all derive from `AllocatorError`:

- `InvalidPointerError` is raised when you free a pointer the heap never handed
  out. `delete` also raises it for a null pointer.
- `DoubleFreeError` is raised when you free a block that is already free.
- `OutOfMemoryError` is raised by `new`. It is also a `MemoryError`.

## Example

```python
from heapsim.address_space import AddressSpace
from heapsim.allocator import Allocator

space = AddressSpace(base=0x10000, limit=1 << 20)
heap = Allocator(space)

a = heap.malloc(16)
b = heap.malloc(32)
assert heap.total_used_memory() == 48

space.write(a, b"hello")
assert space.read(a, 5) == b"hello"

heap.free(a)
assert heap.free_block_info(1) == 16   # size of first free block
assert heap.free_block_info(0) == a    # its address

heap.free(b)                           # the break moves back down
assert heap.total_used_memory() == 0
assert space.current_break == space.base
```

## What it does not do

`heapsim` is a library only. It has no command-line program. It does not replace
or hook the allocator of the running process. It does not detect buffer overruns
inside the simulated heap: a write that stays within `[base, break)` always
succeeds, even if it crosses the end of a block.
"""A first-fit heap allocator that grows and shrinks a simulated break."""

from dataclasses import dataclass, replace

from heapsim.address_space import AddressSpace

CHUNK_SIZE = 8 * 1024
_HEADER_SIZE = 32
_PTRDIFF_MAX = 2**63 - 1


@dataclass
class MemoryBlock:
    """Bookkeeping for one block: header address, usable size and state."""

    address: int
    size: int
    is_free: bool
    pointer: int


class AllocatorError(Exception):
    """Base class for misuse of the allocator."""


class InvalidPointerError(AllocatorError):
    """A pointer that the allocator never handed out was released."""


class DoubleFreeError(AllocatorError):
    """A block was released twice."""


class OutOfMemoryError(AllocatorError, MemoryError):
    """An allocation through ``new`` could not be satisfied."""


class Allocator:
    """Hands out blocks carved from chunks obtained by moving the break.

    Free blocks are reused first-fit without splitting; neighbouring free
    blocks are merged, and free blocks at the end of the heap are given back
    by lowering the break.
    """

    def __init__(self, space=None):
        self.space = space if space is not None else AddressSpace()
        self._blocks = []
        self._chunk_ptr = None
        self._chunk_end = None
        self._total_used = 0

    def malloc(self, size):
        """Return the address of at least ``size`` usable bytes, or None."""
        if size <= 0 or size > _PTRDIFF_MAX:
            return None
        block = self._find_free(size)
        if block is None:
            block = self._allocate_block(size)
            if block is None:
                return None
        else:
            block.is_free = False
        self._total_used += block.size
        return block.pointer

    def calloc(self, num_memb, size_each):
        """Allocate ``num_memb * size_each`` zeroed bytes, or return None."""
        if num_memb <= 0 or size_each <= 0:
            return None
        total = num_memb * size_each
        pointer = self.malloc(total)
        if pointer is None:
            return None
        self.space.write(pointer, bytes(total))
        return pointer

    def free(self, ptr):
        """Release the block at ``ptr``; a null pointer is ignored."""
        if not ptr:
            return
        block = next((b for b in self._blocks if b.pointer == ptr), None)
        if block is None:
            raise InvalidPointerError(f"pointer {ptr:#x} was not allocated")
        if block.is_free:
            raise DoubleFreeError(f"pointer {ptr:#x} was already freed")
        block.is_free = True
        self._total_used -= block.size
        self._coalesce()
        self._shrink_break()

    def new(self, size):
        """Allocate ``size`` bytes, raising OutOfMemoryError on failure."""
        pointer = self.malloc(size)
        if pointer is None:
            raise OutOfMemoryError(f"cannot allocate {size} bytes")
        return pointer

    def delete(self, ptr):
        """Release memory from ``new``; deleting a null pointer is an error."""
        if not ptr:
            raise InvalidPointerError("delete of a null pointer")
        self.free(ptr)

    def total_used_memory(self):
        """Bytes held by blocks currently in use."""
        return self._total_used

    def free_block_info(self, kind):
        """Describe the first free block: its size if ``kind`` is non-zero,
        else its address; 0 when there is no free block."""
        block = next((b for b in self._blocks if b.is_free), None)
        if block is None:
            return 0
        return block.size if kind != 0 else block.pointer

    def blocks(self):
        """Snapshots of all blocks in address order."""
        return [replace(block) for block in self._blocks]

    def _find_free(self, size):
        return next(
            (b for b in self._blocks if b.is_free and b.size >= size), None
        )

    def _allocate_block(self, size):
        total = _HEADER_SIZE + size
        if self._chunk_ptr is None or self._chunk_ptr + total > self._chunk_end:
            grab = max(total, CHUNK_SIZE)
            try:
                slab = self.space.sbrk(grab)
            except MemoryError:
                return None
            self._chunk_ptr = slab
            self._chunk_end = slab + grab
        address = self._chunk_ptr
        self._chunk_ptr += total
        block = MemoryBlock(
            address=address,
            size=size,
            is_free=False,
            pointer=address + _HEADER_SIZE,
        )
        self._blocks.append(block)
        return block

    def _coalesce(self):
        merged = []
        for block in self._blocks:
            if merged and merged[-1].is_free and block.is_free:
                merged[-1].size += block.size
            else:
                merged.append(block)
        self._blocks = merged

    def _shrink_break(self):
        while self._blocks and self._blocks[-1].is_free:
            block = self._blocks[-1]
            try:
                self.space.brk(block.address)
            except MemoryError:
                return
            self._chunk_ptr = None
            self._chunk_end = None
            self._blocks.pop()
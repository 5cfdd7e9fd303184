"""A simulated data segment whose end (the program break) can be moved."""

DEFAULT_BASE = 0x1000_0000
DEFAULT_SIZE_LIMIT = 64 * 1024 * 1024


class AddressSpace:
    """A contiguous heap region that starts at ``base`` and ends at the break.

    The break may move anywhere between ``base`` and ``limit``.  Memory
    between ``base`` and the break is readable and writable; newly granted
    memory reads as zero bytes.
    """

    def __init__(self, base=DEFAULT_BASE, limit=None):
        if limit is None:
            limit = base + DEFAULT_SIZE_LIMIT
        if base < 0:
            raise ValueError("base address must not be negative")
        if limit < base:
            raise ValueError("limit must not lie below the base address")
        self.base = base
        self.limit = limit
        self._memory = bytearray()

    @property
    def current_break(self):
        """The first address past the end of the segment."""
        return self.base + len(self._memory)

    def sbrk(self, delta):
        """Move the break by ``delta`` bytes and return the previous break.

        Raises MemoryError if the new break would leave the allowed range;
        the break is then left where it was.
        """
        previous = self.current_break
        self._move_break(previous + delta)
        return previous

    def brk(self, address):
        """Set the break to ``address``.

        Raises MemoryError if the address lies outside the allowed range.
        """
        self._move_break(address)

    def read(self, address, size):
        """Return ``size`` bytes starting at ``address``."""
        if size < 0:
            raise ValueError("size must not be negative")
        offset = self._offset(address, size)
        return bytes(self._memory[offset:offset + size])

    def write(self, address, data):
        """Store ``data`` starting at ``address``."""
        data = bytes(data)
        offset = self._offset(address, len(data))
        self._memory[offset:offset + len(data)] = data

    def _offset(self, address, size):
        if address < self.base or address + size > self.current_break:
            raise IndexError(
                f"segmentation fault: access of {size} bytes at {address:#x} "
                f"outside [{self.base:#x}, {self.current_break:#x})"
            )
        return address - self.base

    def _move_break(self, new_break):
        if not self.base <= new_break <= self.limit:
            raise MemoryError(
                f"cannot move break to {new_break:#x}: "
                f"allowed range is [{self.base:#x}, {self.limit:#x}]"
            )
        size = new_break - self.base
        if size < len(self._memory):
            del self._memory[size:]
        else:
            self._memory.extend(bytes(size - len(self._memory)))
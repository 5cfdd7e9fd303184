"""A simulated first-fit heap allocator over a movable program break."""

__version__ = "0.1.0"
__all__ = ["address_space", "allocator"]
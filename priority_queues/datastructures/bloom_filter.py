"""Bloom filter backed by an exact-membership container.

The bit mask answers "definitely absent" quickly; values that pass the mask
are confirmed against the container, so :meth:`BloomFilter.contains` never
reports a false positive.
"""

from __future__ import annotations

import logging
import math
import struct
from typing import Callable, Generic, Iterator, Optional, TypeVar

from .dynamic_array import DynamicArray
from .heap import HasLength

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MASK64 = 0xFFFFFFFFFFFFFFFF


def murmur_hash64a(data: bytes, seed: int = 0) -> int:
    """MurmurHash64A of `data` under a 64-bit `seed`."""
    m = 0xC6A4A7935BD1E995
    r = 47

    length = len(data)
    h = (seed ^ (length * m)) & _MASK64

    nblocks = length // 8
    for i in range(nblocks):
        k = struct.unpack_from("<Q", data, i * 8)[0]
        k = (k * m) & _MASK64
        k ^= k >> r
        k = (k * m) & _MASK64
        h ^= k
        h = (h * m) & _MASK64

    tail = data[nblocks * 8:]
    if tail:
        for i in range(len(tail) - 1, -1, -1):
            h ^= tail[i] << (8 * i)
        h = (h * m) & _MASK64

    h ^= h >> r
    h = (h * m) & _MASK64
    h ^= h >> r
    return h


def to_bytes(value: object) -> bytes:
    """Encode a value for hashing.

    bytes pass through, str is UTF-8, int is little-endian signed, float is an
    IEEE-754 double; anything else hashes its repr.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bool):
        return b"\x01" if value else b"\x00"
    if isinstance(value, int):
        return value.to_bytes((value.bit_length() + 8) // 8, "little", signed=True)
    if isinstance(value, float):
        return struct.pack("<d", value)
    return repr(value).encode("utf-8")


class MurmurHash:
    """Seeded hash family; seed ``k`` selects the k-th member."""

    __slots__ = ()

    def hash(self, data: bytes, seed: int) -> int:
        return murmur_hash64a(data, seed)


class Mask:
    """Fixed-size bit array; bit ``i`` is MSB-first within byte ``i >> 3``."""

    __slots__ = ("_bytes",)

    def __init__(self, size: int) -> None:
        self._bytes = bytearray((size >> 3) + 1)

    def __len__(self) -> int:
        return len(self._bytes) << 3

    def update(self, bit: int) -> None:
        self._bytes[bit >> 3] |= 0x80 >> (bit & 7)

    def check(self, bit: int) -> bool:
        return bool(self._bytes[bit >> 3] & (0x80 >> (bit & 7)))


class BloomFilter(HasLength, Generic[T]):
    """Bounded-capacity set with a probabilistic fast path.

    Parameters
    ----------
    capacity: int
        Maximum number of stored values; inserts past it are dropped.
    error_rate: Optional[float]
        Target false-positive rate of the mask alone, in (0, 1).
        Defaults to ``DEFAULT_ERROR_RATE``.
    hasher:
        Object with ``hash(data: bytes, seed: int) -> int``.
    container_factory:
        Builds the exact-membership container (needs ``append``,
        ``__contains__`` and ``__len__``).
    """

    __slots__ = ("_capacity", "_mask", "_hasher", "_container", "_hasher_number")

    DEFAULT_ERROR_RATE = 0.05
    # |ln(0.05)|
    _ABS_ERROR_RATE_LN = 2.9957323

    def __init__(
        self,
        capacity: int,
        error_rate: Optional[float] = None,
        hasher: Optional[MurmurHash] = None,
        container_factory: Callable[[], DynamicArray[T]] = DynamicArray,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        if error_rate is None:
            error_rate = self.DEFAULT_ERROR_RATE
        if not (0.0 < error_rate < 1.0):
            raise ValueError("error_rate must be in (0, 1)")
        if error_rate == 0.05:
            abs_ln = self._ABS_ERROR_RATE_LN
        else:
            abs_ln = abs(math.log(error_rate))

        mask_size, hasher_number = self.mask_and_hasher_size(capacity, abs_ln)
        self._capacity = capacity
        self._mask = Mask(mask_size)
        self._hasher = hasher if hasher is not None else MurmurHash()
        self._container = container_factory()
        self._hasher_number = hasher_number

    @staticmethod
    def mask_and_hasher_size(capacity: int, abs_error_rate_ln: float) -> tuple[int, int]:
        """Return (mask bits, hash count) for `capacity` at rate e**-abs_error_rate_ln."""
        ln2 = math.log(2)
        size_mask = int(abs_error_rate_ln * capacity / (ln2 * ln2))
        k = int(abs_error_rate_ln / ln2)
        return size_mask, max(k, 1)

    def _bits(self, value: T) -> Iterator[int]:
        data = to_bytes(value)
        width = len(self._mask)
        for k in range(self._hasher_number):
            yield self._hasher.hash(data, k) % width

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def hasher_number(self) -> int:
        return self._hasher_number

    def contains(self, value: T) -> bool:
        for bit in self._bits(value):
            if not self._mask.check(bit):
                return False
        return value in self._container

    def insert(self, value: T) -> bool:
        """Store `value`; return False if it was present or the filter is full."""
        if len(self) >= self._capacity:
            logger.debug("bloom filter full (%d); dropping %r", self._capacity, value)
            return False
        if self.contains(value):
            return False
        for bit in self._bits(value):
            self._mask.update(bit)
        self._container.append(value)
        return True

    def __contains__(self, value: object) -> bool:
        return self.contains(value)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._container)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"BloomFilter(len={len(self)}, capacity={self._capacity}, k={self._hasher_number})"

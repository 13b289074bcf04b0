"""Sources of randomness consumed by the draw engine."""

from __future__ import annotations

import secrets
import uuid
from typing import Iterable, Optional

from ..errors import RandomSourceUnavailableError

UINT32_BYTES = 4
UINT32_MAX = 2**32 - 1


class RandomSource:
    """Capability supplying random bytes and unique identifiers.

    Subclasses implement :meth:`random_bytes` and :meth:`unique_id`; the
    engine only ever calls :meth:`random_uint32`, once per draw.
    """

    description = "Injected random source"

    def random_bytes(self, size: int) -> bytes:
        raise NotImplementedError

    def unique_id(self) -> str:
        raise NotImplementedError

    def random_uint32(self, count: int) -> list[int]:
        """Return ``count`` unsigned 32-bit integers fetched in one batch.

        The bytes are decoded as consecutive little-endian words.
        """
        if count < 0:
            raise ValueError("count must not be negative")
        payload = self.random_bytes(count * UINT32_BYTES)
        if len(payload) != count * UINT32_BYTES:
            raise RandomSourceUnavailableError(
                f"random source returned {len(payload)} bytes, "
                f"expected {count * UINT32_BYTES}"
            )
        return [
            int.from_bytes(payload[i : i + UINT32_BYTES], "little")
            for i in range(0, len(payload), UINT32_BYTES)
        ]


class SystemRandomSource(RandomSource):
    """Operating-system CSPRNG backed source (:mod:`secrets`, :mod:`uuid`).

    There is no fallback to :mod:`random`: if the platform cannot provide
    secure randomness the draw fails with
    :class:`~fairdraw.errors.RandomSourceUnavailableError`.
    """

    description = "Cryptographically secure (operating system CSPRNG)"

    def random_bytes(self, size: int) -> bytes:
        try:
            return secrets.token_bytes(size)
        except NotImplementedError as exc:
            raise RandomSourceUnavailableError(
                "no cryptographically secure random source is available"
            ) from exc

    def unique_id(self) -> str:
        try:
            return str(uuid.uuid4())
        except NotImplementedError as exc:
            raise RandomSourceUnavailableError(
                "no cryptographically secure random source is available"
            ) from exc


class FixedRandomSource(RandomSource):
    """Deterministic source replaying a fixed stream of 32-bit values.

    Intended for tests and for replaying an audited draw.

    Parameters
    ----------
    values : Iterable[int]
        Values returned in order by :meth:`random_uint32`. The stream is
        consumed, so a second draw continues where the first stopped.
    unique_id : str, default: "00000000-0000-4000-8000-000000000000"
        Identifier returned by every call to :meth:`unique_id`.
    """

    description = "Fixed replay stream (not random, for tests and audit replay)"

    def __init__(
        self,
        values: Iterable[int],
        unique_id: Optional[str] = None,
    ) -> None:
        self._values = [int(v) for v in values]
        for value in self._values:
            if not 0 <= value <= UINT32_MAX:
                raise ValueError(f"random value {value} is not an unsigned 32-bit integer")
        self._cursor = 0
        self._unique_id = unique_id or "00000000-0000-4000-8000-000000000000"
        self.requests: list[int] = []
        self.unique_id_calls = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._cursor

    def random_bytes(self, size: int) -> bytes:
        if size % UINT32_BYTES:
            raise ValueError("FixedRandomSource only serves whole 32-bit words")
        count = size // UINT32_BYTES
        if count > self.remaining:
            raise RandomSourceUnavailableError(
                f"fixed random stream exhausted: {count} values requested, "
                f"{self.remaining} left"
            )
        self.requests.append(count)
        chunk = self._values[self._cursor : self._cursor + count]
        self._cursor += count
        return b"".join(value.to_bytes(UINT32_BYTES, "little") for value in chunk)

    def unique_id(self) -> str:
        self.unique_id_calls += 1
        return self._unique_id


__all__ = [
    "FixedRandomSource",
    "RandomSource",
    "SystemRandomSource",
    "UINT32_MAX",
]

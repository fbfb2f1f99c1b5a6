from __future__ import annotations

import logging
from typing import Union

import numpy as np

from constants import (
	BLOCK_SIZE,
	BLOCK_WORDS,
	DIGEST_SIZE,
	INITIAL_STATE,
	LENGTH_FIELD_SIZE,
	MAX_MESSAGE_BYTES,
	ROUND_CONSTANTS,
	WORD_MASK,
	SHA1State,
)

logger = logging.getLogger(__name__)

BufferLike = Union[bytes, bytearray, memoryview]

# big-endian unsigned 32-bit words
_WORD_DTYPE = np.dtype(">u4")


class MessageTooLongError(OverflowError):
	"""Raised when a message would not fit the 64-bit bit-length field."""


def _to_bytes(data: BufferLike) -> bytes:
	"""Return the input as bytes, raising ``TypeError`` for unsupported types."""

	if isinstance(data, (bytes, bytearray)):
		return bytes(data)

	if isinstance(data, memoryview):
		if data.format not in ("B", "b", "c"):
			raise TypeError("memoryview must be of a byte-oriented format")
		return data.tobytes()

	raise TypeError(f"data must be bytes-like, not {type(data).__name__}")


def _words_from_block(block: bytes) -> list[int]:
	return np.frombuffer(block, dtype=_WORD_DTYPE).tolist()


def _words_to_bytes(words: SHA1State) -> bytes:
	return np.array(words, dtype=_WORD_DTYPE).tobytes()


def _left_rotate(value: int, count: int) -> int:
	return ((value << count) | (value >> (32 - count))) & WORD_MASK


class SHA1:
	"""Incremental SHA-1 engine.

	Bytes passed to :meth:`update` are buffered until a full 64-byte block is
	available; every complete block is compressed right away, so at most 63
	bytes are ever held. :meth:`finalize` pads the message, returns the 20-byte
	digest and leaves the engine exactly as a fresh ``SHA1()``.

	Instances are not thread-safe; use one engine per message stream.
	"""

	name: str = "sha1"
	block_size: int = BLOCK_SIZE
	digest_size: int = DIGEST_SIZE

	def __init__(self, data: BufferLike | None = None):
		self._state: SHA1State = INITIAL_STATE
		self._pending: bytes = b""
		self._blocks: int = 0
		self.reset()

		if data is not None:
			self.update(data)

	@property
	def message_length(self) -> int:
		"""Number of message bytes accepted since the last reset."""
		return self._blocks * BLOCK_SIZE + len(self._pending)

	def reset(self) -> None:
		self._state = INITIAL_STATE
		self._pending = b""
		self._blocks = 0
		logger.debug("sha1 engine reset")

	def update(self, data: BufferLike) -> "SHA1":
		chunk = _to_bytes(data)
		if self.message_length + len(chunk) >= MAX_MESSAGE_BYTES:
			raise MessageTooLongError(
				f"SHA-1 messages must be shorter than {MAX_MESSAGE_BYTES} bytes"
			)

		buffer = self._pending + chunk
		complete = len(buffer) - len(buffer) % BLOCK_SIZE
		for offset in range(0, complete, BLOCK_SIZE):
			self._process_block(buffer[offset : offset + BLOCK_SIZE])

		self._pending = buffer[complete:]
		return self

	def finalize(self) -> bytes:
		"""Pad the message, return its digest and reset the engine.

		The 0x80 terminator is appended to the pending bytes. If that leaves
		no room for the 8-byte length field, the block is zero-filled and
		compressed first and the length goes into a fresh all-zero block.
		"""
		bit_length = self.message_length * 8
		blocks = self._blocks

		tail = self._pending + b"\x80"
		spilled = len(tail) > BLOCK_SIZE - LENGTH_FIELD_SIZE
		if spilled:
			self._process_block(tail + b"\x00" * (BLOCK_SIZE - len(tail)))
			tail = b""

		tail += b"\x00" * (BLOCK_SIZE - LENGTH_FIELD_SIZE - len(tail))
		tail += bit_length.to_bytes(LENGTH_FIELD_SIZE, "big")
		self._process_block(tail)

		result = _words_to_bytes(self._state)
		logger.debug(
			"sha1 finalize: %d bits, %d full blocks, padding spilled=%s",
			bit_length,
			blocks,
			spilled,
		)
		self.reset()
		return result

	def finalize_hex(self) -> str:
		return self.finalize().hex()

	def digest(self) -> bytes:
		"""Digest of the bytes seen so far; the engine keeps accumulating."""
		return self.copy().finalize()

	def hexdigest(self) -> str:
		return self.digest().hex()

	def copy(self) -> "SHA1":
		clone = SHA1()
		clone._state = self._state
		clone._pending = self._pending
		clone._blocks = self._blocks
		return clone

	@classmethod
	def hash(cls, data: BufferLike) -> bytes:
		"""Return the SHA-1 digest for ``data`` as raw bytes."""
		return cls(data).finalize()

	def _process_block(self, block: bytes) -> None:
		if len(block) != BLOCK_SIZE:
			raise ValueError("Block size must be exactly 64 bytes")

		w = _words_from_block(block)
		a, b, c, d, e = self._state

		for i in range(80):
			if i >= BLOCK_WORDS:
				s = i & 15
				w[s] = _left_rotate(w[(i - 3) & 15] ^ w[(i - 8) & 15] ^ w[(i - 14) & 15] ^ w[s], 1)

			if i < 20:
				f = (b & (c ^ d)) ^ d
			elif i < 40:
				f = b ^ c ^ d
			elif i < 60:
				f = (b & c) | (b & d) | (c & d)
			else:
				f = b ^ c ^ d

			temp = (_left_rotate(a, 5) + f + e + w[i & 15] + ROUND_CONSTANTS[i // 20]) & WORD_MASK
			a, b, c, d, e = temp, a, _left_rotate(b, 30), c, d

		h0, h1, h2, h3, h4 = self._state
		self._state = (
			(h0 + a) & WORD_MASK,
			(h1 + b) & WORD_MASK,
			(h2 + c) & WORD_MASK,
			(h3 + d) & WORD_MASK,
			(h4 + e) & WORD_MASK,
		)
		self._blocks += 1


def sha1(data: BufferLike) -> bytes:
	return SHA1.hash(data)


def sha1_hex(data: BufferLike) -> str:
	return SHA1.hash(data).hex()

import os
from typing import Callable

from .errors import NotFoundError, SizeUnavailableError, OutOfMemoryError, TruncatedReadError
from .timestamps import Timestamp, TimestampProvider, ZERO, select_provider

class LoadedFile:
	"""
	The contents and timestamps of one input file.

	`content` holds `size` bytes followed by a single zero byte, so it can also be treated as a NUL-terminated string.
	The buffer is owned by whoever holds this object and is dropped by `release()` (or on leaving a `with` block).
	"""

	def __init__(self, name: str, content: bytearray, size: int) -> None:
		self.name = name
		self.size = size
		self.content: bytearray | None = content
		self.created_at: Timestamp = ZERO
		self.modified_at: Timestamp = ZERO
		self.accessed_at: Timestamp = ZERO

	@property
	def loaded(self) -> bool:
		return self.content is not None and self.size > 0

	@property
	def data(self) -> memoryview:
		if self.content is None:
			raise ValueError(f'Contents of {self.name} have already been released')
		return memoryview(self.content)[:self.size]

	def release(self) -> None:
		self.content = None

	def __enter__(self) -> 'LoadedFile':
		return self

	def __exit__(self, *exc_info) -> None:
		self.release()

	def __repr__(self) -> str:
		return f'LoadedFile(name={repr(self.name)}, size={self.size}, loaded={self.loaded})'

def _stream_size(stream, path: str) -> int:
	try:
		size = stream.seek(0, os.SEEK_END)
		stream.seek(0, os.SEEK_SET)
	except (OSError, ValueError) as exc:
		raise SizeUnavailableError(path, str(exc)) from exc

	if size is None or size < 0:
		raise SizeUnavailableError(path)

	return size

def _read_exactly(stream, buffer: bytearray, size: int, path: str) -> None:
	view = memoryview(buffer)
	filled = 0

	# a single read isn't guaranteed to return everything we asked for
	while filled < size:
		try:
			count = stream.readinto(view[filled:size])
		except OSError as exc:
			raise TruncatedReadError(path, str(exc)) from exc

		if not count:
			raise TruncatedReadError(path, f'read stopped after {filled} of {size} bytes')

		filled += count

def load_file(path: str, timestamps: TimestampProvider | None = None, opener: Callable = open) -> LoadedFile:
	if timestamps is None:
		timestamps = select_provider()

	print(f'[bakr] baking into header file: {path}')

	try:
		stream = opener(path, 'rb')
	except (OSError, ValueError) as exc:
		raise NotFoundError(path, getattr(exc, 'strerror', None)) from exc

	with stream:
		size = _stream_size(stream, path)

		# an empty file can't be told apart from a failed read
		if size == 0:
			raise TruncatedReadError(path, 'file is empty')

		try:
			content = bytearray(size + 1)
		except MemoryError as exc:
			raise OutOfMemoryError(path, f'{size} bytes') from exc

		_read_exactly(stream, content, size, path)

	content[size] = 0

	result = LoadedFile(path, content, size)
	result.created_at, result.modified_at, result.accessed_at = timestamps.read(path)
	return result

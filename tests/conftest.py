"""
Shared fixtures for the bakr tests.
"""

import errno
import io
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

import pytest

from bakr import cook
from bakr.timestamps import NullTimestampProvider

ARRAY_RE = re.compile(r'static const unsigned char (\w+)\[\] = \{([^}]*)\};')
RECORD_RE = re.compile(r'static const bakr_file (\w+) = \{(.*)\};')
COUNT_RE = re.compile(r'#define BAKR_NUM_FILES \((\d+)\)')
TABLE_RE = re.compile(r'static const bakr_file \*const bakr_files\[\w+\] = \{([^}]*)\};')


@dataclass
class ParsedHeader:
	arrays: Dict[str, bytes] = field(default_factory=dict)
	records: Dict[str, str] = field(default_factory=dict)
	count: int = -1
	table: List[str] = field(default_factory=list)


def parse_header(text: str) -> ParsedHeader:
	"""Pull the arrays, records and manifest back out of a generated header."""
	parsed = ParsedHeader()
	for name, body in ARRAY_RE.findall(text):
		values = [v.strip() for v in body.split(',') if v.strip()]
		parsed.arrays[name] = bytes(int(v, 16) for v in values)
	for name, body in RECORD_RE.findall(text):
		parsed.records[name] = body
	count = COUNT_RE.search(text)
	if count:
		parsed.count = int(count.group(1))
	table = TABLE_RE.search(text)
	if table:
		parsed.table = [v.strip().lstrip('&') for v in table.group(1).split(',') if v.strip()]
	return parsed


class TrickleReader(io.RawIOBase):
	"""A seekable binary stream that never returns more than `chunk` bytes per read."""

	def __init__(self, data: bytes, chunk: int = 7, claimed_size: int | None = None):
		super().__init__()
		self._source = io.BytesIO(data)
		self.chunk = chunk
		self.claimed_size = claimed_size
		self.reads = 0

	def readable(self):
		return True

	def seekable(self):
		return True

	def seek(self, offset, whence=os.SEEK_SET):
		if whence == os.SEEK_END and self.claimed_size is not None:
			return self.claimed_size
		return self._source.seek(offset, whence)

	def tell(self):
		return self._source.tell()

	def readinto(self, b):
		self.reads += 1
		data = self._source.read(min(len(b), self.chunk))
		b[:len(data)] = data
		return len(data)


class FullDiskWriter(io.TextIOWrapper):
	"""A real output file that runs out of space after `limit` characters, or when it is closed."""

	def __init__(self, path, limit: int | None = None, fail_on_close: bool = False):
		super().__init__(io.BufferedWriter(io.FileIO(path, 'w')), newline='\n')
		self.limit = limit
		self.fail_on_close = fail_on_close
		self.written = 0

	def write(self, text):
		if self.limit is not None and self.written + len(text) > self.limit:
			raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))
		self.written += len(text)
		return super().write(text)

	def flush(self):
		super().flush()
		if self.fail_on_close and not self.closed:
			self.fail_on_close = False
			raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))


@pytest.fixture
def no_timestamps() -> NullTimestampProvider:
	return NullTimestampProvider()


@pytest.fixture
def header_parser():
	return parse_header


@pytest.fixture
def make_file(tmp_path: Path):
	"""Write `data` to a file under tmp_path and return its path as a string."""

	def _make(name: str, data: bytes) -> str:
		path = tmp_path / name
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_bytes(data)
		return str(path)

	return _make


@pytest.fixture
def trickle_opener():
	"""Return an opener factory that serves `data` through a TrickleReader."""

	def _factory(data: bytes, chunk: int = 7, claimed_size: int | None = None):
		readers = []

		def _open(path, mode):
			reader = TrickleReader(data, chunk, claimed_size)
			readers.append(reader)
			return reader

		_open.readers = readers
		return _open

	return _factory


@pytest.fixture
def full_disk(monkeypatch):
	"""Make `bake()` write its header through a FullDiskWriter; returns the writers it opened."""

	def _install(limit: int | None = None, fail_on_close: bool = False):
		writers = []
		real_open = io.open

		def _open(path, mode='r', *args, **kwargs):
			if mode != 'w':
				return real_open(path, mode, *args, **kwargs)
			writer = FullDiskWriter(path, limit, fail_on_close)
			writers.append(writer)
			return writer

		monkeypatch.setattr(cook.io, 'open', _open)
		return writers

	return _install

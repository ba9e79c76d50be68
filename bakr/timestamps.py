import os
import platform
import ctypes
from dataclasses import dataclass
from typing import Tuple

TIMESTAMPS_ENV_VAR = 'BAKR_TIMESTAMPS'
VALID_KINDS = ['auto', 'native', 'stat', 'none']

@dataclass(frozen=True)
class Timestamp:
	low: int = 0
	high: int = 0

	@classmethod
	def from_value(cls, value: int) -> 'Timestamp':
		value &= 0xffffffffffffffff
		return cls(value & 0xffffffff, value >> 32)

	@property
	def value(self) -> int:
		return (self.high << 32) | self.low

ZERO = Timestamp()

FileTimes = Tuple[Timestamp, Timestamp, Timestamp]

class TimestampProvider:
	"""
	Reads the creation, modification, and access times of a file.

	`read` never raises; when the times can't be determined, all three come back as zero.
	"""

	name = ''

	def read(self, path: str) -> FileTimes:
		raise NotImplementedError

class NullTimestampProvider(TimestampProvider):
	name = 'none'

	def read(self, path: str) -> FileTimes:
		return (ZERO, ZERO, ZERO)

class StatTimestampProvider(TimestampProvider):
	"""
	Uses `os.stat`. Values are nanoseconds since the Unix epoch.

	Creation time is only available on platforms that report `st_birthtime`; elsewhere it's left at zero.
	"""

	name = 'stat'

	def read(self, path: str) -> FileTimes:
		try:
			info = os.stat(path)
		except (OSError, ValueError):
			return (ZERO, ZERO, ZERO)

		created = ZERO
		birthtime_ns = getattr(info, 'st_birthtime_ns', None)
		if birthtime_ns is None and hasattr(info, 'st_birthtime'):
			birthtime_ns = int(info.st_birthtime * 1_000_000_000)
		if birthtime_ns is not None:
			created = Timestamp.from_value(birthtime_ns)

		return (created, Timestamp.from_value(info.st_mtime_ns), Timestamp.from_value(info.st_atime_ns))

class _FILETIME(ctypes.Structure):
	_fields_ = [
		('dwLowDateTime', ctypes.c_uint32),
		('dwHighDateTime', ctypes.c_uint32),
	]

class _WIN32_FILE_ATTRIBUTE_DATA(ctypes.Structure):
	_fields_ = [
		('dwFileAttributes', ctypes.c_uint32),
		('ftCreationTime', _FILETIME),
		('ftLastAccessTime', _FILETIME),
		('ftLastWriteTime', _FILETIME),
		('nFileSizeHigh', ctypes.c_uint32),
		('nFileSizeLow', ctypes.c_uint32),
	]

# GET_FILEEX_INFO_LEVELS
_GET_FILE_EX_INFO_STANDARD = 0

class Win32TimestampProvider(TimestampProvider):
	"""
	Uses `GetFileAttributesExW`. Values are FILETIMEs: 100-nanosecond intervals since January 1, 1601 (UTC).
	"""

	name = 'native'

	def read(self, path: str) -> FileTimes:
		windll = getattr(ctypes, 'windll', None)
		if windll is None:
			return (ZERO, ZERO, ZERO)

		data = _WIN32_FILE_ATTRIBUTE_DATA()
		try:
			ok = windll.kernel32.GetFileAttributesExW(ctypes.c_wchar_p(os.fsdecode(path)), _GET_FILE_EX_INFO_STANDARD, ctypes.byref(data))
		except (OSError, ValueError):
			return (ZERO, ZERO, ZERO)

		if not ok:
			return (ZERO, ZERO, ZERO)

		def convert(filetime: _FILETIME) -> Timestamp:
			return Timestamp(filetime.dwLowDateTime, filetime.dwHighDateTime)

		return (convert(data.ftCreationTime), convert(data.ftLastWriteTime), convert(data.ftLastAccessTime))

def select_provider(kind: str | None = None) -> TimestampProvider:
	if kind is None:
		kind = os.environ.get(TIMESTAMPS_ENV_VAR, 'auto')

	if kind == 'auto':
		kind = 'native' if platform.system() == 'Windows' else 'stat'

	if kind == 'native':
		return Win32TimestampProvider()
	elif kind == 'stat':
		return StatTimestampProvider()
	elif kind == 'none':
		return NullTimestampProvider()

	raise ValueError(f'Invalid timestamp provider "{kind}"; expected one of {VALID_KINDS}')

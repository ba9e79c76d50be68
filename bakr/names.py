import os
import re

SYMBOL_PREFIX = 'bakr_file'

_FRAGMENT_RE = re.compile(r'[A-Za-z0-9_]+')
_MACRO_RE = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')
_INVALID_CHAR_RE = re.compile(r'[^A-Za-z0-9_]')

# `name` is expected to already be a valid identifier fragment; nothing is checked here
def content_symbol(name: str) -> str:
	return f'{SYMBOL_PREFIX}_{name}_content'

def record_symbol(name: str) -> str:
	return f'{SYMBOL_PREFIX}_{name}'

def is_valid_fragment(name: str) -> bool:
	return _FRAGMENT_RE.fullmatch(name) is not None

def is_valid_macro_name(name: str) -> bool:
	return _MACRO_RE.fullmatch(name) is not None

def normalize_name(path: str) -> str:
	"""
	Derives an identifier fragment from the file name in `path`, e.g. `shaders/basic.vert` becomes `basic_vert`.

	Different paths can normalize to the same name; callers that care should check for duplicates.
	"""
	base = os.path.basename(os.path.normpath(path))
	name = _INVALID_CHAR_RE.sub('_', base)
	if len(name) == 0:
		name = '_'
	return name

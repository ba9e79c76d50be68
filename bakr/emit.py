from typing import List, TextIO

from .loader import LoadedFile
from .names import content_symbol, record_symbol
from .recipes import Recipe
from .util import to_c_string, write_c_array

DEFAULT_HEADER_GUARD_NAME = 'BAKR_BIN_H'

def _comment_safe(text: str) -> str:
	return text.replace('*/', '* /')

def format_header_comment(version: str, year: str, author: str) -> str:
	version, year, author = _comment_safe(version), _comment_safe(year), _comment_safe(author)
	return ''.join([
		f'/* bakr - v{version} - generated file - {year} {author}\n',
		'\n',
		'Files baked into C source by bakr. Do not edit; rerun the bake instead.\n',
		'*/\n',
	])

def emit_header(output: TextIO, version: str, year: str, author: str, guard: str = DEFAULT_HEADER_GUARD_NAME) -> None:
	output.write(format_header_comment(version, year, author))
	output.write(f'#ifndef {guard}\n#define {guard}\n\n')

def emit_definitions(output: TextIO, version: str) -> None:
	output.writelines([
		f'#define BAKR_VERSION {to_c_string(version)}\n',
		'\n',
		'typedef struct bakr_llu_type\n',
		'{\n',
		'  unsigned long low;\n',
		'  unsigned long high;\n',
		'\n',
		'} bakr_llu_type;\n',
		'\n',
		'typedef struct bakr_file\n',
		'{\n',
		'  unsigned long size;\n',
		'  bakr_llu_type time_created;\n',
		'  bakr_llu_type time_modified;\n',
		'  bakr_llu_type time_accessed;\n',
		'  const char *name;\n',
		'  const char *command;\n',
		'  const unsigned char *content;\n',
		'\n',
		'} bakr_file;\n',
		'\n',
	])

def _timestamp_literal(timestamp) -> str:
	return f'{{{timestamp.low}LU, {timestamp.high}LU}}'

def emit_file(output: TextIO, loaded: LoadedFile, recipe: Recipe, column_count: int | None = None) -> None:
	if not loaded.loaded:
		raise ValueError(f'Cannot emit {loaded.name}: it was not loaded successfully')

	content_name = content_symbol(recipe.name)

	write_c_array(output, content_name, loaded.data, column_count=column_count)

	fields = [
		f'{loaded.size}LU',
		_timestamp_literal(loaded.created_at),
		_timestamp_literal(loaded.modified_at),
		_timestamp_literal(loaded.accessed_at),
		to_c_string(loaded.name),
		to_c_string(f'bakr {loaded.name}'),
		content_name,
	]
	output.write(f'static const bakr_file {record_symbol(recipe.name)} = {{{", ".join(fields)}}};\n')

def emit_manifest(output: TextIO, recipes: List[Recipe]) -> None:
	output.write('\n')
	output.write(f'#define BAKR_NUM_FILES ({len(recipes)})\n')

	if len(recipes) == 0:
		# C doesn't allow zero-length arrays
		output.write('static const bakr_file *const bakr_files[1] = {0};\n')
		return

	entries = ', '.join([f'&{record_symbol(recipe.name)}' for recipe in recipes])
	output.write(f'static const bakr_file *const bakr_files[BAKR_NUM_FILES] = {{{entries}}};\n')

def emit_footer(output: TextIO, guard: str = DEFAULT_HEADER_GUARD_NAME) -> None:
	output.write(f'\n#endif /* {guard} */\n')

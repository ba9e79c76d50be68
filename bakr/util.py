import io
import os
import errno

# how many elements are formatted at a time when rows aren't wrapped
ARRAY_BLOCK_SIZE = 4096

# from https://stackoverflow.com/a/600612/6620880
def mkdir_p(path):
	try:
		os.makedirs(path)
	except OSError as exc:
		if not (exc.errno == errno.EEXIST and os.path.isdir(path)):
			raise

# adapted from https://stackoverflow.com/a/53808695/6620880
def to_padded_hex(value, hex_digits=2):
	return '0x{0:0{1}x}'.format(value if isinstance(value, int) else ord(value), hex_digits)

def write_c_array_body(output, values, formatter=to_padded_hex, column_count=None, block_size=ARRAY_BLOCK_SIZE):
	"""
	Writes the elements of a C array initializer to `output`, without the braces.

	Elements are separated by `, `. When `column_count` is given, rows of that many elements are separated by `,\\n\\t` instead.
	There is never a trailing separator.

	`values` must support `len()` and slicing (`bytes`, `bytearray`, `memoryview`, lists). Only one row (or one block of `block_size` elements) is formatted at a time.
	"""
	if len(values) == 0:
		return
	step = column_count if column_count else block_size
	if column_count:
		output.write('\n\t')
	for start in range(0, len(values), step):
		if start > 0:
			output.write(',\n\t' if column_count else ', ')
		output.write(', '.join([formatter(v) for v in values[start:start + step]]))
	if column_count:
		output.write('\n')

def write_c_array(output, array_name, values, array_type='unsigned char', formatter=to_padded_hex, column_count=None, static=True, const=True, block_size=ARRAY_BLOCK_SIZE):
	qualifiers = ('static ' if static else '') + ('const ' if const else '')
	output.write('{}{} {}[] = {{'.format(qualifiers, array_type, array_name))
	write_c_array_body(output, values, formatter, column_count, block_size)
	output.write('};\n')

def to_c_array_body(values, formatter=to_padded_hex, column_count=None):
	output = io.StringIO()
	write_c_array_body(output, values, formatter, column_count)
	return output.getvalue()

def to_c_array(array_name, values, array_type='unsigned char', formatter=to_padded_hex, column_count=None, static=True, const=True):
	output = io.StringIO()
	write_c_array(output, array_name, values, array_type, formatter, column_count, static, const)
	return output.getvalue()

def _escape_c_byte(byte):
	if byte in (0x5c, 0x22, 0x3f):
		# backslash, quote, and `?` (to keep trigraphs from forming)
		return '\\' + chr(byte)
	if 0x20 <= byte <= 0x7e:
		return chr(byte)
	# octal escapes stop after three digits, unlike `\x`, so the following character can't be swallowed
	return '\\{0:03o}'.format(byte)

def to_c_string(value):
	if isinstance(value, str):
		value = value.encode('utf-8', 'surrogateescape')
	return '"' + ''.join([_escape_c_byte(b) for b in value]) + '"'

import argparse
import datetime
import os
import sys
from typing import List

from . import __version__
from .cook import bake
from .emit import DEFAULT_HEADER_GUARD_NAME
from .errors import OutputUnavailableError, RecipeError
from .names import is_valid_fragment, is_valid_macro_name, normalize_name
from .recipes import Recipe, RecipeBook, load_recipes
from .timestamps import VALID_KINDS, select_provider
from .util import mkdir_p

def parse_input(value: str) -> Recipe:
	path, sep, name = value.rpartition('=')
	if not sep:
		return Recipe(value, normalize_name(value))
	if not is_valid_fragment(name):
		raise RecipeError(f'Invalid name "{name}" for {path}')
	return Recipe(path, name)

def build_argparser() -> argparse.ArgumentParser:
	argparser = argparse.ArgumentParser('bakr', description='Bake files into a C header as byte arrays with file metadata')
	argparser.add_argument('inputs', nargs='*', metavar='INPUT[=NAME]', help='A file to bake, optionally followed by the identifier fragment to name it by. By default, the name is derived from the file name.')
	argparser.add_argument('-r', '--recipes', help='A recipe file listing files to bake. These are baked before any INPUTs given on the command line.')
	argparser.add_argument('-o', '--output', help='A path for the resulting header file. Overrides the recipe file\'s `output` directive.')
	argparser.add_argument('-a', '--author', help='The author named in the header comment')
	argparser.add_argument('-y', '--year', help='The year named in the header comment (the current year by default)')
	argparser.add_argument('-g', '--guard', help=f'The include guard macro name ({DEFAULT_HEADER_GUARD_NAME} by default)')
	argparser.add_argument('-t', '--timestamps', choices=VALID_KINDS, default=None, help='How to read file timestamps. Defaults to the BAKR_TIMESTAMPS environment variable, or `auto`.')
	argparser.add_argument('-c', '--columns', type=int, default=None, help='Wrap byte arrays onto rows of this many bytes. By default, each array is written on a single line.')
	argparser.add_argument('-s', '--strict', action='store_true', help='Exit with an error if any file could not be baked')
	argparser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
	return argparser

def main(argv: List[str] | None = None) -> int:
	args = build_argparser().parse_args(argv)

	book = RecipeBook()
	try:
		if args.recipes:
			book = load_recipes(args.recipes)
		extra = [parse_input(value) for value in args.inputs]
	except RecipeError as exc:
		print(f'[bakr] {exc}', file=sys.stderr)
		return 1

	recipes = book.recipes + extra
	names = set()
	for recipe in recipes:
		if recipe.name in names:
			print(f'[bakr] Duplicate name "{recipe.name}" for {recipe.path}', file=sys.stderr)
			return 1
		names.add(recipe.name)

	output: str | None = args.output if args.output else book.output
	if not output:
		print('[bakr] No output file given; use -o/--output or an `output` directive', file=sys.stderr)
		return 1

	output_realpath = os.path.realpath(output)
	for recipe in recipes:
		if os.path.realpath(recipe.path) == output_realpath:
			print(f'[bakr] Output file {output} is also an input; refusing to overwrite it', file=sys.stderr)
			return 1

	if args.columns is not None and args.columns <= 0:
		print('[bakr] --columns must be a positive number', file=sys.stderr)
		return 1

	year: str = args.year or book.year or str(datetime.date.today().year)
	author: str = args.author or book.author or ''
	guard: str = args.guard or book.guard or DEFAULT_HEADER_GUARD_NAME
	if not is_valid_macro_name(guard):
		print(f'[bakr] Invalid header guard name: {guard}', file=sys.stderr)
		return 1

	try:
		timestamps = select_provider(args.timestamps)
	except ValueError as exc:
		print(f'[bakr] {exc}', file=sys.stderr)
		return 1

	if os.path.dirname(output) != '':
		try:
			mkdir_p(os.path.dirname(output))
		except OSError:
			print(f'[bakr] could not open output file: {output}')
			return 1

	try:
		report = bake(recipes, output, __version__, year, author, guard=guard, timestamps=timestamps, column_count=args.columns)
	except OutputUnavailableError:
		# covers OutputWriteError too; bake() has already printed why
		return 1

	if args.strict and not report.ok:
		return 1

	return 0

from ast import literal_eval
from dataclasses import dataclass, field
from typing import List

from lark.exceptions import LarkError
from lark.lark import Lark
from lark.lexer import Token
from lark.visitors import Transformer, v_args

from .errors import RecipeError
from .names import is_valid_macro_name, normalize_name

@dataclass(frozen=True)
class Recipe:
	"""
	One file to bake: the path to read and the identifier fragment its symbols are named after.

	`name` must be a valid identifier fragment and unique within a bake. `bake()` itself doesn't check this.
	"""

	path: str
	name: str

@dataclass
class RecipeBook:
	recipes: List[Recipe] = field(default_factory=list)
	output: str | None = None
	author: str | None = None
	year: str | None = None
	guard: str | None = None

class ToRecipeBook(Transformer):
	def STRING(self, tok: Token):
		return literal_eval(tok.value)

	def NAME(self, tok: Token):
		return tok.value

	@v_args(inline=True)
	def recipe(self, path: str, name: str | None):
		if name is None:
			name = normalize_name(path)
		return Recipe(path, name)

	@v_args(inline=True)
	def output_directive(self, value: str):
		return ('output', value)

	@v_args(inline=True)
	def author_directive(self, value: str):
		return ('author', value)

	@v_args(inline=True)
	def year_directive(self, value: str):
		return ('year', value)

	@v_args(inline=True)
	def guard_directive(self, value: str):
		if not is_valid_macro_name(value):
			raise RecipeError(f'Invalid header guard name: {value}')
		return ('guard', value)

	def start(self, entries):
		book = RecipeBook()
		names = set()

		for entry in entries:
			if isinstance(entry, Recipe):
				if entry.name in names:
					raise RecipeError(f'Duplicate name "{entry.name}" for {entry.path}')
				names.add(entry.name)
				book.recipes.append(entry)
				continue

			key, value = entry
			if getattr(book, key) is not None:
				raise RecipeError(f'Duplicate {key} directive')
			setattr(book, key, value)

		return book

_parser: Lark | None = None

def _get_parser() -> Lark:
	global _parser
	if _parser is None:
		_parser = Lark.open('recipes.lark', rel_to=__file__, maybe_placeholders=True, parser='lalr')
	return _parser

def parse_recipes(text: str) -> RecipeBook:
	# every statement is newline-terminated, including the last one
	if not text.endswith('\n'):
		text += '\n'

	try:
		tree = _get_parser().parse(text)
		return ToRecipeBook().transform(tree)
	except LarkError as exc:
		# errors raised from the transformer come wrapped in `VisitError`
		if isinstance(getattr(exc, 'orig_exc', None), RecipeError):
			raise exc.orig_exc from None
		raise RecipeError(f'Invalid recipe file: {exc}') from exc

def load_recipes(path: str) -> RecipeBook:
	try:
		with open(path, 'r') as recipe_file:
			text = recipe_file.read()
	except OSError as exc:
		raise RecipeError(f'Could not read recipe file {path}: {exc.strerror}') from exc
	return parse_recipes(text)

"""
Tests for the recipe file parser.
"""

import textwrap

import pytest

from bakr.errors import RecipeError
from bakr.recipes import Recipe, load_recipes, parse_recipes


class TestParseRecipes:
	def test_full_file(self):
		book = parse_recipes(textwrap.dedent("""\
			# resources for the demo
			output 'gen/resources.h'
			author 'nickscha'
			year '2025'
			guard RESOURCES_H

			'shaders/basic.vert' as basic_vert
			'config.ini'   # name derived from the file name
			'fixtures/1.bin' as 1st
		"""))

		assert book.output == 'gen/resources.h'
		assert book.author == 'nickscha'
		assert book.year == '2025'
		assert book.guard == 'RESOURCES_H'
		assert book.recipes == [
			Recipe('shaders/basic.vert', 'basic_vert'),
			Recipe('config.ini', 'config_ini'),
			Recipe('fixtures/1.bin', '1st'),
		]

	def test_empty(self):
		book = parse_recipes('')
		assert book.recipes == []
		assert book.output is None

	def test_no_trailing_newline(self):
		assert parse_recipes('"a.bin" as a').recipes == [Recipe('a.bin', 'a')]

	def test_blank_lines_and_comments(self):
		book = parse_recipes('\n\n# only a comment\n   \n"a.bin"\n\n# trailing\n')
		assert book.recipes == [Recipe('a.bin', 'a_bin')]

	def test_crlf(self):
		assert parse_recipes('"a.bin" as a\r\n"b.bin" as b\r\n').recipes == [Recipe('a.bin', 'a'), Recipe('b.bin', 'b')]

	def test_escaped_quote_in_path(self):
		assert parse_recipes('"odd \\"name\\".bin" as odd').recipes == [Recipe('odd "name".bin', 'odd')]

	def test_keyword_usable_as_name(self):
		assert parse_recipes('"out.bin" as output').recipes == [Recipe('out.bin', 'output')]


class TestRecipeErrors:
	def test_duplicate_directive(self):
		with pytest.raises(RecipeError, match='Duplicate output directive'):
			parse_recipes('output "a.h"\noutput "b.h"\n')

	def test_duplicate_name(self):
		with pytest.raises(RecipeError, match='Duplicate name "a"'):
			parse_recipes('"one.bin" as a\n"two.bin" as a\n')

	def test_duplicate_derived_name(self):
		with pytest.raises(RecipeError, match='Duplicate name'):
			parse_recipes('"x/data.bin"\n"y/data.bin"\n')

	def test_invalid_name(self):
		with pytest.raises(RecipeError):
			parse_recipes('"a.bin" as bad-name\n')

	def test_invalid_guard(self):
		with pytest.raises(RecipeError, match='Invalid header guard name'):
			parse_recipes('guard 9LIVES\n')

	def test_two_statements_on_one_line(self):
		with pytest.raises(RecipeError):
			parse_recipes('"a.bin" "b.bin"\n')

	def test_unquoted_path(self):
		with pytest.raises(RecipeError):
			parse_recipes('a.bin as a\n')


class TestLoadRecipes:
	def test_from_file(self, tmp_path):
		path = tmp_path / 'resources.recipes'
		path.write_text('output "out.h"\n"a.bin" as a\n')

		book = load_recipes(str(path))

		assert book.output == 'out.h'
		assert book.recipes == [Recipe('a.bin', 'a')]

	def test_missing_file(self, tmp_path):
		with pytest.raises(RecipeError, match='Could not read recipe file'):
			load_recipes(str(tmp_path / 'missing.recipes'))

import io
import os
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Tuple

from . import emit
from .errors import LoadError, OutputUnavailableError, OutputWriteError
from .loader import load_file
from .recipes import Recipe
from .timestamps import TimestampProvider, select_provider

@dataclass
class BakeReport:
	output_path: str
	baked: List[Recipe] = field(default_factory=list)
	failed: List[Tuple[Recipe, LoadError]] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return len(self.failed) == 0

def _remove_partial_output(output_path: str) -> None:
	try:
		os.remove(output_path)
	except FileNotFoundError:
		pass
	except OSError as exc:
		print(f'[bakr] could not remove partial output file: {output_path} ({exc.strerror})')

def bake(recipes: Iterable[Recipe], output_path: str, version: str, year: str, author: str, guard: str = emit.DEFAULT_HEADER_GUARD_NAME, timestamps: TimestampProvider | None = None, column_count: int | None = None, opener: Callable = open) -> BakeReport:
	"""
	Bakes every recipe into a single header at `output_path`.

	Recipes that fail to load are reported and left out; the rest of the batch still gets baked, and the manifest at the end only lists what made it in.
	Failing to open the output stops a bake before any input is read, raising `OutputUnavailableError`.
	Failing to write or close it raises `OutputWriteError`, after the partial header has been removed.
	"""
	if timestamps is None:
		timestamps = select_provider()

	report = BakeReport(output_path)

	try:
		output = io.open(output_path, 'w', newline='\n')
	except OSError as exc:
		print(f'[bakr] could not open output file: {output_path}')
		raise OutputUnavailableError(output_path, exc.strerror) from exc

	try:
		with output:
			emit.emit_header(output, version, year, author, guard)
			emit.emit_definitions(output, version)

			for recipe in recipes:
				try:
					loaded = load_file(recipe.path, timestamps, opener)
				except LoadError as exc:
					print(f'[bakr] failed to bake {recipe.path}: {exc}')
					report.failed.append((recipe, exc))
					continue

				with loaded:
					emit.emit_file(output, loaded, recipe, column_count)

				report.baked.append(recipe)

			emit.emit_manifest(output, report.baked)
			emit.emit_footer(output, guard)
	except OSError as exc:
		# load failures never get here; they're LoadErrors by now
		print(f'[bakr] could not write output file: {output_path}')
		_remove_partial_output(output_path)
		raise OutputWriteError(output_path, exc.strerror) from exc

	print(f'[bakr] files baked successfully into: {output_path}')

	return report

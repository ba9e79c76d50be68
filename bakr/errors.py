class BakrError(Exception):
	pass

class LoadError(BakrError):
	"""
	A single input file could not be loaded.

	These are recoverable: the orchestrator reports them and moves on to the next recipe.
	"""

	reason = 'load failed'

	def __init__(self, path: str, detail: str | None = None) -> None:
		super().__init__(path, detail)
		self.path = path
		self.detail = detail

	def __str__(self) -> str:
		if self.detail:
			return f'{self.reason} ({self.detail})'
		return self.reason

class NotFoundError(LoadError):
	reason = 'file not found'

class SizeUnavailableError(LoadError):
	reason = 'could not determine file size'

class OutOfMemoryError(LoadError):
	reason = 'out of memory'

class TruncatedReadError(LoadError):
	reason = 'file is empty or was truncated while reading'

class OutputUnavailableError(BakrError):
	"""
	The output header could not be produced.

	This stops the whole bake; no partial output is left behind.
	"""

	action = 'open'

	def __init__(self, path: str, detail: str | None = None) -> None:
		super().__init__(path, detail)
		self.path = path
		self.detail = detail

	def __str__(self) -> str:
		if self.detail:
			return f'could not {self.action} output file: {self.path} ({self.detail})'
		return f'could not {self.action} output file: {self.path}'

class OutputWriteError(OutputUnavailableError):
	action = 'write'

class RecipeError(BakrError):
	pass

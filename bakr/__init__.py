__version__ = '0.1.0'

from .errors import BakrError, LoadError, NotFoundError, SizeUnavailableError, OutOfMemoryError, TruncatedReadError, OutputUnavailableError, OutputWriteError, RecipeError
from .recipes import Recipe, RecipeBook, parse_recipes, load_recipes
from .loader import LoadedFile, load_file
from .cook import BakeReport, bake

"""Registry bootstrap (import side-effect)."""
from .api import set_chronologies, set_registry
from ._bootstrap import build_chronologies, build_registry

set_registry(build_registry())
set_chronologies(build_chronologies())

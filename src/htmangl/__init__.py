__version__ = "0.1.0"

from .document import dump, merge_markup, parse, read, render  # noqa: E402
from .errors import DocumentParseError, HtmanglError, ReadError, RenderError, UsageError  # noqa: E402
from .merge import Merger, apply  # noqa: E402
from .node import clone_node, clone_tree  # noqa: E402
from .ordered_map import OrderedMap  # noqa: E402

__all__ = [
    "DocumentParseError",
    "HtmanglError",
    "Merger",
    "OrderedMap",
    "ReadError",
    "RenderError",
    "UsageError",
    "__version__",
    "apply",
    "clone_node",
    "clone_tree",
    "dump",
    "merge_markup",
    "parse",
    "read",
    "render",
]

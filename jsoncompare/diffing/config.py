import time

from ..log import warning


DEFAULT_IDENTITY_FIELDS = ('id', 'dataRef')

# Each nesting level costs up to three stack frames in the differ,
# deeper limits would hit the interpreter recursion limit
MAX_SUPPORTED_DEPTH = 250

DEFAULT_MAX_DEPTH = MAX_SUPPORTED_DEPTH

DEFAULT_MAX_NODES = 1000000


class DiffConfig:
    """Set of limits and identity settings to pass around

    A max_depth of None, or above MAX_SUPPORTED_DEPTH, is lowered to
    MAX_SUPPORTED_DEPTH.
    """

    def __init__(self, *, identity_fields=None, max_depth=DEFAULT_MAX_DEPTH,
                 max_nodes=DEFAULT_MAX_NODES, timeout=None):
        if identity_fields is None:
            identity_fields = DEFAULT_IDENTITY_FIELDS
        if not identity_fields:
            raise ValueError('At least one identity field is needed')
        if max_depth is None:
            max_depth = MAX_SUPPORTED_DEPTH
        elif max_depth > MAX_SUPPORTED_DEPTH:
            warning('Maximum depth %d is not supported, using %d',
                    max_depth, MAX_SUPPORTED_DEPTH)
            max_depth = MAX_SUPPORTED_DEPTH
        self.identity_fields = tuple(identity_fields)
        self.max_depth = max_depth
        self.max_nodes = max_nodes
        self.timeout = timeout

    def deadline(self):
        "Monotonic time by which a comparison started now must finish."
        if self.timeout is None:
            return None
        return time.monotonic() + self.timeout

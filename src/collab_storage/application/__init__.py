"""File storage application layer.

Commands (writes), queries (reads) and the services orchestrating them.
Services load first: the engine pulls in every command and query, and
those only depend on the already-loaded service submodules.
"""

from .services import *
from .commands import *
from .queries import *

__path__ = __import__("pkgutil").extend_path(__path__, __name__)  # NOQA: F-821
__title__ = 'flagrelay'
__license__ = 'MIT'
# Placeholder, modified by dynamic-versioning.
__version__ = "0.0.0"

from .codec import *
from .faults import *
from .registry import *
from .results import *
from .schema import *
from .specs import *

VersionInfo = __import__("collections").namedtuple("VersionInfo", (
    "major",
    "minor",
    "micro",
    "releaselevel",
    "serial",
    "metadata"
))

# Placeholder, modified by dynamic-versioning.
version_info = VersionInfo(0, 0, 0, "final", 0, "")

__all__ = (
    "__path__",
    "__title__",
    "__license__",
    "__version__",
    "version_info"
)

# Load the exposed API of the codecs
__all__ += codec.__all__  # type: ignore[attr-defined]
# Load the exposed API of the faults
__all__ += faults.__all__  # type: ignore[attr-defined]
# Load the exposed API of the registry
__all__ += registry.__all__  # type: ignore[attr-defined]
# Load the exposed API of the results
__all__ += results.__all__  # type: ignore[attr-defined]
# Load the exposed API of the schema builder
__all__ += schema.__all__  # type: ignore[attr-defined]
# Load the exposed API of the specs
__all__ += specs.__all__  # type: ignore[attr-defined]

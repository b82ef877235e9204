from . import scales
from . import roster

__all__ = ["scales", "roster"]

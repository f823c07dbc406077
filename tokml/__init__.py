"""tokml - Convert GeoJSON to KML."""

__version__ = "0.7.0"
__description__ = "Convert GeoJSON to KML"

from tokml.core.config import ConvertOptions
from tokml.core.writers import tokml

__all__ = ["tokml", "ConvertOptions", "__version__"]

"""Generator adapter implementations.

Importing this package registers every adapter with
:data:`herobg.core.generator_adapters.generator_registry`.
"""

from herobg.core.adapters.gemini import GeminiImageAdapter
from herobg.core.adapters.offline import OfflinePreviewAdapter

__all__ = ["GeminiImageAdapter", "OfflinePreviewAdapter"]

"""Per-page work that runs between route resolution and rendering.

- ``preload``: run every data-preload step on the matched chain
  concurrently and wait for all of them.
- ``aggregate_seo``: merge SEO metadata down the chain, most specific
  route first.
"""

from wren.pages.preload import preload
from wren.pages.seo import aggregate_seo

__all__ = ["aggregate_seo", "preload"]

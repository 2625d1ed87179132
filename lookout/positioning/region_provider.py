"""
lookout/positioning/region_provider.py

Region providers supply the region an operation should act on.
"""

from lookout.data_models.geometry import Region


class RegionProvider:
    """Provides a fixed region."""

    def __init__(self, region: Region | None = None) -> None:
        self._region = region

    def get_region(self) -> Region | None:
        return self._region


class NullRegionProvider(RegionProvider):
    """Provides the empty region."""

    def __init__(self) -> None:
        super().__init__(Region.EMPTY)

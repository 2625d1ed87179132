"""
lookout/sdk/driver.py

Abstract driver interface consumed by the sdk functions.
"""

from abc import ABC, abstractmethod

from lookout.data_models.geometry import Location, RectangleSize, Region


class AbstractDriver(ABC):
    """
    Window-level capabilities of an automation driver.

    Subclasses must implement:
    - is_native: whether the surface is a native app (not coordinate-addressable DOM)
    - get_window_rect() -> Region
    - set_window_rect(location, size) -> None
    - get_orientation() -> str

    Failed calls must raise DriverOperationError.
    """

    @property
    @abstractmethod
    def is_native(self) -> bool:
        ...

    @abstractmethod
    def get_window_rect(self) -> Region:
        """Return the outer window position and size."""
        ...

    @abstractmethod
    def set_window_rect(
        self,
        location: Location | None = None,
        size: RectangleSize | None = None,
    ) -> None:
        """
        Move and/or resize the outer window.

        Args:
            location: New window position, or None to keep it.
            size: New window size, or None to keep it.
        """
        ...

    @abstractmethod
    def get_orientation(self) -> str:
        """Return "portrait" or "landscape"."""
        ...

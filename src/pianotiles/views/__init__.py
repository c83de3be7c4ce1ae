"""Views subsystem — View protocol and the gameplay view."""

from pianotiles.views.base import View, ViewAction, ViewContext

__all__ = ["View", "ViewAction", "ViewContext"]

"""Pod watch domain."""

from kubik.controllers.pods.watch_controller import PodWatchController

__all__ = ["PodWatchController"]

"""Parsers for pod watch frames."""

from kubik.controllers.pods.parsers.event_parser import WatchEventParser

__all__ = ["WatchEventParser"]

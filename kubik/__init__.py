"""Kubik - terminal dashboard for Kubernetes pods and their logs."""

__version__ = "0.1.0"

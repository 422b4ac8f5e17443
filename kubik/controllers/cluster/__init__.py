"""Cluster access: connection profiles, request specs, client and authentication."""

from kubik.controllers.cluster.auth import CredentialsProvider, OAuthAuthenticator
from kubik.controllers.cluster.client import ClusterClient
from kubik.controllers.cluster.connection import ConnectionProfile, load_profile
from kubik.controllers.cluster.requests import Credentials, RequestSpec

__all__ = [
    "ClusterClient",
    "ConnectionProfile",
    "Credentials",
    "CredentialsProvider",
    "OAuthAuthenticator",
    "RequestSpec",
    "load_profile",
]

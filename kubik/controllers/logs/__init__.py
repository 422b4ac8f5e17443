"""Pod log domain."""

from kubik.controllers.logs.log_follower import FollowSession, LogFollower

__all__ = ["FollowSession", "LogFollower"]

from __future__ import annotations


class BoxTrackerError(Exception):
    """Invalid user input reaching a tracker mutator. The core functions never raise."""


class InvalidPoolError(BoxTrackerError, ValueError):
    pass


class InvalidScoreError(BoxTrackerError, ValueError):
    pass


class InvalidTeamsError(BoxTrackerError, ValueError):
    pass


class UnknownTeamError(BoxTrackerError, KeyError):
    pass

"""Error taxonomy shared by services, repositories and routers"""

from typing import List, Optional


class EventDeskError(Exception):
    """Base class for all EventDesk errors"""


class ValidationError(EventDeskError, ValueError):
    """Submitted or edited data failed validation.

    ``errors`` holds one entry per failed condition so callers can show every
    problem at once: ``{"field_id": <id or None>, "message": <text>}``.
    """

    def __init__(self, message: str, errors: Optional[List[dict]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or [{"field_id": None, "message": message}]


class NotFoundError(EventDeskError, LookupError):
    """A project (or other record) does not exist"""


class FetchError(EventDeskError):
    """The backing store could not be reached or rejected the operation"""


class AdmissionError(EventDeskError):
    """Registration is not accepted in the current admission state"""

    def __init__(self, state, message: str):
        super().__init__(message)
        self.state = state
        self.message = message

"""Domain errors raised by services; translated to HTTP responses in visitdesk.main."""


class VisitDeskError(Exception):
    status_code = 400

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class NotFoundError(VisitDeskError):
    """Visit or visitor id does not exist."""
    status_code = 404


class StateConflictError(VisitDeskError):
    """Expected, recoverable conflict (e.g. checking out a completed visit)."""
    status_code = 400

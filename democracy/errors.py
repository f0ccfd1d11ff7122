class AdvanceError(Exception):
    """Base class for failures raised while advancing the world."""


class AuthorizationError(AdvanceError):
    status = 401

    def __init__(self, message="Unauthorized", status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class CronMisconfiguredError(AuthorizationError):
    status = 500

    def __init__(self, message="Cron auth misconfigured"):
        super().__init__(message)


class StageProcessingError(AdvanceError):
    def __init__(self, stage, cause=None):
        super().__init__(f"Failed while processing {stage}: {cause}")
        self.stage = stage
        self.cause = cause


class StaleStateError(AdvanceError):
    """A conditional update matched no row; another run got there first."""


class BestEffortCleanupError(AdvanceError):
    pass

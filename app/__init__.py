"""Application/UI layer package."""

from .facade import JobBoardFacade, JobDetails

__all__ = ["JobBoardFacade", "JobDetails"]

from .job import JobAcceptedResponse, JobErrorRead, JobRead
from .report import DashboardRead, MessageResponse, ReportSubmission

__all__ = [
    "DashboardRead",
    "JobAcceptedResponse",
    "JobErrorRead",
    "JobRead",
    "MessageResponse",
    "ReportSubmission",
]

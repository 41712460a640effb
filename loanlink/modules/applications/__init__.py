# Applications module
from loanlink.modules.applications.models import ApplicationStatus, ApplicationStage, FeeStatus
from loanlink.modules.applications.services import ApplicationService

__all__ = ["ApplicationStatus", "ApplicationStage", "FeeStatus", "ApplicationService"]

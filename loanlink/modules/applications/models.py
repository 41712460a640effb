import enum


class ApplicationStatus(str, enum.Enum):
    """Loan application decision status"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class FeeStatus(str, enum.Enum):
    """Application fee payment status"""
    UNPAID = "unpaid"
    PAID = "paid"


class ApplicationStage(str, enum.Enum):
    """Processing stage set by loan managers"""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    VERIFIED = "verified"
    DISBURSED = "disbursed"
    CLOSED = "closed"

"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Category(str, Enum):
    COMPLAINT = "Complaint"
    FEATURE_REQUEST = "Feature Request"
    TECHNICAL_ISSUE = "Technical Issue"
    GENERAL_INQUIRY = "General Inquiry"
    BILLING = "Billing"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class Sentiment(str, Enum):
    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


class QueryStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


class ClassificationStage(str, Enum):
    """Steps a single classify call walks through, in order."""

    AWAITING_METHOD = "awaiting_method"
    VALIDATING_INPUT = "validating_input"
    CALLING_UPSTREAM = "calling_upstream"
    PARSING_RESPONSE = "parsing_response"

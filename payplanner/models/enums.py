"""
Enumerations shared by models, filters and request parsing
"""

import enum

class PaymentType(enum.Enum):
    """Income or expense"""
    Income = 0
    Expense = 1

class PaymentStatus(enum.Enum):
    """Payment settlement status"""
    Pending = 0
    Completed = 1
    Overdue = 2
    Processing = 3
    Cancelled = 4

class ClientCaseStatus(enum.Enum):
    """Lifecycle status of a client case"""
    Open = 0
    OnHold = 1
    Closed = 2

class UserActivityStatus(enum.Enum):
    """Outcome of a logged API call"""
    Info = 0
    Success = 1
    Warning = 2
    Failure = 3

"""Status package: enums and exceptions for reporting invalid input.

This package defines:
    - Status: a StrEnum of validation outcomes
    - STATUS_MESSAGE: default user-facing messages per status
    - BaseStatusException: base exception for status-driven error handling
    - ConstructionError and the other exceptions tagged with statuses
"""

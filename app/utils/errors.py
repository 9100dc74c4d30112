"""
Custom exception classes for better error handling
"""

from __future__ import annotations


class StudyMateError(Exception):
    """Base exception for StudyMate application"""
    pass


class ConfigurationError(StudyMateError):
    """Raised when configuration is invalid"""
    pass


class SessionNotFoundError(StudyMateError):
    """Raised when page session is not found"""
    pass


class InvalidTransitionError(StudyMateError):
    """Raised when an action is not allowed in the current page or wizard state"""
    pass


class WizardValidationError(StudyMateError):
    """Raised when a wizard field receives a value outside its allowed options"""
    pass


class CandidateNotFoundError(StudyMateError):
    """Raised when candidate is not found in the dashboard"""
    pass


class CandidateStatusError(StudyMateError):
    """Raised when a candidate in a terminal status is moved to another one"""
    pass


class AuthenticationError(StudyMateError):
    """Raised when the sign-in operation fails"""
    pass


class ProfileSaveError(StudyMateError):
    """Raised when the profile save operation fails"""
    pass

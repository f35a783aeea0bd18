"""
Custom exceptions for the inquiry router
"""


class InquiryRouterException(Exception):
    """Base exception for Inquiry Router"""
    pass


class TranslationException(InquiryRouterException):
    """Exception related to the translation API"""
    pass


class ValidationException(InquiryRouterException):
    """Exception related to invalid entity data"""
    pass

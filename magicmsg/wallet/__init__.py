from .messages import sign_message, verify_message

__all__ = [
    'sign_message',
    'verify_message',
]

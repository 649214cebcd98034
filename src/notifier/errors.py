# src/notifier/errors.py
"""
Error kinds raised while turning S3 upload records into Discord messages.

Callers branch on the class, never on the message text:

    ConfigurationError     - webhook URL missing; aborts the whole invocation
    KeyDecodeWarning       - object key not percent-decodable; logged, raw key used
    SerializationError     - payload could not be encoded as JSON
    TransportError         - the webhook could not be reached
    UnexpectedStatusError  - the webhook answered with something other than 204
"""


class NotifierError(Exception):
    kind = "notifier_error"


class ConfigurationError(NotifierError):
    kind = "configuration"


class KeyDecodeWarning(NotifierError, UserWarning):
    kind = "key_decode"


class SerializationError(NotifierError):
    kind = "serialization"


class TransportError(NotifierError):
    kind = "transport"


class UnexpectedStatusError(NotifierError):
    kind = "unexpected_status"

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Discord returned unexpected status {status_code}: {body}")

"""Error taxonomy shared by the relay services and routes"""


class VoiceRelayError(Exception):
    """Base error; ``status_code`` is the HTTP status reported to callers"""

    status_code = 500


class MissingField(VoiceRelayError):
    status_code = 400


class InvalidInput(VoiceRelayError):
    status_code = 400


class InvalidPayload(VoiceRelayError):
    status_code = 400


class ConfigurationError(VoiceRelayError):
    status_code = 500


class SynthesisFailed(VoiceRelayError):
    status_code = 502


class StorageFailed(VoiceRelayError):
    status_code = 502

from tripshared.middleware.request_id import request_id_middleware
from tripshared.middleware.error_handler import error_envelope_middleware

__all__ = ["request_id_middleware", "error_envelope_middleware"]

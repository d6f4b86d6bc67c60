class NewsdeskError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(NewsdeskError):
    status_code = 400
    default_message = "Invalid request body"


class AuthenticationError(NewsdeskError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentialsError(AuthenticationError):
    default_message = "Invalid credentials"


class InternalServiceError(NewsdeskError):
    pass


class ExternalServiceError(NewsdeskError):
    status_code = 502
    default_message = "Upstream service failure"


class NewsProviderError(ExternalServiceError):
    pass

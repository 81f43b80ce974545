from typing import Optional


class ApiError(Exception):
    """Transport failure or non-2xx answer from the API"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class LoginRequired(Exception):
    """An action needs a logged-in user and nobody is there to open the login prompt"""

"""Signup and login contracts."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel

from tasktrack.core.contracts import Contract, Text

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _lowercase(value: str) -> str:
    return value.lower()


Email = Annotated[
    str,
    AfterValidator(Text("Email", min_length=1, max_length=254, pattern=EMAIL_RE, pattern_message="Invalid email address")),
    AfterValidator(_lowercase),
]
# Passwords are taken verbatim; surrounding whitespace is significant.
Password = Annotated[str, AfterValidator(Text("Password", min_length=6, max_length=128, trim=False))]
LoginPassword = Annotated[str, AfterValidator(Text("Password", min_length=1, max_length=128, trim=False))]
DisplayName = Annotated[str, AfterValidator(Text("Name", min_length=1, max_length=100))]


class SignupRequest(BaseModel):
    """Account registration payload."""

    email: Email
    password: Password
    name: DisplayName


class LoginRequest(BaseModel):
    """Authentication request."""

    email: Email
    password: LoginPassword


signup_schema = Contract(SignupRequest)
login_schema = Contract(LoginRequest)

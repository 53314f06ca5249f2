from flask import current_app
from pydantic import ValidationError

from ..errors import EmailAlreadyRegistered, InvalidCredentials, InvalidJSON, PayloadValidationError
from ..models import User
from ..repositories import UserRepository
from ..schemas import Credentials, Registration


class AuthService:
    def __init__(self, session):
        self.users = UserRepository(session)

    def authenticate(self, payload):
        """Return the user matching the email/password in ``payload``.

        Any problem with the payload or the credentials is reported as
        ``InvalidCredentials`` so callers cannot tell which part was wrong.
        """
        if not isinstance(payload, dict):
            raise InvalidCredentials()
        try:
            creds = Credentials.model_validate(payload)
        except ValidationError:
            raise InvalidCredentials()
        user = self.users.find_by_email(creds.email.lower())
        if user is None or not user.check_password(creds.password):
            current_app.logger.warning("Failed login for email=%s", creds.email)
            raise InvalidCredentials()
        return user, creds.remember

    def register(self, payload):
        if not isinstance(payload, dict) or not payload:
            raise InvalidJSON()
        try:
            data = Registration.model_validate(payload)
        except ValidationError as exc:
            raise PayloadValidationError.from_pydantic(exc)
        if self.users.find_by_email(data.email):
            raise EmailAlreadyRegistered()
        user = User(email=data.email)
        user.set_password(data.password)
        self.users.add(user)
        current_app.logger.info("Registered user id=%s", user.id)
        return user

    def delete_user(self, email):
        """Remove a user and, through the cascade, all of their expenses."""
        user = self.users.find_by_email(email.lower())
        if user is None:
            return False
        self.users.delete(user)
        current_app.logger.info("Deleted user email=%s", email)
        return True

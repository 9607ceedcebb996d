"""Request dependencies that hand out the services built once in create_app."""

from fastapi import Request

from sitecms.config import Settings
from sitecms.services.credential_store import CredentialStore
from sitecms.services.token_service import TokenIssuer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer

"""Session token issuer: signed 24h JWTs and the cookie that carries them."""

from datetime import timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError
from starlette.responses import Response

from sitecms.errors import TokenExpired, TokenInvalidSignature, TokenMalformed
from sitecms.utils.helpers import utcnow

ALGORITHM = "HS256"


class TokenIssuer:
    def __init__(
        self,
        secret_key: str,
        *,
        issuer: str,
        audience: str,
        expire_minutes: int = 24 * 60,
        cookie_name: str = "token",
        secure_cookie: bool = False,
    ):
        self.secret_key = secret_key
        self.issuer = issuer
        self.audience = audience
        self.expires_in = timedelta(minutes=expire_minutes)
        self.cookie_name = cookie_name
        self.secure_cookie = secure_cookie

    def issue(self, user_id: int) -> str:
        issued_at = utcnow()
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(payload, self.secret_key, algorithm=ALGORITHM)

    def validate(self, token: str) -> int:
        try:
            jwt.get_unverified_header(token)
        except JWTError:
            raise TokenMalformed()

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError:
            raise TokenExpired()
        except (JWTClaimsError, JWTError):
            # wrong key, tampered payload, or foreign issuer/audience
            raise TokenInvalidSignature()

        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            raise TokenMalformed()

    def _cookie_attributes(self) -> dict:
        # set and clear must use the same attributes or the browser keeps a stale cookie
        return {
            "path": "/",
            "httponly": True,
            "secure": self.secure_cookie,
            "samesite": "strict",
        }

    def set_session_cookie(self, response: Response, token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            max_age=int(self.expires_in.total_seconds()),
            **self._cookie_attributes(),
        )

    def clear_session_cookie(self, response: Response) -> None:
        response.delete_cookie(key=self.cookie_name, **self._cookie_attributes())

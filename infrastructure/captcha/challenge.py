"""Challenge URLs for the reCAPTCHA widget.

The page embeds one of these (script src or noscript iframe). When the previous
attempt failed, passing its error code makes the widget show the reason.
"""

from urllib.parse import urlencode

from errors import ConfigurationError

CHALLENGE_HOST = "http://api.recaptcha.net"
CHALLENGE_HOST_SECURE = "https://api-secure.recaptcha.net"


def challenge_url(
    public_key: str,
    *,
    secure: bool,
    noscript: bool = False,
    error_code: str = "",
) -> str:
    if not public_key:
        raise ConfigurationError(
            "reCAPTCHA public key must be set", field="public_key"
        )

    host = CHALLENGE_HOST_SECURE if secure else CHALLENGE_HOST
    path = "/noscript" if noscript else "/challenge"
    params = {"k": public_key}
    if error_code:
        params["error"] = error_code
    return f"{host}{path}?{urlencode(params)}"

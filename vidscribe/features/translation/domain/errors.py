from typing import Optional


class EndpointError(Exception):
    """
    A single endpoint call failed (transport error, non-2xx, or `error` body).
    Handled inside the gateway, which moves on to the next endpoint.
    """

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.status_code = status_code

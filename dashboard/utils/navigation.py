from flask import abort, redirect


class FlaskRouter:
    """Router that ends the current request with a redirect.

    ``redirect`` raises, so nothing after it in the calling action runs.
    303 makes browsers follow a form POST with a GET.
    """

    def __init__(self, code: int = 303):
        self.code = code

    def redirect(self, path: str) -> None:
        abort(redirect(path, code=self.code))

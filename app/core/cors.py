"""
CORS middleware that answers successful preflights with 204 No Content.

Starlette's CORSMiddleware replies to an allowed preflight with
200 "OK"; the web client expects an empty 204. Rejected preflights
(400) are passed through unchanged.
"""

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response

# Body headers don't apply to an empty 204
_BODY_HEADERS = {"content-length", "content-type"}


class NoContentPreflightCORSMiddleware(CORSMiddleware):
    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=204, headers=headers)

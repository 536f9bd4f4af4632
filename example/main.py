import logging
import sys

import shuttle


class BearerAuthMiddleware(shuttle.Middleware):
    __slots__ = ("__token",)

    def __init__(self, token: str) -> None:
        self.__token = token

    def process(self, request: shuttle.Request, next: shuttle.NextFunc) -> shuttle.Response:
        if request.has_header(shuttle.Header.AUTHORIZATION):
            return next(request)
        return next(request.with_header(shuttle.Header.AUTHORIZATION, f"Bearer {self.__token}"))


def main() -> None:
    logging.basicConfig(level="INFO")

    client = shuttle.Client(
        base_url="https://httpbin.org",
        headers={"Accept": "application/json"},
        middleware=[
            shuttle.LoggingMiddleware(),
            shuttle.RetryMiddleware(attempts_count=3),
            BearerAuthMiddleware("secret"),
        ],
        debug="--debug" in sys.argv,
    )

    response = client.get("/bearer")
    print(response.status, response.json())

    response = client.post("/post", shuttle.JsonBody({"hello": "world"}))
    print(response.status, response.json()["json"])


if __name__ == "__main__":
    main()

from typing import Callable, Iterable, NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Streamed response from an HTTP fetch operation.

    `body` yields raw byte chunks lazily; `close` releases the underlying
    connection. Use it as a context manager so the body is released on every
    exit path.
    """
    status_code: int
    body: Iterable[bytes]
    content_type: Optional[str] = None
    close: Callable[[], None] = lambda: None

    def __enter__(self) -> "HttpResponse":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

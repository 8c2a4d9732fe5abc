"""HTTP middleware applied in blogsearch.main (first added = outermost)."""

from blogsearch.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]

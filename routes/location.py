from fastapi import Request


def created_location(request: Request, obj_id: int) -> str:
    """Absolute URL of the by-id endpoint under the collection that was POSTed to."""
    path = f"{request.url.path.rstrip('/')}/{obj_id}"
    return str(request.url.replace(path=path, query=""))

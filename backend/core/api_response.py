def success(data=None):
    return {
        "success": True,
        "data": data,
    }


def error(code, message):
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
        },
    }


def error_from(exc):
    """
    Build an error payload from a PlaybackError, using its ``code``.
    """
    return error(getattr(exc, "code", "error"), str(exc))

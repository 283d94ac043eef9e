from response_service.recording.recorder import ResponseRecorder, resolve_answers

__all__ = [
    "resolve_answers",
    "ResponseRecorder",
]

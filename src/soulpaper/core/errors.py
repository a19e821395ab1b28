"""Exception taxonomy for wallpaper generation.

Two errors are local to a single attempt and never reach the user on their
own; one error describes the whole batch and is the only generation error the
UI ever shows.

- :class:`NoImageDataError` - the remote call succeeded but no response part
  carried image bytes.
- :class:`RemoteCallFailedError` - the transport or API call itself failed
  (network, auth, quota, missing credential).
- :class:`BatchGenerationFailedError` - every attempt in a batch failed.
"""

BATCH_FAILURE_MESSAGE = "이미지 생성에 실패했습니다. 잠시 후 다시 시도해주세요."


class SoulpaperError(Exception):
    """Base class for all SoulPaper errors."""

    pass


class NoImageDataError(SoulpaperError):
    """Remote response contained no inline image data."""

    def __init__(self, message: str = "No image data found in response") -> None:
        super().__init__(message)


class RemoteCallFailedError(SoulpaperError):
    """The remote generation call raised before returning a response."""

    pass


class BatchGenerationFailedError(SoulpaperError):
    """All attempts in a batch failed.

    The message is user-facing. Individual attempt errors are only logged.

    Attributes:
        attempts: Number of attempts that were dispatched
    """

    def __init__(self, attempts: int, message: str = BATCH_FAILURE_MESSAGE) -> None:
        super().__init__(message)
        self.attempts = attempts
